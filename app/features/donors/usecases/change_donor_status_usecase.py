"""Use case for moving a donor through its lifecycle."""

import logging
from uuid import UUID

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.dtos import DonorFullView
from app.features.donors.errors import DonorNotFoundError
from app.features.donors.lifecycle import change_status
from app.features.donors.repositories.protocols import DonorRepository

logger = logging.getLogger(__name__)


class ChangeDonorStatusUseCaseImpl:
    """Implementation of the change donor status use case."""

    def __init__(self, repository: DonorRepository, claims_issuer: ClaimsIssuer):
        self.repository = repository
        self.claims_issuer = claims_issuer

    async def execute(self, donor_id: UUID, status: str) -> DonorFullView:
        """Apply a status transition.

        Raises:
            DonorNotFoundError: If no donor has this id
            ValidationError: If ``status`` is not a known value
            InvalidStatusTransitionError: If the transition is not allowed
        """
        donor = await self.repository.get_by_id(donor_id)
        if donor is None:
            raise DonorNotFoundError(donor_id)

        previous = donor.status
        if change_status(donor, status):
            donor = await self.repository.save(donor)
            logger.info(
                "Donor %s status changed from %s to %s",
                donor.id,
                previous.value,
                donor.status.value,
            )

        return self.claims_issuer.to_full_view(donor)
