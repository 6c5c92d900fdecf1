"""Use case for reading a single donor."""

from uuid import UUID

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.dtos import DonorFullView, DonorPublicView
from app.features.donors.errors import DonorNotFoundError
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.schemas import DonorView


class GetDonorUseCaseImpl:
    """Implementation of the get donor use case."""

    def __init__(self, repository: DonorRepository, claims_issuer: ClaimsIssuer):
        self.repository = repository
        self.claims_issuer = claims_issuer

    async def execute(
        self, donor_id: UUID, view: DonorView = DonorView.PUBLIC
    ) -> DonorPublicView | DonorFullView:
        """Return the requested projection of a donor.

        The caller decides which ``view`` the requester may see.

        Raises:
            DonorNotFoundError: If no donor has this id
        """
        donor = await self.repository.get_by_id(donor_id)
        if donor is None:
            raise DonorNotFoundError(donor_id)

        if view is DonorView.FULL:
            return self.claims_issuer.to_full_view(donor)
        return self.claims_issuer.to_public_view(donor)
