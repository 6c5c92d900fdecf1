"""Use case for resolving the donor behind a session token."""

from uuid import UUID

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.dtos import DonorFullView
from app.features.donors.errors import InvalidTokenError
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.schemas import DonorStatus


class GetCurrentDonorUseCaseImpl:
    """Implementation of the get current donor use case."""

    def __init__(self, repository: DonorRepository, claims_issuer: ClaimsIssuer):
        self.repository = repository
        self.claims_issuer = claims_issuer

    async def execute(self, token: str) -> DonorFullView:
        """Validate ``token`` and return the owner's full view.

        Raises:
            InvalidTokenError: If the token is invalid or its donor no longer
                exists or was deleted
        """
        claims = self.claims_issuer.decode_token(token)

        try:
            donor_id = UUID(claims.sub)
        except ValueError as e:
            raise InvalidTokenError("Invalid donor ID format") from e

        donor = await self.repository.get_by_id(donor_id)
        if donor is None or donor.status == DonorStatus.DELETED:
            raise InvalidTokenError("Donor not found")

        return self.claims_issuer.to_full_view(donor)
