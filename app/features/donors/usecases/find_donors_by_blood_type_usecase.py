"""Use case for listing active donors of a blood type."""

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.dtos import DonorPublicView
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.schemas import DonorStatus
from app.features.donors.validation import RULES_BY_NAME


class FindDonorsByBloodTypeUseCaseImpl:
    """Implementation of the find donors by blood type use case."""

    def __init__(self, repository: DonorRepository, claims_issuer: ClaimsIssuer):
        self.repository = repository
        self.claims_issuer = claims_issuer

    async def execute(self, blood_type: str) -> list[DonorPublicView]:
        """Return public views of active donors with ``blood_type``.

        Raises:
            ValidationError: If ``blood_type`` is missing or not a valid type
        """
        normalized = RULES_BY_NAME["blood_type"].apply(blood_type)
        donors = await self.repository.list_by_blood_type(
            normalized, DonorStatus.ACTIVE
        )
        return [self.claims_issuer.to_public_view(donor) for donor in donors]
