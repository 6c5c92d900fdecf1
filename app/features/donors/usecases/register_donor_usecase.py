"""Use case for registering a new donor."""

import asyncio
import logging

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.credentials import CredentialManager
from app.features.donors.dtos import AuthResponse, RegisterDonorRequest
from app.features.donors.errors import (
    CredentialError,
    FieldError,
    UniquenessConflictError,
    ValidationError,
)
from app.features.donors.models import Donor
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.schemas import DonorStatus
from app.features.donors.validation import check_uniqueness, validate_and_normalize

logger = logging.getLogger(__name__)


class RegisterDonorUseCaseImpl:
    """Implementation of the register donor use case."""

    def __init__(
        self,
        repository: DonorRepository,
        credential_manager: CredentialManager,
        claims_issuer: ClaimsIssuer,
    ):
        """Initialize the use case with dependencies.

        Args:
            repository: Store for donor records
            credential_manager: Service for deriving password secrets
            claims_issuer: Service for minting donor tokens
        """
        self.repository = repository
        self.credential_manager = credential_manager
        self.claims_issuer = claims_issuer

    async def execute(self, request: RegisterDonorRequest) -> AuthResponse:
        """Validate, secure and persist a new donor.

        Args:
            request: Raw registration fields and password

        Returns:
            The donor's email and a freshly minted token

        Raises:
            ValidationError: If any field or the password is invalid
            UniquenessConflictError: If the CURP or email is already registered
        """
        raw = request.model_dump(exclude={"password"})
        if raw.get("status") is None:
            raw["status"] = DonorStatus.ACTIVE.value

        errors: list[FieldError] = []
        donor: Donor | None = None
        try:
            donor = validate_and_normalize(raw)
        except ValidationError as e:
            errors.extend(e.errors)

        if not request.password:
            errors.extend(CredentialError().errors)

        if errors or donor is None:
            raise ValidationError(errors)

        try:
            await check_uniqueness(
                {"curp": donor.curp, "email": donor.email}, self.repository
            )
        except UniquenessConflictError as e:
            logger.warning(
                "Registration rejected, already in use: %s", ", ".join(e.fields)
            )
            raise

        await asyncio.to_thread(
            self.credential_manager.set_secret, donor, request.password
        )
        donor = await self.repository.add(donor)

        logger.info("Registered donor %s", donor.id)
        return self.claims_issuer.to_auth_response(donor)
