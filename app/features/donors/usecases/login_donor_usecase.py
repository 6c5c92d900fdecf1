"""Use case for donor login and token generation."""

import asyncio
import logging

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.credentials import CredentialManager
from app.features.donors.dtos import AuthResponse
from app.features.donors.errors import AccountDeletedError, InvalidCredentialsError
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.schemas import DonorStatus
from app.features.donors.validation import normalize_email

logger = logging.getLogger(__name__)


class LoginDonorUseCaseImpl:
    """Implementation of the donor login use case."""

    def __init__(
        self,
        repository: DonorRepository,
        credential_manager: CredentialManager,
        claims_issuer: ClaimsIssuer,
    ):
        self.repository = repository
        self.credential_manager = credential_manager
        self.claims_issuer = claims_issuer

    async def execute(self, email: str, password: str) -> AuthResponse:
        """Authenticate a donor and return a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountDeletedError: The donor record has been deleted
        """
        donor = await self.repository.get_by_email(normalize_email(email))

        if donor is None or not await asyncio.to_thread(
            self.credential_manager.verify_secret, donor, password
        ):
            logger.warning("Failed donor login attempt")
            raise InvalidCredentialsError()

        if donor.status == DonorStatus.DELETED:
            logger.warning("Login attempt for deleted donor %s", donor.id)
            raise AccountDeletedError()

        return self.claims_issuer.to_auth_response(donor)
