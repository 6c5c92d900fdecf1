"""Session tokens and outward-facing projections of a donor."""

import math
from collections.abc import Callable
from datetime import UTC, datetime

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from app.core.security import HMAC_ALGORITHMS, ConfigurationError, SigningConfig
from app.features.donors.dtos import (
    AuthResponse,
    DonorClaims,
    DonorFullView,
    DonorPublicView,
)
from app.features.donors.errors import InvalidTokenError
from app.features.donors.models import Donor
from app.features.donors.schemas import DONOR_ROLE

SECONDS_PER_DAY = 86_400


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require_saved(identity: Donor, action: str) -> None:
    if identity.id is None:
        raise ValueError(f"Cannot {action} a donor without an id")


class ClaimsIssuer:
    """Mints donor tokens and shapes donor records for responses.

    ``to_public_view`` is safe for any caller. ``to_full_view`` exposes
    personal data and is meant for the donor themself or an administrator;
    choosing between them is up to the caller.
    """

    def __init__(
        self,
        config: SigningConfig,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the issuer.

        Args:
            config: Signing secret and algorithm, loaded once at startup
            clock: Source of the issuance time, defaults to UTC now

        Raises:
            ConfigurationError: If the signing configuration is unusable.
        """
        if not config.secret_key:
            raise ConfigurationError("Token signing secret is empty")
        if config.algorithm not in HMAC_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported token algorithm '{config.algorithm}'"
            )
        self.config = config
        self.clock = clock or _utcnow

    def build_claims(
        self, identity: Donor, issued_at: datetime | None = None
    ) -> DonorClaims:
        """Claims for ``identity``, expiring ``token_expire_days`` after issuance."""
        _require_saved(identity, "issue a token for")

        issued_at = issued_at or self.clock()
        expires_at = (
            math.floor(issued_at.timestamp())
            + self.config.token_expire_days * SECONDS_PER_DAY
        )
        return DonorClaims(
            sub=str(identity.id),
            email=identity.email,
            role=DONOR_ROLE,
            exp=expires_at,
        )

    def mint_token(self, identity: Donor, issued_at: datetime | None = None) -> str:
        """Create a signed bearer token for the donor."""
        claims = self.build_claims(identity, issued_at)
        return jwt.encode(
            claims.model_dump(),
            self.config.secret_key,
            algorithm=self.config.algorithm,
        )

    def decode_token(self, token: str) -> DonorClaims:
        """Verify a donor token's signature, expiry and role.

        Raises:
            InvalidTokenError: If the token is malformed, forged, expired or
                not a donor token.
        """
        try:
            payload = jwt.decode(
                token, self.config.secret_key, algorithms=[self.config.algorithm]
            )
        except JWTError as e:
            raise InvalidTokenError() from e

        try:
            claims = DonorClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidTokenError("Token is missing required claims") from e

        if claims.role != DONOR_ROLE:
            raise InvalidTokenError("Token was not issued to a donor")

        return claims

    def to_auth_response(self, identity: Donor) -> AuthResponse:
        return AuthResponse(email=identity.email, token=self.mint_token(identity))

    def to_public_view(self, identity: Donor) -> DonorPublicView:
        """Project a saved donor onto its public fields."""
        _require_saved(identity, "project")
        return DonorPublicView.model_validate(identity, from_attributes=True)

    def to_full_view(self, identity: Donor) -> DonorFullView:
        _require_saved(identity, "project")
        return DonorFullView.model_validate(identity, from_attributes=True)
