"""Token signing configuration."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from app.core.settings import Settings, get_settings

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class ConfigurationError(RuntimeError):
    """Raised when process-wide security configuration is missing or unsafe."""


class SigningConfig(BaseModel):
    """Shared secret and algorithm used to sign donor tokens.

    Built once at process start and read-only afterwards.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    secret_key: str
    algorithm: str = "HS256"
    token_expire_days: int = 60

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SigningConfig":
        """Build the signing configuration, failing fast on unusable values.

        Raises:
            ConfigurationError: If the secret is missing or the algorithm is
                not an HMAC-family algorithm.
        """
        settings = settings or get_settings()

        if not settings.secret_key:
            raise ConfigurationError("SECRET_KEY is not configured")

        algorithm = settings.algorithm.upper()
        if algorithm not in HMAC_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported token algorithm '{settings.algorithm}', "
                f"expected one of {sorted(HMAC_ALGORITHMS)}"
            )

        if settings.donor_token_expire_days <= 0:
            raise ConfigurationError("DONOR_TOKEN_EXPIRE_DAYS must be positive")

        return cls(
            secret_key=settings.secret_key,
            algorithm=algorithm,
            token_expire_days=settings.donor_token_expire_days,
        )
