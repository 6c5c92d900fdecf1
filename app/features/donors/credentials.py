"""Password secrets for donor records.

A donor password is stored as a PBKDF2-HMAC hash plus the random salt it was
derived with, both hex encoded. The default parameters (SHA-512, 10,000
iterations, 512-byte key, 16-byte salt) match the hashes already stored by
the donor registry, so existing credentials keep verifying.
"""

import hashlib
import hmac
import secrets

from app.core.security import ConfigurationError
from app.core.settings import Settings, get_settings
from app.features.donors.errors import CredentialError
from app.features.donors.models import Donor

MIN_ITERATIONS = 10_000
MIN_KEY_LENGTH = 64
MIN_SALT_BYTES = 16
ALLOWED_DIGESTS = frozenset({"sha256", "sha384", "sha512"})


class CredentialManager:
    """Derives and verifies donor password secrets."""

    def __init__(
        self,
        iterations: int = MIN_ITERATIONS,
        key_length: int = 512,
        salt_bytes: int = MIN_SALT_BYTES,
        digest: str = "sha512",
    ):
        """Initialize the manager.

        Args:
            iterations: PBKDF2 iteration count
            key_length: Derived key length in bytes
            salt_bytes: Bytes of entropy in each generated salt
            digest: SHA-2 family HMAC digest name

        Raises:
            ConfigurationError: If any parameter is weaker than the minimums.
        """
        digest = digest.lower()
        if iterations < MIN_ITERATIONS:
            raise ConfigurationError(
                f"PBKDF2 iterations must be at least {MIN_ITERATIONS}"
            )
        if key_length < MIN_KEY_LENGTH:
            raise ConfigurationError(
                f"Derived key length must be at least {MIN_KEY_LENGTH} bytes"
            )
        if salt_bytes < MIN_SALT_BYTES:
            raise ConfigurationError(f"Salt must be at least {MIN_SALT_BYTES} bytes")
        if digest not in ALLOWED_DIGESTS:
            raise ConfigurationError(f"Unsupported PBKDF2 digest '{digest}'")

        self.iterations = iterations
        self.key_length = key_length
        self.salt_bytes = salt_bytes
        self.digest = digest

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "CredentialManager":
        settings = settings or get_settings()
        return cls(
            iterations=settings.password_hash_iterations,
            key_length=settings.password_hash_length,
            salt_bytes=settings.password_salt_bytes,
            digest=settings.password_hash_digest,
        )

    def _derive(self, password: str, salt: str) -> str:
        return hashlib.pbkdf2_hmac(
            self.digest,
            password.encode("utf-8"),
            salt.encode("utf-8"),
            self.iterations,
            dklen=self.key_length,
        ).hex()

    def set_secret(self, identity: Donor, password: str | None) -> None:
        """Replace the donor's salt and hash with ones derived from ``password``.

        Raises:
            CredentialError: If the password is missing or empty.
        """
        if not password:
            raise CredentialError()

        salt = secrets.token_hex(self.salt_bytes)
        secret_hash = self._derive(password, salt)

        identity.secret_salt = salt
        identity.secret_hash = secret_hash

    def verify_secret(self, identity: Donor, password: str | None) -> bool:
        """Check ``password`` against the donor's stored secret.

        Returns False when no secret has been set yet.
        """
        if not password or not identity.secret_salt or not identity.secret_hash:
            return False

        candidate = self._derive(password, identity.secret_salt)
        return hmac.compare_digest(candidate, identity.secret_hash)
