"""Application settings and configuration."""

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    debug: bool = Field(default=False, description="Debug mode")
    testing: bool = Field(default=False, description="Testing mode")

    # Token signing
    secret_key: str | None = Field(
        default=None,
        description="Shared secret used to sign donor session tokens",
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    donor_token_expire_days: int = Field(
        default=60, description="Donor session token lifetime in days"
    )

    # Password hashing (PBKDF2)
    password_hash_iterations: int = Field(
        default=10_000, description="PBKDF2 iteration count"
    )
    password_hash_length: int = Field(
        default=512, description="Derived key length in bytes"
    )
    password_salt_bytes: int = Field(
        default=16, description="Random salt length in bytes"
    )
    password_hash_digest: str = Field(
        default="sha512", description="PBKDF2 HMAC digest"
    )

    # PostgreSQL Database
    postgres_user: str = Field(default="admin", description="PostgreSQL user")
    postgres_password: str = Field(
        default="supersecretpassword", description="PostgreSQL password"
    )
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="donors_db", description="PostgreSQL database name")
    test_postgres_db: str = Field(
        default="donors_db_test", description="PostgreSQL test database name"
    )

    # Database URL (computed property)
    @property
    def database_url(self) -> str:
        """Construct database URL from individual components."""
        db_name = self.test_postgres_db if self.testing else self.postgres_db
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{db_name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
