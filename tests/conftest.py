"""Pytest configuration and shared fixtures for all tests.

This module provides function-scoped fixtures for:
- Settings and signing configuration with a test secret
- Credential manager and claims issuer instances
- An in-memory donor repository
- Valid raw donor input and ready-made donor records
"""

import uuid
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from app.core.security import SigningConfig
from app.core.settings import Settings
from app.features.donors.claims import ClaimsIssuer
from app.features.donors.credentials import CredentialManager
from app.features.donors.models import Donor
from app.features.donors.validation import validate_and_normalize
from tests.utils.fakes import InMemoryDonorRepository

TEST_SECRET_KEY = "test-secret-key-for-donor-tokens"
FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)
DEFAULT_PASSWORD = "correct horse battery staple"


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings with a signing secret and testing mode enabled."""
    return Settings(secret_key=TEST_SECRET_KEY, testing=True)


@pytest.fixture
def signing_config(test_settings: Settings) -> SigningConfig:
    return SigningConfig.from_settings(test_settings)


@pytest.fixture
def claims_issuer(signing_config: SigningConfig) -> ClaimsIssuer:
    return ClaimsIssuer(signing_config)


@pytest.fixture
def credential_manager(test_settings: Settings) -> CredentialManager:
    return CredentialManager.from_settings(test_settings)


@pytest.fixture
def donor_repository() -> InMemoryDonorRepository:
    return InMemoryDonorRepository()


@pytest.fixture
def valid_donor_fields() -> dict[str, Any]:
    """Raw registration input that passes every field rule."""
    return {
        "curp": "GODE561231HDFRRN09",
        "first_name": "Elena",
        "last_name": "González Durán",
        "date_of_birth": "1956-12-31",
        "gender": "Female",
        "email": "elena.gonzalez@example.com",
        "phone_number": "5512345678",
        "place_of_residence": "Ciudad de México",
        "clave_hospital": "HGZ-32",
        "blood_type": "O+",
        "certified_file": "uploads/certificates/elena.pdf",
        "form_answers": {"recent_tattoo": False, "weight_kg": 62},
        "status": "active",
    }


@pytest.fixture
def make_donor(
    valid_donor_fields: dict[str, Any],
    credential_manager: CredentialManager,
) -> Callable[..., Donor]:
    """Build an unsaved donor with an id and a password secret.

    Keyword arguments override the valid raw fields.
    """

    def _make(password: str | None = DEFAULT_PASSWORD, **overrides: Any) -> Donor:
        donor = validate_and_normalize({**valid_donor_fields, **overrides})
        donor.id = uuid.uuid4()
        if password is not None:
            credential_manager.set_secret(donor, password)
        return donor

    return _make


@pytest.fixture
def stored_donor(
    make_donor: Callable[..., Donor],
    donor_repository: InMemoryDonorRepository,
) -> Callable[..., Awaitable[Donor]]:
    """Build a donor and add it to the in-memory repository."""

    async def _store(**overrides: Any) -> Donor:
        return await donor_repository.add(make_donor(**overrides))

    return _store
