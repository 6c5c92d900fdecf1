"""Factories wiring donor use cases to their collaborators.

Signing and hashing configuration is read once from settings and shared by
every use case built here.
"""

from functools import lru_cache

from app.core.security import SigningConfig
from app.db.postgres.session import get_db_session
from app.features.donors.claims import ClaimsIssuer
from app.features.donors.credentials import CredentialManager
from app.features.donors.repositories import SqlAlchemyDonorRepository
from app.features.donors.usecases import (
    ChangeDonorStatusUseCaseImpl,
    FindDonorsByBloodTypeUseCaseImpl,
    GetCurrentDonorUseCaseImpl,
    GetDonorUseCaseImpl,
    LoginDonorUseCaseImpl,
    RegisterDonorUseCaseImpl,
    UpdateDonorProfileUseCaseImpl,
)


@lru_cache
def get_claims_issuer() -> ClaimsIssuer:
    """Get the process-wide claims issuer."""
    return ClaimsIssuer(SigningConfig.from_settings())


@lru_cache
def get_credential_manager() -> CredentialManager:
    """Get the process-wide credential manager."""
    return CredentialManager.from_settings()


def get_donor_repository() -> SqlAlchemyDonorRepository:
    return SqlAlchemyDonorRepository(get_db_session=get_db_session)


def get_register_donor_use_case() -> RegisterDonorUseCaseImpl:
    return RegisterDonorUseCaseImpl(
        repository=get_donor_repository(),
        credential_manager=get_credential_manager(),
        claims_issuer=get_claims_issuer(),
    )


def get_login_donor_use_case() -> LoginDonorUseCaseImpl:
    return LoginDonorUseCaseImpl(
        repository=get_donor_repository(),
        credential_manager=get_credential_manager(),
        claims_issuer=get_claims_issuer(),
    )


def get_get_donor_use_case() -> GetDonorUseCaseImpl:
    return GetDonorUseCaseImpl(
        repository=get_donor_repository(),
        claims_issuer=get_claims_issuer(),
    )


def get_get_current_donor_use_case() -> GetCurrentDonorUseCaseImpl:
    return GetCurrentDonorUseCaseImpl(
        repository=get_donor_repository(),
        claims_issuer=get_claims_issuer(),
    )


def get_update_donor_profile_use_case() -> UpdateDonorProfileUseCaseImpl:
    return UpdateDonorProfileUseCaseImpl(
        repository=get_donor_repository(),
        credential_manager=get_credential_manager(),
        claims_issuer=get_claims_issuer(),
    )


def get_change_donor_status_use_case() -> ChangeDonorStatusUseCaseImpl:
    return ChangeDonorStatusUseCaseImpl(
        repository=get_donor_repository(),
        claims_issuer=get_claims_issuer(),
    )


def get_find_donors_by_blood_type_use_case() -> FindDonorsByBloodTypeUseCaseImpl:
    return FindDonorsByBloodTypeUseCaseImpl(
        repository=get_donor_repository(),
        claims_issuer=get_claims_issuer(),
    )
