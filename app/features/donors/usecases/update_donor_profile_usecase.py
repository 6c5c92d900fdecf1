"""Use case for updating a donor's profile."""

import asyncio
import logging
from uuid import UUID

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.credentials import CredentialManager
from app.features.donors.dtos import DonorFullView, UpdateDonorRequest
from app.features.donors.errors import (
    CredentialError,
    DonorNotFoundError,
    FieldError,
    ValidationError,
)
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.validation import check_uniqueness, normalize_fields

logger = logging.getLogger(__name__)


class UpdateDonorProfileUseCaseImpl:
    """Implementation of the update donor profile use case."""

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
            claims_issuer: Service for shaping the response
        """
        self.repository = repository
        self.credential_manager = credential_manager
        self.claims_issuer = claims_issuer

    async def execute(
        self, donor_id: UUID, request: UpdateDonorRequest
    ) -> DonorFullView:
        """Re-validate and apply the fields set on ``request``.

        Args:
            donor_id: The donor to update
            request: Fields to change; unset fields are left alone

        Returns:
            The updated donor's full view

        Raises:
            DonorNotFoundError: If no donor has this id
            ValidationError: If any supplied field is invalid
            UniquenessConflictError: If the new CURP or email belongs to
                another donor
        """
        donor = await self.repository.get_by_id(donor_id)
        if donor is None:
            raise DonorNotFoundError(donor_id)

        changes = request.model_dump(exclude_unset=True)
        password_supplied = "password" in changes
        password = changes.pop("password", None)

        errors: list[FieldError] = []
        fields = {}
        try:
            fields = normalize_fields(changes, partial=True)
        except ValidationError as e:
            errors.extend(e.errors)

        if password_supplied and not password:
            errors.extend(CredentialError().errors)

        if errors:
            raise ValidationError(errors)

        await check_uniqueness(fields, self.repository, exclude_id=donor.id)

        for name, value in fields.items():
            setattr(donor, name, value)

        if password_supplied:
            await asyncio.to_thread(self.credential_manager.set_secret, donor, password)

        donor = await self.repository.save(donor)
        logger.info(
            "Updated donor %s fields: %s",
            donor.id,
            ", ".join(sorted(fields)) + (" (password)" if password_supplied else ""),
        )
        return self.claims_issuer.to_full_view(donor)
