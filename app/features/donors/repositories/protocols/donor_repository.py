"""Protocol definition for donor repository operations."""

from typing import Protocol
from uuid import UUID

from app.features.donors.models import Donor
from app.features.donors.schemas import DonorStatus


class DonorRepository(Protocol):
    """Protocol for donor persistence.

    Implementations stamp ``id``, ``created_at`` and ``updated_at`` and must
    reject duplicate ``curp`` or ``email`` values atomically by raising
    ``UniquenessConflictError``.
    """

    async def add(self, donor: Donor) -> Donor:
        """Persist a new donor and return it with storage-assigned fields."""
        ...

    async def save(self, donor: Donor) -> Donor:
        """Persist changes to an existing donor."""
        ...

    async def get_by_id(self, donor_id: UUID) -> Donor | None:
        """Find a donor by identifier."""
        ...

    async def get_by_email(self, email: str) -> Donor | None:
        """Find a donor by normalized email."""
        ...

    async def get_by_curp(self, curp: str) -> Donor | None:
        """Find a donor by normalized CURP."""
        ...

    async def list_by_blood_type(
        self, blood_type: str, status: DonorStatus = DonorStatus.ACTIVE
    ) -> list[Donor]:
        """List donors with the given blood type and status."""
        ...
