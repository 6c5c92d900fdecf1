"""SQLAlchemy implementation of the donor repository."""

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.donors.errors import UniquenessConflictError
from app.features.donors.models import (
    CURP_UNIQUE_CONSTRAINT,
    EMAIL_UNIQUE_INDEX,
    Donor,
)
from app.features.donors.schemas import DonorStatus

logger = logging.getLogger(__name__)

UNIQUE_CONSTRAINT_FIELDS = {
    CURP_UNIQUE_CONSTRAINT: "curp",
    EMAIL_UNIQUE_INDEX: "email",
}


def _conflicting_fields(error: IntegrityError) -> list[str]:
    """Map the violated unique constraint back to its donor field.

    The asyncpg adapter chains the driver error, which carries
    ``constraint_name``, as the cause of ``error.orig``.
    """
    driver_error = getattr(error.orig, "__cause__", None) or error.orig
    constraint = getattr(driver_error, "constraint_name", None)
    field = UNIQUE_CONSTRAINT_FIELDS.get(constraint)
    return [field] if field else []


class SqlAlchemyDonorRepository:
    """Donor repository backed by an async SQLAlchemy session factory."""

    def __init__(
        self,
        get_db_session: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ):
        """Initialize the repository.

        Args:
            get_db_session: Function to get database session
        """
        self.get_db_session = get_db_session

    async def add(self, donor: Donor) -> Donor:
        async with self.get_db_session() as session:
            session.add(donor)
            await self._commit(session)
            await session.refresh(donor)
            return donor

    async def save(self, donor: Donor) -> Donor:
        async with self.get_db_session() as session:
            merged = await session.merge(donor)
            await self._commit(session)
            await session.refresh(merged)
            return merged

    async def get_by_id(self, donor_id: UUID) -> Donor | None:
        return await self._get_one(Donor.id == donor_id)

    async def get_by_email(self, email: str) -> Donor | None:
        return await self._get_one(Donor.email == email)

    async def get_by_curp(self, curp: str) -> Donor | None:
        return await self._get_one(Donor.curp == curp)

    async def list_by_blood_type(
        self, blood_type: str, status: DonorStatus = DonorStatus.ACTIVE
    ) -> list[Donor]:
        async with self.get_db_session() as session:
            result = await session.execute(
                select(Donor)
                .where(Donor.blood_type == blood_type, Donor.status == status)
                .order_by(Donor.created_at)
            )
            return list(result.scalars().all())

    async def _get_one(self, condition) -> Donor | None:
        async with self.get_db_session() as session:
            result = await session.execute(select(Donor).where(condition))
            return result.scalar_one_or_none()

    async def _commit(self, session: AsyncSession) -> None:
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            fields = _conflicting_fields(e)
            if not fields:
                raise
            logger.warning("Unique constraint violated on %s", ", ".join(fields))
            raise UniquenessConflictError.for_fields(fields) from e
