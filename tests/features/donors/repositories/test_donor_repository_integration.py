"""Integration tests for SqlAlchemyDonorRepository.

These need a running PostgreSQL server reachable with the configured
``POSTGRES_*`` settings. Run them with ``pytest -m integration``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.settings import Settings
from app.features.donors.errors import UniquenessConflictError
from app.features.donors.repositories import SqlAlchemyDonorRepository
from app.features.donors.schemas import DonorStatus
from tests.utils.database import (
    clear_all_tables,
    create_all_tables,
    create_test_database,
)

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def async_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine bound to a test database with the donor table."""
    await create_test_database(test_settings)
    engine = create_async_engine(test_settings.database_url, echo=False)
    await create_all_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await clear_all_tables(conn)
    await engine.dispose()


@pytest.fixture
def repository(async_engine: AsyncEngine) -> SqlAlchemyDonorRepository:
    session_maker = async_sessionmaker(
        bind=async_engine, class_=AsyncSession, expire_on_commit=False
    )

    @asynccontextmanager
    async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    return SqlAlchemyDonorRepository(get_db_session=get_db_session)


class TestSqlAlchemyDonorRepository:
    """Test suite for the PostgreSQL donor repository."""

    async def test_add_and_fetch(self, repository: SqlAlchemyDonorRepository, make_donor):
        # Arrange
        donor = make_donor()

        # Act
        await repository.add(donor)
        by_email = await repository.get_by_email(donor.email)
        by_curp = await repository.get_by_curp(donor.curp)
        by_id = await repository.get_by_id(donor.id)

        # Assert
        assert by_email is not None and by_email.id == donor.id
        assert by_curp is not None and by_curp.id == donor.id
        assert by_id is not None
        assert by_id.form_answers == donor.form_answers
        assert by_id.status == DonorStatus.ACTIVE
        assert by_id.secret_hash == donor.secret_hash
        assert by_id.created_at is not None

    async def test_unique_email_backstop(
        self, repository: SqlAlchemyDonorRepository, make_donor
    ):
        """Test that a duplicate email is reported as a uniqueness conflict."""
        await repository.add(make_donor())

        with pytest.raises(UniquenessConflictError) as excinfo:
            await repository.add(make_donor(curp="BADD110313MCLLRS08"))

        assert excinfo.value.fields == ["email"]

    async def test_save_persists_changes(
        self, repository: SqlAlchemyDonorRepository, make_donor
    ):
        donor = await repository.add(make_donor())

        donor.status = DonorStatus.INACTIVE
        donor.first_name = "Ana"
        await repository.save(donor)

        stored = await repository.get_by_id(donor.id)
        assert stored.status == DonorStatus.INACTIVE
        assert stored.first_name == "Ana"

    async def test_list_by_blood_type_filters_on_status(
        self, repository: SqlAlchemyDonorRepository, make_donor
    ):
        active = await repository.add(make_donor(blood_type="AB+"))
        await repository.add(
            make_donor(
                curp="BADD110313MCLLRS08",
                email="inactive@example.com",
                blood_type="AB+",
                status="inactive",
            )
        )

        donors = await repository.list_by_blood_type("AB+")

        assert [d.id for d in donors] == [active.id]

    async def test_missing_donor_returns_none(
        self, repository: SqlAlchemyDonorRepository
    ):
        assert await repository.get_by_email("nobody@example.com") is None
