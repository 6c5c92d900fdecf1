"""Unit tests for SqlAlchemyDonorRepository error mapping."""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.exc import IntegrityError

from app.features.donors.errors import UniquenessConflictError
from app.features.donors.models import CURP_UNIQUE_CONSTRAINT, EMAIL_UNIQUE_INDEX
from app.features.donors.repositories import SqlAlchemyDonorRepository


class DriverError(Exception):
    """Stands in for an asyncpg error carrying the violated constraint."""

    def __init__(self, message: str, constraint_name: str | None = None):
        super().__init__(message)
        self.constraint_name = constraint_name


def make_integrity_error(message: str, constraint_name: str | None) -> IntegrityError:
    # The asyncpg adapter raises its own error chained from the driver error
    adapted = Exception(message)
    adapted.__cause__ = DriverError(message, constraint_name)
    return IntegrityError("INSERT INTO donors ...", {}, adapted)


class FailingCommitSession:
    """Session whose commit raises the given error."""

    def __init__(self, error: Exception):
        self.error = error
        self.rolled_back = False

    def add(self, instance) -> None:
        pass

    async def commit(self) -> None:
        raise self.error

    async def rollback(self) -> None:
        self.rolled_back = True

    async def refresh(self, instance) -> None:
        pass


def repository_for(session: FailingCommitSession) -> SqlAlchemyDonorRepository:
    @asynccontextmanager
    async def get_db_session():
        yield session

    return SqlAlchemyDonorRepository(get_db_session=get_db_session)


class TestCommitErrorMapping:
    """Tests for mapping integrity errors raised on commit."""

    @pytest.mark.parametrize(
        ("constraint", "field"),
        [(CURP_UNIQUE_CONSTRAINT, "curp"), (EMAIL_UNIQUE_INDEX, "email")],
    )
    async def test_unique_violation_is_reported_on_its_field(
        self, make_donor, constraint: str, field: str
    ):
        # Arrange
        session = FailingCommitSession(
            make_integrity_error("duplicate key value", constraint)
        )
        repository = repository_for(session)

        # Act
        with pytest.raises(UniquenessConflictError) as excinfo:
            await repository.add(make_donor())

        # Assert
        assert excinfo.value.fields == [field]
        assert session.rolled_back

    async def test_field_is_taken_from_constraint_not_message(self, make_donor):
        """Test that an email value mentioning curp only flags the email."""
        session = FailingCommitSession(
            make_integrity_error(
                'duplicate key value violates unique constraint "ix_donors_email"\n'
                "DETAIL:  Key (email)=(curp.lover@example.com) already exists.",
                EMAIL_UNIQUE_INDEX,
            )
        )

        with pytest.raises(UniquenessConflictError) as excinfo:
            await repository_for(session).add(make_donor())

        assert excinfo.value.fields == ["email"]

    async def test_other_integrity_errors_propagate_unchanged(self, make_donor):
        """Test that a NOT NULL violation naming email is not a conflict."""
        error = make_integrity_error(
            'null value in column "email" of relation "donors" violates '
            "not-null constraint",
            None,
        )
        session = FailingCommitSession(error)

        with pytest.raises(IntegrityError) as excinfo:
            await repository_for(session).add(make_donor())

        assert excinfo.value is error
        assert not isinstance(excinfo.value, UniquenessConflictError)
        assert session.rolled_back
