"""Tests for the FindDonorsByBloodTypeUseCase."""

import pytest

from app.features.donors.claims import ClaimsIssuer
from app.features.donors.errors import ValidationError
from app.features.donors.usecases import FindDonorsByBloodTypeUseCaseImpl
from tests.utils.fakes import InMemoryDonorRepository


@pytest.fixture
def use_case(
    donor_repository: InMemoryDonorRepository, claims_issuer: ClaimsIssuer
) -> FindDonorsByBloodTypeUseCaseImpl:
    return FindDonorsByBloodTypeUseCaseImpl(
        repository=donor_repository, claims_issuer=claims_issuer
    )


class TestFindDonorsByBloodTypeUseCase:
    """Test suite for the FindDonorsByBloodTypeUseCase."""

    async def test_returns_active_donors_of_that_type(
        self, use_case: FindDonorsByBloodTypeUseCaseImpl, stored_donor
    ):
        match = await stored_donor(password=None, blood_type="A-")
        await stored_donor(
            password=None,
            curp="BADD110313MCLLRS08",
            email="inactive@example.com",
            blood_type="A-",
            status="inactive",
        )
        await stored_donor(
            password=None,
            curp="XEXX010101HNEXXXA4",
            email="other@example.com",
            blood_type="B+",
        )

        views = await use_case.execute(" a- ")

        assert [view.id for view in views] == [match.id]
        assert "curp" not in views[0].model_dump()

    async def test_rejects_invalid_blood_type(
        self, use_case: FindDonorsByBloodTypeUseCaseImpl
    ):
        with pytest.raises(ValidationError) as excinfo:
            await use_case.execute("Z+")

        assert excinfo.value.message == "The blood type is not valid."
