"""Tests that validated donor values fit the donors table."""

from typing import Any

import pytest

from app.features.donors.credentials import CredentialManager
from app.features.donors.models import Donor
from app.features.donors.validation import validate_and_normalize


def column_length(name: str) -> int | None:
    return getattr(Donor.__table__.columns[name].type, "length", None)


class TestDonorColumns:
    """Tests for the donors column sizes."""

    @pytest.mark.parametrize(
        "name",
        [
            "first_name",
            "last_name",
            "gender",
            "email",
            "place_of_residence",
            "clave_hospital",
            "certified_file",
            "secret_hash",
            "secret_salt",
        ],
    )
    def test_free_text_columns_are_unbounded(self, name: str):
        assert column_length(name) is None

    def test_long_valid_input_fits_every_column(
        self, valid_donor_fields: dict[str, Any]
    ):
        """Test that values the validator accepts are never truncated."""
        # Arrange
        fields = {
            **valid_donor_fields,
            "first_name": "N" * 300,
            "last_name": "L" * 300,
            "gender": "G" * 150,
            "email": "a" * 260 + "@example.com",
            "place_of_residence": "P" * 400,
            "clave_hospital": "H" * 150,
            "certified_file": "uploads/" + "f" * 2000 + ".pdf",
        }

        # Act
        donor = validate_and_normalize(fields)

        # Assert
        for name in Donor.__table__.columns.keys():
            value = getattr(donor, name)
            length = column_length(name)
            if isinstance(value, str) and length is not None:
                assert len(value) <= length, name

    def test_secret_fits_with_larger_kdf_parameters(self, make_donor):
        donor = make_donor(password=None)
        manager = CredentialManager(key_length=2048, salt_bytes=64)

        manager.set_secret(donor, "long-secret")

        assert len(donor.secret_hash) == 4096
        assert len(donor.secret_salt) == 128
        assert column_length("secret_hash") is None
        assert column_length("secret_salt") is None
