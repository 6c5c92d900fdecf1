"""Donor data transfer objects."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from app.features.donors.schemas import DonorStatus


class RegisterDonorRequest(BaseModel):
    """Request model for donor registration.

    Every field is optional here so the donor validator can report all
    missing and malformed fields together.
    """

    curp: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: str | None = None
    gender: str | None = None
    email: str | None = None
    phone_number: str | None = None
    place_of_residence: str | None = None
    clave_hospital: str | None = None
    blood_type: str | None = None
    certified_file: str | None = None
    form_answers: dict[str, Any] | None = None
    status: str | None = None
    password: str | None = None


class UpdateDonorRequest(BaseModel):
    """Request model for a partial donor profile update.

    Only fields explicitly set are validated and applied.
    """

    curp: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: str | None = None
    gender: str | None = None
    email: str | None = None
    phone_number: str | None = None
    place_of_residence: str | None = None
    clave_hospital: str | None = None
    blood_type: str | None = None
    certified_file: str | None = None
    form_answers: dict[str, Any] | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    """Minimal payload returned on login and registration."""

    email: str
    token: str


class DonorClaims(BaseModel):
    """Claims carried by a donor session token."""

    sub: str
    email: str
    role: str
    exp: int


class DonorPublicView(BaseModel):
    """Donor fields safe to show to any caller."""

    id: UUID
    first_name: str
    last_name: str
    gender: str
    email: str
    place_of_residence: str | None
    clave_hospital: str | None
    blood_type: str
    status: DonorStatus


class DonorFullView(BaseModel):
    """Every donor field except secret material, for the owner or admins."""

    id: UUID
    curp: str
    first_name: str
    last_name: str
    date_of_birth: str
    gender: str
    email: str
    phone_number: str | None
    place_of_residence: str | None
    clave_hospital: str | None
    blood_type: str
    certified_file: str
    form_answers: dict[str, Any]
    status: DonorStatus
    created_at: datetime | None
    updated_at: datetime | None
