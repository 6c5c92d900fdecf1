"""Donor data transfer objects."""

from .donors_dto import (
    AuthResponse,
    DonorClaims,
    DonorFullView,
    DonorPublicView,
    RegisterDonorRequest,
    UpdateDonorRequest,
)

__all__ = [
    "RegisterDonorRequest",
    "UpdateDonorRequest",
    "AuthResponse",
    "DonorClaims",
    "DonorPublicView",
    "DonorFullView",
]
