"""Repository protocols for the donors feature."""

from .donor_repository import DonorRepository

__all__ = ["DonorRepository"]
