"""Repositories for the donors feature."""

from .donor_repository import SqlAlchemyDonorRepository
from .protocols import DonorRepository

__all__ = ["DonorRepository", "SqlAlchemyDonorRepository"]
