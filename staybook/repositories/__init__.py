"""
Repository layer for data access operations.
Each repository builds parameterized statements and maps result rows to records.
"""

from staybook.repositories.base import BaseRepository
from staybook.repositories.property import PropertyRepository
from staybook.repositories.reservation import ReservationRepository
from staybook.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository"
]
