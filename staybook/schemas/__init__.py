"""
Pydantic schemas for data-access inputs and outputs.
"""

from staybook.schemas.user import UserCreate, UserRecord
from staybook.schemas.property import (
    PropertyCreate,
    PropertyRecord,
    PropertySearchFilters,
    ReservationHistoryEntry,
)

__all__ = [
    "UserCreate",
    "UserRecord",
    "PropertyCreate",
    "PropertyRecord",
    "PropertySearchFilters",
    "ReservationHistoryEntry",
]
