"""
Booking data service exposing every data-access operation with an explicit error channel.
Each method returns a QueryResult so callers can tell "not found" from "storage failure".
"""

from staybook.config import get_settings
from staybook.database import Storage
from staybook.repositories.property import PropertyRepository
from staybook.repositories.reservation import ReservationRepository
from staybook.repositories.user import UserRepository
from staybook.schemas.property import (
    PropertyCreate,
    PropertyRecord,
    PropertySearchFilters,
    ReservationHistoryEntry,
)
from staybook.schemas.user import UserCreate, UserRecord
from staybook.services.error_handler import ErrorHandlerService
from staybook.utils.result import QueryResult
from datetime import date
from typing import Any, List, Mapping, Optional, Union


class BookingService:
    """
    Service over the user, reservation and property repositories.
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self.user_repo = UserRepository(storage)
        self.reservation_repo = ReservationRepository(storage)
        self.property_repo = PropertyRepository(storage)

    @staticmethod
    def _limit(limit: Any) -> Any:
        return get_settings().default_result_limit if limit is None else limit

    # Users

    async def get_user_with_email(self, email: str) -> QueryResult[Optional[UserRecord]]:
        return await ErrorHandlerService.capture(
            "get_user_with_email", self.user_repo.get_by_email(email)
        )

    async def get_user_with_id(self, user_id: Any) -> QueryResult[Optional[UserRecord]]:
        return await ErrorHandlerService.capture(
            "get_user_with_id", self.user_repo.get_by_id(user_id)
        )

    async def add_user(
        self,
        user: Union[UserCreate, Mapping[str, Any]]
    ) -> QueryResult[Optional[UserRecord]]:
        return await ErrorHandlerService.capture("add_user", self.user_repo.create_user(user))

    async def authenticate_user(self, email: str, password: str) -> QueryResult[Optional[UserRecord]]:
        return await ErrorHandlerService.capture(
            "authenticate_user", self.user_repo.authenticate_user(email, password)
        )

    # Reservations

    async def get_all_reservations(
        self,
        guest_id: Any,
        limit: Optional[int] = None,
        as_of: Optional[date] = None
    ) -> QueryResult[List[ReservationHistoryEntry]]:
        return await ErrorHandlerService.capture(
            "get_all_reservations",
            self.reservation_repo.get_all_reservations(guest_id, self._limit(limit), as_of),
        )

    # Properties

    async def get_all_properties(
        self,
        filters: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
        limit: Optional[int] = None
    ) -> QueryResult[List[PropertyRecord]]:
        return await ErrorHandlerService.capture(
            "get_all_properties",
            self.property_repo.search_properties(filters, self._limit(limit)),
        )

    async def add_property(
        self,
        property_data: Union[PropertyCreate, Mapping[str, Any]]
    ) -> QueryResult[Optional[PropertyRecord]]:
        return await ErrorHandlerService.capture(
            "add_property", self.property_repo.create_property(property_data)
        )
