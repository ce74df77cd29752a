"""
Module-level entry points for the surrounding application.

These keep the classic contract of the booking app: a failed statement is
logged and resolves to the same absent value as "nothing found" (``None``
or ``[]``). Set ``swallow_storage_errors`` to false to have the captured
error raised instead, or use ``BookingService`` directly to inspect the
``QueryResult``.
"""

from staybook.config import get_settings
from staybook.database import Storage, get_storage
from staybook.services.booking import BookingService
from staybook.utils.result import QueryResult
from datetime import date
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


def _service(storage: Optional[Storage]) -> BookingService:
    return BookingService(storage if storage is not None else get_storage())


def _resolve(result: QueryResult, absent: Any = None) -> Any:
    if result.ok:
        return result.value
    if not get_settings().swallow_storage_errors:
        raise result.error
    logger.debug(f"Resolving failed call to absent result: {result.error}")
    return absent


async def get_user_with_email(email: str, storage: Optional[Storage] = None):
    """Get a single user by email, or None."""
    return _resolve(await _service(storage).get_user_with_email(email))


async def get_user_with_id(user_id: Any, storage: Optional[Storage] = None):
    """Get a single user by id, or None."""
    return _resolve(await _service(storage).get_user_with_id(user_id))


async def add_user(user, storage: Optional[Storage] = None):
    """Register a user from ``{name, email, password}`` and return the stored row, or None."""
    return _resolve(await _service(storage).add_user(user))


async def authenticate_user(email: str, password: str, storage: Optional[Storage] = None):
    """Return the user when the password matches, otherwise None."""
    return _resolve(await _service(storage).authenticate_user(email, password))


async def get_all_reservations(
    guest_id: Any,
    limit: Optional[int] = None,
    storage: Optional[Storage] = None,
    as_of: Optional[date] = None
):
    """Get a guest's completed reservations, oldest first."""
    return _resolve(await _service(storage).get_all_reservations(guest_id, limit, as_of), [])


async def get_all_properties(filters=None, limit: Optional[int] = None, storage: Optional[Storage] = None):
    """Search listings by city, owner, price range and minimum rating, cheapest first."""
    return _resolve(await _service(storage).get_all_properties(filters, limit), [])


async def add_property(property_data, storage: Optional[Storage] = None):
    """Create a listing from a sparse record and return the stored row, or None."""
    return _resolve(await _service(storage).add_property(property_data))
