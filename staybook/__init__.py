"""
Data-access layer for a property-rental booking application.
"""

from staybook.access import (
    get_user_with_email,
    get_user_with_id,
    add_user,
    authenticate_user,
    get_all_reservations,
    get_all_properties,
    add_property,
)

__version__ = "1.0.0"

__all__ = [
    "get_user_with_email",
    "get_user_with_id",
    "add_user",
    "authenticate_user",
    "get_all_reservations",
    "get_all_properties",
    "add_property",
]
