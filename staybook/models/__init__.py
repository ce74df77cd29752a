"""
Table definitions for the booking schema.
Includes User, Property, Reservation and PropertyReview.
"""

from staybook.models.user import User
from staybook.models.property import Property
from staybook.models.reservation import Reservation, PropertyReview

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "Reservation",
    "PropertyReview",
]
