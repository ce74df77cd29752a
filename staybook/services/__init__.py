"""
Service layer on top of the repositories.
"""

from staybook.services.booking import BookingService
from staybook.services.error_handler import ErrorHandlerService

__all__ = [
    "BookingService",
    "ErrorHandlerService",
]
