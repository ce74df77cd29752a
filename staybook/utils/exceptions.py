"""
Custom exception classes for the data-access layer.
Provides structured errors with stable error codes for callers that inspect failures.
"""

from typing import Optional


class DataAccessError(Exception):
    """Base data-access exception class."""

    error_code = "DATA_ACCESS_ERROR"

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        return f"{self.error_code}: {self.detail}"


class StorageError(DataAccessError):
    """Statement execution or connection failure."""

    error_code = "STORAGE_ERROR"


class DuplicateRecordError(StorageError):
    """Unique or other integrity constraint violation."""

    error_code = "DUPLICATE_RECORD"


class RecordNotFoundError(DataAccessError):
    """Query succeeded but produced no record where one was required."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"
        super().__init__(detail)
        self.resource = resource


class InvalidRecordError(DataAccessError):
    """Input record cannot be turned into a valid statement."""

    error_code = "INVALID_RECORD"
