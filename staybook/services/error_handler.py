"""
Error handling service for consistent capture and logging of data-access failures.
Turns raised DataAccessErrors into failed QueryResults.
"""

from staybook.utils.exceptions import DataAccessError
from staybook.utils.result import QueryResult
from typing import Any, Awaitable, Dict, Optional, TypeVar
import logging
import uuid

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorHandlerService:
    """
    Service for handling and formatting data-access errors consistently.
    """

    @staticmethod
    async def capture(operation: str, call: Awaitable[T]) -> QueryResult[T]:
        """
        Await a repository call and wrap its outcome.

        Args:
            operation: Name of the operation for log messages
            call: Awaitable repository call

        Returns:
            Successful result with the call's value, or failed result with the error
        """
        try:
            return QueryResult.success(await call)
        except DataAccessError as e:
            reference = ErrorHandlerService._generate_reference_id()
            logger.warning(
                f"{operation} failed [{reference}]: {e.error_code} - {e.detail}",
                extra={
                    "error_code": e.error_code,
                    "operation": operation,
                    "reference_id": reference,
                }
            )
            return QueryResult.failure(e)

    @staticmethod
    def format_error(error: DataAccessError, reference_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Format an error in a consistent structure for callers that report it.

        Args:
            error: Captured data-access error
            reference_id: Optional identifier for correlating log lines

        Returns:
            Formatted error dictionary
        """
        formatted = {
            "error": {
                "code": error.error_code,
                "message": error.detail,
            }
        }
        if reference_id:
            formatted["error"]["reference_id"] = reference_id
        return formatted

    @staticmethod
    def _generate_reference_id() -> str:
        """Generate a short reference id for log correlation."""
        return uuid.uuid4().hex[:12]
