"""
Typed success/failure value returned by the booking service.
Lets callers tell an absent record apart from a storage failure.
"""

from typing import Generic, Optional, TypeVar

from staybook.utils.exceptions import DataAccessError, RecordNotFoundError

T = TypeVar("T")


class QueryResult(Generic[T]):
    """
    Outcome of a single data-access call.

    A successful result carries a value, which may itself be ``None`` or an
    empty list when the query matched nothing. A failed result carries the
    ``DataAccessError`` that ended the call.
    """

    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[DataAccessError] = None):
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: Optional[T]) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DataAccessError) -> "QueryResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Whether the statement executed without error."""
        return self.error is None

    @property
    def is_absent(self) -> bool:
        """Whether the statement executed and matched nothing."""
        return self.ok and (self.value is None or self.value == [])

    def unwrap(self) -> Optional[T]:
        """Return the value or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value

    def unwrap_required(self, resource: str, resource_id: Optional[str] = None) -> T:
        """Return the value, raising RecordNotFoundError when it is absent."""
        value = self.unwrap()
        if value is None or value == []:
            raise RecordNotFoundError(resource, resource_id)
        return value

    def value_or(self, default):
        """Return the value on success and ``default`` on failure."""
        return self.value if self.ok else default

    def __repr__(self) -> str:
        if self.ok:
            return f"QueryResult(value={self.value!r})"
        return f"QueryResult(error={self.error!r})"
