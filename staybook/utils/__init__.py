"""
Utility modules for the data-access layer.
"""

from staybook.utils.exceptions import (
    DataAccessError,
    StorageError,
    DuplicateRecordError,
    RecordNotFoundError,
    InvalidRecordError,
)
from staybook.utils.query_builder import QueryBuilder, build_insert
from staybook.utils.result import QueryResult

__all__ = [
    "DataAccessError",
    "StorageError",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "InvalidRecordError",
    "QueryBuilder",
    "build_insert",
    "QueryResult",
]
