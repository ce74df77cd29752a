"""
Base repository class with the shared "execute + map rows" step.
Concrete repositories build a statement and hand it to fetch_all/fetch_one.
"""

from pydantic import BaseModel, NonNegativeInt, TypeAdapter, ValidationError as PydanticValidationError
from staybook.database import Storage
from staybook.utils.exceptions import DataAccessError, InvalidRecordError
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=BaseModel)

# Row identifiers and result limits arrive from callers as ints or numeric strings
IDENTIFIER = TypeAdapter(int)
LIMIT = TypeAdapter(NonNegativeInt)


class BaseRepository(Generic[RecordType]):
    """
    Base repository providing statement execution and row mapping.
    Failures are logged and re-raised as DataAccessError subclasses.
    """

    def __init__(self, record: Type[RecordType], storage: Storage):
        """
        Initialize repository with record class and storage.

        Args:
            record: Pydantic model each row is mapped to
            storage: Storage executing parameterized statements
        """
        self.record = record
        self.storage = storage

    async def _execute(self, statement: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        try:
            rows = await self.storage.fetch(statement, list(params))
        except DataAccessError as e:
            logger.error(f"Failed to execute {self.record.__name__} statement: {e}")
            raise
        logger.debug(f"{self.record.__name__} statement returned {len(rows)} rows")
        return rows

    def _map(self, row: Dict[str, Any]) -> RecordType:
        return self.record.model_validate(row)

    async def fetch_all(self, statement: str, params: Sequence[Any]) -> List[RecordType]:
        """
        Execute a statement and map every row.

        Args:
            statement: SQL text with positional placeholders
            params: Values bound to the placeholders in order

        Returns:
            List of records, empty if nothing matched
        """
        rows = await self._execute(statement, params)
        return [self._map(row) for row in rows]

    async def fetch_one(self, statement: str, params: Sequence[Any]) -> Optional[RecordType]:
        """
        Execute a statement and map its first row.

        Returns:
            Record if a row was returned, None otherwise
        """
        rows = await self._execute(statement, params)
        if not rows:
            return None
        return self._map(rows[0])

    @staticmethod
    def validate_input(schema: Type[BaseModel], data: Any) -> BaseModel:
        """
        Validate caller input against a schema.

        Raises:
            InvalidRecordError: If the input does not match the schema
        """
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "input" for err in e.errors())
            logger.warning(f"Rejected {schema.__name__} input: {fields}")
            raise InvalidRecordError(f"Invalid {schema.__name__}: {fields}") from e

    @staticmethod
    def coerce(adapter: TypeAdapter, value: Any, name: str) -> Any:
        """
        Convert a scalar argument to the type its placeholder is bound as.

        Raises:
            InvalidRecordError: If the value cannot be converted
        """
        try:
            return adapter.validate_python(value)
        except PydanticValidationError as e:
            logger.warning(f"Rejected {name}: {value!r}")
            raise InvalidRecordError(f"Invalid {name}: {value!r}") from e
