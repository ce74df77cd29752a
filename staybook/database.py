"""
Database connection and statement execution for PostgreSQL.
Wraps the async SQLAlchemy engine (asyncpg driver) behind a minimal storage protocol.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import Integer
from staybook.config import Settings, get_settings
from staybook.utils.exceptions import StorageError, DuplicateRecordError
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol, Sequence
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all table definitions.
    Every table has a serial integer primary key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


class Storage(Protocol):
    """Executes one parameterized statement and returns its rows as mappings."""

    async def fetch(self, statement: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        ...


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine with connection pooling from settings.

    Args:
        settings: Settings to use; defaults to the cached application settings

    Returns:
        Configured AsyncEngine
    """
    settings = settings or get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=settings.pool_recycle,
        pool_timeout=settings.pool_timeout,
        connect_args={
            "server_settings": {
                "application_name": settings.app_name,
            }
        },
    )


class EngineStorage:
    """
    Storage backed by an AsyncEngine.

    Statements are passed to the driver untouched through exec_driver_sql, so
    asyncpg receives the ``$n`` placeholders and the positional parameters
    exactly as they were built. Each call runs in its own transaction.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def fetch(self, statement: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """
        Execute a statement and return all rows.

        Args:
            statement: SQL text with $1..$n placeholders
            params: Positional values, one per placeholder

        Returns:
            List of row dictionaries (column name -> value)

        Raises:
            DuplicateRecordError: On integrity constraint violation
            StorageError: On any other connection or statement failure
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(statement, tuple(params))
                if not result.returns_rows:
                    return []
                rows = [dict(row) for row in result.mappings().all()]
            logger.debug(f"Statement returned {len(rows)} rows")
            return rows
        except IntegrityError as e:
            logger.error(f"Integrity violation executing statement: {e}")
            raise DuplicateRecordError(str(e.orig or e)) from e
        except SQLAlchemyError as e:
            logger.error(f"Statement execution failed: {e}")
            raise StorageError(str(e)) from e
        except OSError as e:
            logger.error(f"Database connection failed: {e}")
            raise StorageError(f"Connection failed: {e}") from e

    async def ping(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            rows = await self.fetch("SELECT 1 AS ok", [])
            logger.info("Database connection successful")
            return bool(rows) and rows[0].get("ok") == 1
        except StorageError as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


@lru_cache()
def get_storage() -> EngineStorage:
    """
    Get the process-wide storage.
    The engine is created on first use so importing the package never touches the network.
    """
    return EngineStorage(create_engine())


async def close_storage() -> None:
    """
    Close database connections.
    This should be called during application shutdown.
    """
    if get_storage.cache_info().currsize:
        await get_storage().dispose()
        get_storage.cache_clear()
        logger.info("Database connections closed")


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all tables for local development and integration testing.
    """
    # Register table definitions on Base.metadata
    import staybook.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
