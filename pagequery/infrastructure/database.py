"""Database Session Manager — async engine, per-request sessions, read snapshots.

Invariants:
    - Every request gets its own AsyncSession; a page's count and fetch share it
    - snapshot() sessions are read-only and always rolled back; on PostgreSQL the
      transaction runs at REPEATABLE READ so count and fetch see one view
    - SQLAlchemy exceptions escaping a session are mapped to DatabaseError here,
      never inside the paging engine
    - PageQueryErrors and non-database exceptions pass through untouched

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only applied to server databases; SQLite uses its default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from pagequery.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first; the last entry catches everything else.
_ERROR_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)

SNAPSHOT_OPTIONS = {
    "postgresql": {
        "isolation_level": "REPEATABLE READ",
        "postgresql_readonly": True,
    },
}


def map_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    raise TypeError(f"not a SQLAlchemy error: {exc!r}")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions with error mapping."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that rolls back and raises DatabaseError on SQLAlchemy failures."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            mapped = map_database_error(e)
            logger.error(
                f"{mapped.message}: {e}", extra={"error_code": mapped.code},
            )
            raise mapped from e
        finally:
            await session.close()

    @asynccontextmanager
    async def snapshot(self) -> AsyncGenerator[AsyncSession, None]:
        """Read-only session for paged reads. Writes made through it are discarded."""
        options = SNAPSHOT_OPTIONS.get(self.engine.dialect.name, {})
        async with self.session() as session:
            await session.connection(execution_options=options)
            yield session
            await session.rollback()

    async def ping(self) -> bool:
        """True if a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"DB ping failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def _require_manager() -> DatabaseSessionManager:
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: read-write session."""
    async with _require_manager().session() as session:
        yield session


async def get_snapshot_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: read-only snapshot session for paged listings."""
    async with _require_manager().snapshot() as session:
        yield session
