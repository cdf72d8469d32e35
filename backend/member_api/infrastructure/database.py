"""Database Session Manager: async connection pool, rollback, schema bootstrap and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions become StoreError / StoreConstraintError via translate_store_error()
    - Constraint kind is read from SQLSTATE when the driver reports one,
      otherwise from SQLite's "<KIND> constraint failed: table.column" text

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing skipped for SQLite: its async pool ignores/rejects those arguments
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from member_api.core.domain_types import ConstraintKind
from member_api.core.errors import StoreConstraintError, StoreError
from member_api.db.base import Base
import member_api.models  # noqa: F401  (populates Base.metadata)

logger = logging.getLogger(__name__)

_SQLSTATE_KINDS = {
    "23505": ConstraintKind.UNIQUE,
    "23502": ConstraintKind.NOT_NULL,
}
_SQLITE_MARKERS = {
    "UNIQUE constraint failed": ConstraintKind.UNIQUE,
    "NOT NULL constraint failed": ConstraintKind.NOT_NULL,
}


def _sqlstate(exc: DBAPIError) -> str | None:
    """SQLSTATE from the DBAPI error or the driver exception it wraps."""
    orig = exc.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        code = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if code:
            return str(code)
    return None


def classify_integrity_error(
    exc: IntegrityError,
) -> tuple[ConstraintKind, str | None]:
    """Return (constraint kind, column name if known) for an IntegrityError."""
    kind = _SQLSTATE_KINDS.get(_sqlstate(exc) or "")
    detail = str(exc.orig)
    column = None
    for marker, marker_kind in _SQLITE_MARKERS.items():
        if marker in detail:
            kind = kind or marker_kind
            # "UNIQUE constraint failed: members.email"
            _, _, target = detail.partition(": ")
            column = target.split(",")[0].rpartition(".")[2].strip() or None
            break
    return kind or ConstraintKind.OTHER, column


def translate_store_error(exc: SQLAlchemyError, operation: str) -> StoreError:
    """Map a SQLAlchemy exception to the store error hierarchy."""
    if isinstance(exc, IntegrityError):
        kind, column = classify_integrity_error(exc)
        return StoreConstraintError(kind, operation, column=column)
    if isinstance(exc, OperationalError):
        return StoreError("Connection or operational error", operation)
    if isinstance(exc, DBAPIError):
        return StoreError("Database driver error", operation)
    return StoreError("Database operation failed", operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
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
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables (members) on the bound database."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
