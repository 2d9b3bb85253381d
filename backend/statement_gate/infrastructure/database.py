"""Database Access — async engine, request sessions and intake-step error translation.

Invariants:
    - One session per request; anything raised inside it rolls the whole
      submission back (experiences and events are never half-written)
    - SQLAlchemy failures leave this layer only as DatabaseError, named after
      the intake step that hit them (save_accepted, save_quarantined, commit)
    - Neither table has a unique constraint, so the failures seen here are
      connectivity and driver errors, reported as 503

Design Decisions:
    - database_step() wraps each write step instead of one catch-all in the
      session: the error names what was being stored when the database failed
    - Module-level db_manager initialized by the FastAPI lifespan
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from statement_gate.core.errors import DatabaseError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def database_step(operation: str) -> AsyncGenerator[None, None]:
    """Translate SQLAlchemy errors raised by one intake step into DatabaseError."""
    try:
        yield
    except OperationalError as e:
        logger.error(
            f"Database unreachable during {operation}: {e}",
            extra={"error_code": "DATABASE_ERROR"},
        )
        raise DatabaseError("database unreachable", operation) from e
    except SQLAlchemyError as e:
        logger.error(
            f"Database error during {operation}: {e}",
            extra={"error_code": "DATABASE_ERROR"},
        )
        raise DatabaseError("statement could not be stored", operation) from e


class DatabaseSessionManager:
    """Owns the engine and hands out one rollback-on-error session per request."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """SELECT 1 for the readiness check; False instead of raising."""
        try:
            async with self.session() as db, database_step("health_check"):
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError):
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per statements request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
