"""Player Database — async engine, request-scoped sessions and store error mapping.

Invariants:
    - A session that raises is rolled back before the error leaves this module,
      so a failed save never leaves half a player row in the transaction
    - SQLAlchemy failures reach the API only as DatabaseError (core/errors.py),
      tagged with the store operation that failed
    - Readiness means "reachable AND the player table exists" (migrations applied)

Design Decisions:
    - One manager per process, created in the FastAPI lifespan via init_db
    - expire_on_commit=False: PlayerRecord is built from the row after commit
    - Pool sizing only for server databases; SQLite uses SQLAlchemy's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import DatabaseError
from app.models.player import Player

logger = logging.getLogger(__name__)

# First match wins: subclasses before their bases.
STORE_FAILURES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "player row violates a table constraint", "commit"),
    (OperationalError, "player database unreachable", "connect"),
    (DBAPIError, "driver rejected the player query", "query"),
    (SQLAlchemyError, "player store failure", "unknown"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in STORE_FAILURES:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("player store failure", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions for SqlPlayerStore."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
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
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(
                f"Player store {error.operation} failed: {e}",
                extra={"operation": error.operation},
            )
            raise error
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Database reachable (SELECT 1)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (DatabaseError, OSError):
            return False

    async def player_table_ready(self) -> bool:
        """player table exists and is readable."""
        try:
            async with self.session() as db:
                await db.execute(select(Player.id).limit(1))
            return True
        except (DatabaseError, OSError):
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
