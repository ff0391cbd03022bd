"""Database engine lifecycle and the per-request session dependency.

``main.lifespan`` builds the engine and session factory once and parks them
on ``app.state``. Each request then gets one ``AsyncSession`` that is
committed after the route returns and rolled back if anything raises.
Repositories only ``flush``.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import QueuePool

from app.config import Settings
from app.core.exceptions import StorageError
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _watch_pool(engine: AsyncEngine) -> None:
    """Log when the pool has to open connections beyond ``pool_size``."""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return

    @event.listens_for(pool, "connect")
    def _on_connect(_dbapi_conn, _conn_record):
        if pool.overflow() > 0:
            logger.warning("db_pool_overflow", size=pool.size(), overflow=pool.overflow())


def create_engine(settings: Settings) -> AsyncEngine:
    engine = create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )
    _watch_pool(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One unit of work per request.

    Raises:
        StorageError: If the final commit fails.
    """
    factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            raise StorageError("Could not commit changes") from exc


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
