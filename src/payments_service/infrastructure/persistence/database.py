"""Async engine and schema helpers.

Repositories run SQLAlchemy Core statements inside ``engine.begin()``
transactions; nothing here holds a long-lived connection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy.ext.asyncio import create_async_engine

from payments_service.infrastructure.persistence.tables import metadata

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from payments_service.config import Settings

logger = structlog.get_logger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for settings.database_url.

    Pool sizing applies to server databases only; SQLite URLs keep the
    dialect's default pool (a single shared connection for :memory:).
    """
    options: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.uses_sqlite:
        options.update(pool_size=settings.database_pool_size, pool_pre_ping=True)

    engine = create_async_engine(settings.database_url, **options)
    logger.info("database_engine_created", dialect=engine.dialect.name)
    return engine


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
