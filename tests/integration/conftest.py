"""Fixtures for tests that run against a real SQLite database via aiosqlite."""

from collections.abc import AsyncIterator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from payments_service.infrastructure.persistence import SqlPaymentRepository, create_schema
from payments_service.infrastructure.time_provider import FixedTimeProvider


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """An in-memory SQLite engine with the schema created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_repository(engine: AsyncEngine, time_provider: FixedTimeProvider) -> SqlPaymentRepository:
    return SqlPaymentRepository(engine, time_provider)
