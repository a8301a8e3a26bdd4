from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import asdict, replace
from typing import TYPE_CHECKING, Any, Generic
from uuid import uuid4

import structlog
from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from payments_service.application.exceptions import PersistenceError
from payments_service.application.pagination import Page
from payments_service.application.ports import PaymentRepository, Repository
from payments_service.domain.entities import Payment, Persisted
from payments_service.domain.exceptions import EntityNotFoundError
from payments_service.infrastructure.persistence.mapper import AggregateT, LoadedT, RowT
from payments_service.infrastructure.persistence.payment_mapper import PaymentMapper
from payments_service.infrastructure.persistence.rows import PaymentRow
from payments_service.infrastructure.persistence.tables import AMOUNT_TYPE, payments_table
from payments_service.infrastructure.time_provider import SystemTimeProvider

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping
    from uuid import UUID

    from sqlalchemy import ColumnElement, Table
    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

    from payments_service.application.pagination import Pagination
    from payments_service.application.ports import Criteria, TimeProvider
    from payments_service.infrastructure.persistence.mapper import Mapper

logger = structlog.get_logger(__name__)

# Written once on insert, never by an update
_INSERT_ONLY_COLUMNS = ("id", "created_at", "deleted_at")


class SqlRepository(Repository[AggregateT, LoadedT], Generic[AggregateT, LoadedT, RowT]):
    """Repository over one table using SQLAlchemy Core on an async engine.

    Each public method runs in its own transaction. Identity and timestamps
    are assigned here, from uuid4() and the time provider, so inserts never
    depend on RETURNING support. Driver and database errors are raised as
    PersistenceError with the original exception chained.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        table: Table,
        mapper: Mapper[AggregateT, LoadedT, RowT],
        time_provider: TimeProvider,
    ) -> None:
        self._engine = engine
        self._table = table
        self._mapper = mapper
        self._time_provider = time_provider

    async def find_one(self, criteria: Criteria) -> LoadedT | None:
        stmt = select(self._table).where(*self._conditions(criteria)).limit(1)
        async with self._transaction() as conn:
            record = (await conn.execute(stmt)).mappings().first()

        if record is None:
            return None
        return self._mapper.to_domain(self._to_row(record))

    async def find_with_pagination(self, criteria: Criteria, pagination: Pagination) -> Page[LoadedT]:
        conditions = self._conditions(criteria)
        count_stmt = select(func.count()).select_from(self._table).where(*conditions)
        page_stmt = (
            select(self._table)
            .where(*conditions)
            .order_by(self._table.c.created_at.desc(), self._table.c.id.desc())
            .limit(pagination.limit)
            .offset(pagination.offset)
        )

        async with self._transaction() as conn:
            total = (await conn.execute(count_stmt)).scalar_one()
            records = (await conn.execute(page_stmt)).mappings().all()

        return Page(
            items=self._mapper.to_domain_many(self._to_row(record) for record in records),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def save(self, aggregate: AggregateT) -> LoadedT:
        row = self._mapper.to_persistence(aggregate)
        now = self._time_provider.now()

        if row.id is None:
            stored = replace(row, id=uuid4(), created_at=now, updated_at=now, deleted_at=None)
            async with self._transaction() as conn:
                await conn.execute(insert(self._table).values(**asdict(stored)))
            logger.debug("row_inserted", table=self._table.name, row_id=str(stored.id))
            return self._mapper.to_domain(stored)

        values = {
            column: value
            for column, value in asdict(row).items()
            if column not in _INSERT_ONLY_COLUMNS
        }
        values["updated_at"] = now

        id_column = self._table.c.id
        async with self._transaction() as conn:
            result = await conn.execute(update(self._table).where(id_column == row.id).values(**values))
            if result.rowcount == 0:
                raise EntityNotFoundError(f"No {self._table.name} row with id {row.id} to update")
            record = (await conn.execute(select(self._table).where(id_column == row.id))).mappings().one()

        logger.debug("row_updated", table=self._table.name, row_id=str(row.id))
        return self._mapper.to_domain(self._to_row(record))

    async def soft_delete(self, entity_id: UUID) -> None:
        """Set deleted_at on a visible row; reads stop returning it.

        Raises:
            EntityNotFoundError: No visible row has this id.
        """
        stmt = (
            update(self._table)
            .where(self._table.c.id == entity_id, self._table.c.deleted_at.is_(None))
            .values(deleted_at=self._time_provider.now())
        )
        async with self._transaction() as conn:
            result = await conn.execute(stmt)
            if result.rowcount == 0:
                raise EntityNotFoundError(f"No {self._table.name} row with id {entity_id} to delete")

        logger.debug("row_soft_deleted", table=self._table.name, row_id=str(entity_id))

    def _conditions(self, criteria: Criteria) -> list[ColumnElement[bool]]:
        unknown = set(criteria) - self._mapper.column_names()
        if unknown:
            raise ValueError(f"Unknown column(s) in criteria: {', '.join(sorted(unknown))}")

        columns = self._table.c
        conditions: list[ColumnElement[bool]] = [columns.deleted_at.is_(None)]
        conditions.extend(columns[name] == value for name, value in criteria.items())
        return conditions

    def _to_row(self, record: Mapping[str, Any]) -> RowT:
        row: RowT = self._mapper.row_type(**record)  # type: ignore[assignment]
        return row

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncConnection]:
        try:
            async with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.error("store_operation_failed", table=self._table.name, error=str(e))
            raise PersistenceError(f"{self._table.name} store operation failed: {e}") from e


class SqlPaymentRepository(
    SqlRepository[Payment[Any], Payment[Persisted], PaymentRow],
    PaymentRepository,
):
    """Payment repository backed by the payments table."""

    def __init__(self, engine: AsyncEngine, time_provider: TimeProvider | None = None) -> None:
        super().__init__(
            engine,
            payments_table,
            PaymentMapper(amount_type=AMOUNT_TYPE),
            time_provider or SystemTimeProvider(),
        )
