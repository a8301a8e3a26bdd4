from __future__ import annotations

import copy
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Generic
from uuid import uuid4

import structlog

from payments_service.application.pagination import Page
from payments_service.application.ports import PaymentRepository, Repository
from payments_service.domain.entities import Payment, Persisted
from payments_service.domain.exceptions import EntityNotFoundError
from payments_service.infrastructure.persistence.mapper import AggregateT, LoadedT, RowT
from payments_service.infrastructure.persistence.payment_mapper import PaymentMapper
from payments_service.infrastructure.persistence.rows import PaymentRow
from payments_service.infrastructure.time_provider import SystemTimeProvider

if TYPE_CHECKING:
    from uuid import UUID

    from payments_service.application.pagination import Pagination
    from payments_service.application.ports import Criteria, TimeProvider
    from payments_service.infrastructure.persistence.mapper import Mapper

logger = structlog.get_logger(__name__)


class InMemoryRepository(Repository[AggregateT, LoadedT], Generic[AggregateT, LoadedT, RowT]):
    """Dict-backed repository holding rows, for tests and local runs.

    Implementation notes:
    - Stores rows, not aggregates, so every read goes through the mapper
      exactly like the SQL adapter does
    - Stores deep copies in save() to prevent external mutation
    - Reads return freshly mapped aggregates; mutating one without calling
      save() leaves the store untouched
    - Ordering is newest first; rows created at the same instant come back
      in reverse insertion order
    - NOT thread-safe
    """

    def __init__(self, mapper: Mapper[AggregateT, LoadedT, RowT], time_provider: TimeProvider) -> None:
        self._mapper = mapper
        self._time_provider = time_provider
        self._rows: dict[UUID, RowT] = {}

    async def find_one(self, criteria: Criteria) -> LoadedT | None:
        for row in self._matching(criteria):
            return self._mapper.to_domain(row)
        return None

    async def find_with_pagination(self, criteria: Criteria, pagination: Pagination) -> Page[LoadedT]:
        rows = self._matching(criteria)
        window = rows[pagination.offset : pagination.offset + pagination.limit]
        return Page(
            items=self._mapper.to_domain_many(window),
            total=len(rows),
            page=pagination.page,
            limit=pagination.limit,
        )

    async def save(self, aggregate: AggregateT) -> LoadedT:
        row = self._mapper.to_persistence(aggregate)
        now = self._time_provider.now()

        if row.id is None:
            row_id = uuid4()
            stored = replace(row, id=row_id, created_at=now, updated_at=now, deleted_at=None)
            logger.debug("row_inserted", row_type=type(row).__name__, row_id=str(row_id))
        else:
            row_id = row.id
            existing = self._rows.get(row.id)
            if existing is None:
                raise EntityNotFoundError(f"No {type(row).__name__} with id {row.id} to update")
            stored = replace(
                row,
                created_at=existing.created_at,
                updated_at=now,
                deleted_at=existing.deleted_at,
            )
            logger.debug("row_updated", row_type=type(row).__name__, row_id=str(row_id))

        self._rows[row_id] = copy.deepcopy(stored)
        return self._mapper.to_domain(stored)

    async def soft_delete(self, entity_id: UUID) -> None:
        """Mark a row as deleted; it stays stored but no read returns it.

        Raises:
            EntityNotFoundError: No visible row has this id.
        """
        row = self._rows.get(entity_id)
        if row is None or row.deleted_at is not None:
            raise EntityNotFoundError(f"No row with id {entity_id} to delete")
        self._rows[entity_id] = replace(row, deleted_at=self._time_provider.now())

    def _matching(self, criteria: Criteria) -> list[RowT]:
        unknown = set(criteria) - self._mapper.column_names()
        if unknown:
            raise ValueError(f"Unknown column(s) in criteria: {', '.join(sorted(unknown))}")

        visible = [
            row
            for row in reversed(list(self._rows.values()))
            if row.deleted_at is None
            and all(getattr(row, column) == value for column, value in criteria.items())
        ]
        # sorted() is stable, so equal created_at keeps reverse insertion order
        return sorted(visible, key=lambda row: row.created_at, reverse=True)


class InMemoryPaymentRepository(
    InMemoryRepository[Payment[Any], Payment[Persisted], PaymentRow],
    PaymentRepository,
):
    """In-memory payment repository."""

    def __init__(self, time_provider: TimeProvider | None = None) -> None:
        super().__init__(PaymentMapper(), time_provider or SystemTimeProvider())
