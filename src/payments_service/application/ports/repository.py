from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

if TYPE_CHECKING:
    from payments_service.application.pagination import Page, Pagination

AggregateT = TypeVar("AggregateT")
LoadedT = TypeVar("LoadedT")

Criteria: TypeAlias = Mapping[str, Any]


class Repository(ABC, Generic[AggregateT, LoadedT]):
    """Generic port for aggregate persistence.

    AggregateT is what save() accepts (transient or loaded), LoadedT is what
    every read and every save() returns: an aggregate whose identity and
    timestamps were assigned by the store.

    Contract:
    - Criteria are equality filters keyed by persistence column name
      (e.g. {"id": uuid} or {"customer_id": "c1"}); an unknown column
      raises ValueError
    - Rows marked as soft-deleted are invisible to every read
    - save() performs upsert: insert when the aggregate is transient,
      update when it is loaded; writes ignore the soft-delete marker
    - The store assigns ids and timestamps; the domain never invents them
    - Store failures surface as PersistenceError and are not retried here
    """

    @abstractmethod
    async def find_one(self, criteria: Criteria) -> LoadedT | None:
        """Return the single row matching criteria, mapped to the domain.

        Returns:
            The loaded aggregate if found, None otherwise (no exception).
        """

    @abstractmethod
    async def find_with_pagination(self, criteria: Criteria, pagination: Pagination) -> Page[LoadedT]:
        """Return one page of matching aggregates, newest first.

        Args:
            criteria: Equality filters; {} matches everything.
            pagination: 1-indexed page and page size.

        Returns:
            A Page whose total counts all matching rows. Pages past the end
            have empty items.
        """

    @abstractmethod
    async def save(self, aggregate: AggregateT) -> LoadedT:
        """Persist an aggregate (upsert semantics).

        Returns:
            The stored aggregate. For a transient aggregate this carries the
            newly assigned id and timestamps; for a loaded one, a refreshed
            updated_at and the original created_at.

        Raises:
            EntityNotFoundError: If a loaded aggregate has no row to update.
        """
