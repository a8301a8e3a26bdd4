from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import fields
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from payments_service.domain.entities import Persisted
from payments_service.infrastructure.persistence.rows import BaseRow

if TYPE_CHECKING:
    from collections.abc import Iterable

    from payments_service.domain.entities import Lifecycle

AggregateT = TypeVar("AggregateT")
LoadedT = TypeVar("LoadedT")
RowT = TypeVar("RowT", bound=BaseRow)


class Mapper(ABC, Generic[AggregateT, LoadedT, RowT]):
    """Translates between aggregates and persistence rows.

    Subclasses map the aggregate-specific columns; the shared id and
    timestamp columns go through _lifecycle_columns() and
    _persisted_from_row(), so every mapper handles them the same way.

    For any stored, non-deleted row in canonical form: to_persistence(to_domain(row))
    == row. Canonical form is what to_persistence() writes; a mapper may
    normalize equivalent encodings on the way back (PaymentMapper turns
    metadata {} into None, the canonical form of empty metadata).
    """

    row_type: ClassVar[type[BaseRow]]

    @abstractmethod
    def to_domain(self, row: RowT) -> LoadedT:
        """Build a loaded aggregate from a stored row.

        Raises:
            ValidationError: If a stored value fails domain validation.
            ValueError: If the row has no identity or timestamps.
        """

    @abstractmethod
    def to_persistence(self, aggregate: AggregateT) -> RowT:
        """Build a row from a transient or loaded aggregate.

        A transient aggregate yields a row whose id and timestamps are None.
        deleted_at is always None; soft deletion is a store operation.
        """

    def to_domain_many(self, rows: Iterable[RowT]) -> list[LoadedT]:
        return [self.to_domain(row) for row in rows]

    @classmethod
    def column_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls.row_type))

    @staticmethod
    def _lifecycle_columns(lifecycle: Lifecycle) -> dict[str, Any]:
        if isinstance(lifecycle, Persisted):
            return {
                "id": lifecycle.id,
                "created_at": lifecycle.created_at,
                "updated_at": lifecycle.updated_at,
            }
        return {"id": None, "created_at": None, "updated_at": None}

    @staticmethod
    def _persisted_from_row(row: BaseRow) -> Persisted:
        if row.id is None or row.created_at is None or row.updated_at is None:
            raise ValueError(
                f"{type(row).__name__} has no identity or timestamps; "
                "only stored rows can be mapped to the domain"
            )
        return Persisted(id=row.id, created_at=row.created_at, updated_at=row.updated_at)
