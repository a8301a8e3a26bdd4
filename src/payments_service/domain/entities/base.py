"""Entity lifecycle types.

An entity is either transient (built in memory, never stored) or persisted
(the store has assigned its identity and timestamps). The two states are
distinct types rather than one type with nullable fields:

    Payment[Transient]  - returned by Payment.create()
    Payment[Persisted]  - returned by every repository read and by save()

Identity accessors are declared on Entity[Persisted] only, so a type checker
rejects ``Payment.create(...).id`` while ``repository.save(...)`` results
expose ``id``, ``created_at`` and ``updated_at`` without None checks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Generic, TypeAlias, TypeVar

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class Transient:
    """Lifecycle of an entity that has not been stored: no id, no timestamps."""


@dataclass(frozen=True, slots=True)
class Persisted:
    """Lifecycle of a stored entity: id and both timestamps are always present."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        missing = [name for name in ("id", "created_at", "updated_at") if getattr(self, name) is None]
        if missing:
            raise ValueError(f"Persisted lifecycle requires {', '.join(missing)}")

    def touched(self, now: datetime) -> Persisted:
        """Return a copy with updated_at moved to now."""
        return replace(self, updated_at=now)


Lifecycle: TypeAlias = Transient | Persisted

LifecycleT = TypeVar("LifecycleT", Transient, Persisted)


@dataclass(frozen=True, slots=True)
class Entity(Generic[LifecycleT]):
    """Base for entities that carry a Transient or Persisted lifecycle.

    Fields cannot be assigned from outside; stores return new instances
    carrying a Persisted lifecycle.
    """

    lifecycle: LifecycleT

    def is_persisted(self) -> bool:
        return isinstance(self.lifecycle, Persisted)

    @property
    def id(self: Entity[Persisted]) -> UUID:
        return self.lifecycle.id

    @property
    def created_at(self: Entity[Persisted]) -> datetime:
        return self.lifecycle.created_at

    @property
    def updated_at(self: Entity[Persisted]) -> datetime:
        return self.lifecycle.updated_at
