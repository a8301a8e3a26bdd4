"""Persistence row shapes.

Rows hold primitive column values only. Field names are the column names of
the matching table and the keys accepted in repository criteria.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class BaseRow:
    """Columns shared by every table.

    id, created_at and updated_at are None only on a row built from a
    transient aggregate, before the store assigns them. deleted_at is the
    soft-delete marker: a row with a value here is invisible to reads.
    """

    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PaymentRow(BaseRow):
    amount: Decimal
    currency: str
    status: str
    customer_id: str
    description: str | None = None
    # Empty metadata is stored as NULL
    metadata: dict[str, Any] | None = None
