from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    TypeDecorator,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB

from payments_service.domain.entities import PaymentStatus

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware UTC timestamps on every backend.

    SQLite drops tzinfo on the way out, so results are re-tagged as UTC.
    Naive datetimes are rejected on the way in.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"naive datetime cannot be stored: {value!r}")
        return value.astimezone(UTC)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


# Column type for payment amounts; PaymentMapper rejects values it would round
AMOUNT_TYPE = Numeric(10, 2)

payments_table = Table(
    "payments",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("amount", AMOUNT_TYPE, nullable=False),
    Column("currency", String(3), nullable=False),
    Column(
        "status",
        Enum(*(status.value for status in PaymentStatus), name="payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING.value,
    ),
    Column("customer_id", String(255), nullable=False),
    Column("description", String, nullable=True),
    Column("metadata", JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"), nullable=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    Column("deleted_at", UTCDateTime, nullable=True),
    Index("ix_payments_customer_id", "customer_id"),
    Index("ix_payments_created_at", "created_at"),
)
