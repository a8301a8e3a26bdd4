"""Response shapes for delivery mechanisms.

to_dict() produces the JSON-ready wire shape: camelCase keys, the amount as
a decimal string so no precision is lost, ISO-8601 UTC timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal
    from uuid import UUID

    from payments_service.application.pagination import Page
    from payments_service.domain.entities import Payment, Persisted


@dataclass(frozen=True, slots=True)
class PaymentResponse:
    id: UUID
    amount: Decimal
    currency: str
    status: str
    customer_id: str
    description: str | None
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_payment(cls, payment: Payment[Persisted]) -> PaymentResponse:
        return cls(
            id=payment.id,
            amount=payment.amount.amount,
            currency=payment.amount.currency,
            status=payment.status.value,
            customer_id=payment.customer_id,
            description=payment.description,
            metadata=payment.metadata.to_dict(),
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "amount": str(self.amount),
            "currency": self.currency,
            "status": self.status,
            "customerId": self.customer_id,
            "description": self.description,
            "metadata": self.metadata,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class PaymentListResponse:
    items: list[PaymentResponse]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_page(cls, page: Page[Payment[Persisted]]) -> PaymentListResponse:
        return cls(
            items=[PaymentResponse.from_payment(payment) for payment in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "pages": self.pages,
        }
