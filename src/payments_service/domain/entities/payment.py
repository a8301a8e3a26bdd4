"""Payment aggregate root with state machine behavior.

State machine:
    - pending → completed (complete)
    - pending → failed (fail)
    - completed and failed are terminal (no further transitions)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

from payments_service.domain.entities.base import Entity, LifecycleT, Persisted, Transient
from payments_service.domain.exceptions import (
    InvalidCustomerIdError,
    InvalidPaymentStatusError,
    InvalidStateTransitionError,
)
from payments_service.domain.value_objects import Metadata, Money

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from decimal import Decimal
    from uuid import UUID


class PaymentStatus(Enum):
    """Payment lifecycle states. Values are the stored representation."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATUSES


_TERMINAL_STATUSES = frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED})


@dataclass(frozen=True, slots=True)
class Payment(Entity[LifecycleT]):
    """Payment aggregate root.

    Fields are frozen: assigning status or customer_id raises
    FrozenInstanceError. complete() and fail() are the only way status
    changes, in place and only while the payment is PENDING, whether it is
    transient or loaded, so each payment leaves PENDING exactly once. A
    rejected transition leaves the instance untouched.

    Payments are compared by value but are not hashable, since status can
    still change.

    Use create() for new payments and load() to rebuild a stored one; status
    is never a construction parameter of create().
    """

    amount: Money
    customer_id: str
    metadata: Metadata = field(default_factory=Metadata)
    description: str | None = None
    status: PaymentStatus = PaymentStatus.PENDING

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not isinstance(self.customer_id, str) or not self.customer_id.strip():
            raise InvalidCustomerIdError("Customer ID cannot be empty")

    @classmethod
    def create(
        cls,
        amount: Money,
        customer_id: str,
        description: str | None = None,
        metadata: Metadata | None = None,
    ) -> Payment[Transient]:
        """Factory method for a new, not yet stored payment.

        Args:
            amount: Payment amount.
            customer_id: Paying customer; must be non-empty.
            description: Optional free-text description.
            metadata: Optional metadata; None becomes empty metadata.

        Returns:
            A transient Payment in PENDING state.

        Raises:
            InvalidCustomerIdError: If customer_id is empty.
        """
        return cls(
            lifecycle=Transient(),
            amount=amount,
            customer_id=customer_id,
            metadata=metadata if metadata is not None else Metadata(),
            description=description,
            status=PaymentStatus.PENDING,
        )

    @classmethod
    def load(
        cls,
        *,
        payment_id: UUID,
        created_at: datetime,
        updated_at: datetime,
        status: str | PaymentStatus,
        amount: Decimal | int | float | str,
        currency: str,
        customer_id: str,
        description: str | None,
        metadata: Mapping[str, Any] | None,
    ) -> Payment[Persisted]:
        """Rebuild a stored payment from its primitive column values.

        Money and Metadata are reconstructed through their own factories, so
        a corrupt value (unknown currency, non-positive amount, unknown
        status, empty customer) raises instead of producing a degraded
        payment.

        Raises:
            ValidationError: If any stored value fails domain validation.
        """
        return cls(
            lifecycle=Persisted(id=payment_id, created_at=created_at, updated_at=updated_at),
            amount=Money.create(amount, currency),
            customer_id=customer_id,
            metadata=Metadata.create(metadata),
            description=description,
            status=_parse_status(status),
        )

    def complete(self) -> None:
        """Mark the payment as completed.

        Raises:
            InvalidStateTransitionError: If not in PENDING state.
        """
        if self.status != PaymentStatus.PENDING:
            raise InvalidStateTransitionError(
                f"Cannot complete payment in state {self.status.value}; "
                f"must be in {PaymentStatus.PENDING.value} state"
            )

        object.__setattr__(self, "status", PaymentStatus.COMPLETED)

    def fail(self) -> None:
        """Mark the payment as failed.

        Raises:
            InvalidStateTransitionError: If not in PENDING state.
        """
        if self.status != PaymentStatus.PENDING:
            raise InvalidStateTransitionError(
                f"Cannot fail payment in state {self.status.value}; "
                f"must be in {PaymentStatus.PENDING.value} state"
            )

        object.__setattr__(self, "status", PaymentStatus.FAILED)

    def is_terminal(self) -> bool:
        return self.status.is_terminal


TransientPayment: TypeAlias = Payment[Transient]
LoadedPayment: TypeAlias = Payment[Persisted]


def _parse_status(value: str | PaymentStatus) -> PaymentStatus:
    if isinstance(value, PaymentStatus):
        return value
    try:
        return PaymentStatus(value)
    except ValueError as e:
        raise InvalidPaymentStatusError(f"Unknown payment status: {value!r}") from e
