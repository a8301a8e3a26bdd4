"""Domain entities - Objects with identity and lifecycle."""

from payments_service.domain.entities.base import Entity, Lifecycle, Persisted, Transient
from payments_service.domain.entities.payment import (
    LoadedPayment,
    Payment,
    PaymentStatus,
    TransientPayment,
)

__all__ = [
    "Entity",
    "Lifecycle",
    "LoadedPayment",
    "Payment",
    "PaymentStatus",
    "Persisted",
    "Transient",
    "TransientPayment",
]
