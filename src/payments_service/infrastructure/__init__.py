"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Persistence: row mappers plus in-memory and SQL repositories
- Payment processors: stand-in and fixed-outcome implementations
- Time Provider: Clock abstraction for testability

Infrastructure adapters implement the ports defined in the application layer.
"""

from payments_service.infrastructure.payment_processor import (
    FixedOutcomePaymentProcessor,
    RandomPaymentProcessor,
)
from payments_service.infrastructure.persistence import InMemoryPaymentRepository, SqlPaymentRepository
from payments_service.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider

__all__ = [
    "FixedOutcomePaymentProcessor",
    "FixedTimeProvider",
    "InMemoryPaymentRepository",
    "RandomPaymentProcessor",
    "SqlPaymentRepository",
    "SystemTimeProvider",
]
