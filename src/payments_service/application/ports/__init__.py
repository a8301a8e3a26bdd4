"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from payments_service.application.ports.payment_processor import PaymentProcessor, ProcessingOutcome
from payments_service.application.ports.payment_repository import PaymentRepository
from payments_service.application.ports.repository import Criteria, Repository
from payments_service.application.ports.time_provider import TimeProvider

__all__ = [
    "Criteria",
    "PaymentProcessor",
    "PaymentRepository",
    "ProcessingOutcome",
    "Repository",
    "TimeProvider",
]
