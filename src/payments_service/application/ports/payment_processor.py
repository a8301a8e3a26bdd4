from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from payments_service.domain.entities import Payment


class ProcessingOutcome(Enum):
    """Result reported by a payment processor."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PaymentProcessor(ABC):
    """Port for the external processing step (e.g. a gateway charge).

    Contract:
    - process() receives a PENDING payment and reports exactly one outcome
    - process() MUST NOT change the payment; the caller applies the outcome
    - No retries and no asynchronous callbacks are assumed
    """

    @abstractmethod
    async def process(self, payment: Payment[Any]) -> ProcessingOutcome:
        """Evaluate a pending payment and report success or failure."""
        ...
