"""Payment processor adapters.

Neither adapter talks to a real gateway. RandomPaymentProcessor is the
stand-in used when the service runs; FixedOutcomePaymentProcessor gives
tests a deterministic outcome.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

import structlog

from payments_service.application.ports import PaymentProcessor, ProcessingOutcome

if TYPE_CHECKING:
    from payments_service.domain.entities import Payment

logger = structlog.get_logger(__name__)


class RandomPaymentProcessor(PaymentProcessor):
    """Succeeds with probability success_rate, fails otherwise.

    Pass a seeded random.Random to make a run reproducible.
    """

    def __init__(self, success_rate: float = 0.9, rng: random.Random | None = None) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate must be between 0 and 1, got {success_rate}")
        self._success_rate = success_rate
        self._rng = rng or random.Random()

    @property
    def success_rate(self) -> float:
        return self._success_rate

    async def process(self, payment: Payment[Any]) -> ProcessingOutcome:
        if self._rng.random() < self._success_rate:
            outcome = ProcessingOutcome.SUCCEEDED
        else:
            outcome = ProcessingOutcome.FAILED

        logger.debug(
            "payment_processed",
            customer_id=payment.customer_id,
            amount=str(payment.amount),
            outcome=outcome.value,
        )
        return outcome


class FixedOutcomePaymentProcessor(PaymentProcessor):
    """Test processor that always reports the configured outcome.

    Every payment passed to process() is recorded in ``processed`` so tests
    can assert what the use case handed over.
    """

    def __init__(self, outcome: ProcessingOutcome = ProcessingOutcome.SUCCEEDED) -> None:
        self._outcome = outcome
        self.processed: list[Payment[Any]] = []

    def set_outcome(self, outcome: ProcessingOutcome) -> None:
        self._outcome = outcome

    async def process(self, payment: Payment[Any]) -> ProcessingOutcome:
        self.processed.append(payment)
        return self._outcome
