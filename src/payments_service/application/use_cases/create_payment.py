from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from payments_service.application.ports import ProcessingOutcome
from payments_service.domain.entities import Payment
from payments_service.domain.value_objects import Metadata, Money

if TYPE_CHECKING:
    from collections.abc import Mapping
    from decimal import Decimal

    from payments_service.application.ports import PaymentProcessor, PaymentRepository
    from payments_service.domain.entities import Persisted

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreatePaymentCommand:
    """Input DTO for create payment use case (raw, unvalidated values)."""

    amount: Decimal | int | float | str
    currency: str
    customer_id: str
    description: str | None = None
    metadata: Mapping[str, Any] | None = None


class CreatePaymentUseCase:
    """Orchestrates the create payment workflow.

    Responsibilities:
    - Build Money and Metadata from raw input (validation errors propagate)
    - Create the payment in PENDING state
    - Ask the injected processor for an outcome and apply it exactly once
    - Persist the payment and return it with its store-assigned identity

    Nothing is saved when validation fails.
    """

    def __init__(
        self,
        payment_repository: PaymentRepository,
        payment_processor: PaymentProcessor,
    ) -> None:
        self._payment_repo = payment_repository
        self._processor = payment_processor

    async def execute(self, command: CreatePaymentCommand) -> Payment[Persisted]:
        """Execute the create payment workflow.

        Args:
            command: Raw payment input.

        Returns:
            The saved payment in COMPLETED or FAILED state.

        Raises:
            InvalidAmountError: Amount is not a positive finite number.
            InvalidCurrencyError: Currency is not an uppercase ISO-4217 code.
            InvalidCustomerIdError: Customer ID is empty.
            PersistenceError: The store failed.
        """
        money = Money.create(command.amount, command.currency)
        metadata = Metadata.create(command.metadata)
        payment = Payment.create(
            amount=money,
            customer_id=command.customer_id,
            description=command.description,
            metadata=metadata,
        )

        outcome = await self._processor.process(payment)
        if outcome == ProcessingOutcome.SUCCEEDED:
            payment.complete()
        elif outcome == ProcessingOutcome.FAILED:
            payment.fail()
        else:
            raise ValueError(f"Unknown processing outcome: {outcome!r}")

        saved = await self._payment_repo.save(payment)

        logger.info(
            "payment_created",
            payment_id=str(saved.id),
            customer_id=saved.customer_id,
            amount=str(saved.amount.amount),
            currency=saved.amount.currency,
            status=saved.status.value,
        )
        return saved
