from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from payments_service.domain.exceptions import InvalidPaymentIdError, PaymentNotFoundError

if TYPE_CHECKING:
    from payments_service.application.ports import PaymentRepository
    from payments_service.domain.entities import Payment, Persisted

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GetPaymentQuery:
    """Input DTO for get payment use case."""

    payment_id: UUID

    @classmethod
    def from_string(cls, id_str: str) -> GetPaymentQuery:
        """Parse the payment ID from its string representation.

        Args:
            id_str: UUID string (with or without hyphens, any case).

        Raises:
            InvalidPaymentIdError: If the string is not a valid UUID.
        """
        try:
            return cls(payment_id=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidPaymentIdError(f"Invalid payment ID: {id_str}") from e


class GetPaymentUseCase:
    """Returns a single loaded payment by ID."""

    def __init__(self, payment_repository: PaymentRepository) -> None:
        self._payment_repo = payment_repository

    async def execute(self, query: GetPaymentQuery) -> Payment[Persisted]:
        """Execute the get payment query.

        Raises:
            PaymentNotFoundError: Payment does not exist or was soft-deleted.
        """
        payment = await self._payment_repo.get(query.payment_id)
        if payment is None:
            logger.info("payment_not_found", payment_id=str(query.payment_id))
            raise PaymentNotFoundError(f"Payment not found: {query.payment_id}")

        return payment
