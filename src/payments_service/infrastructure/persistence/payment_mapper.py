from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from payments_service.domain.entities import Payment, Persisted
from payments_service.domain.exceptions import InvalidAmountError
from payments_service.infrastructure.persistence.mapper import Mapper
from payments_service.infrastructure.persistence.rows import PaymentRow

if TYPE_CHECKING:
    from sqlalchemy import Numeric

    from payments_service.domain.value_objects import Money


class PaymentMapper(Mapper[Payment[Any], Payment[Persisted], PaymentRow]):
    """Maps Payment to PaymentRow and back.

    With amount_type set, to_persistence() rejects amounts that the column
    cannot hold exactly, such as 1.234 KWD in numeric(10,2), instead of
    letting the database round them.
    """

    row_type = PaymentRow

    def __init__(self, amount_type: Numeric[Decimal] | None = None) -> None:
        self._amount_type = amount_type

    def to_domain(self, row: PaymentRow) -> Payment[Persisted]:
        lifecycle = self._persisted_from_row(row)
        return Payment.load(
            payment_id=lifecycle.id,
            created_at=lifecycle.created_at,
            updated_at=lifecycle.updated_at,
            status=row.status,
            amount=row.amount,
            currency=row.currency,
            customer_id=row.customer_id,
            description=row.description,
            metadata=row.metadata,
        )

    def to_persistence(self, aggregate: Payment[Any]) -> PaymentRow:
        """Build a row from a payment.

        Empty metadata becomes None (SQL NULL).

        Raises:
            InvalidAmountError: If the amount does not fit amount_type.
        """
        self._check_amount_fits(aggregate.amount)
        metadata = aggregate.metadata
        return PaymentRow(
            **self._lifecycle_columns(aggregate.lifecycle),
            amount=aggregate.amount.amount,
            currency=aggregate.amount.currency,
            status=aggregate.status.value,
            customer_id=aggregate.customer_id,
            description=aggregate.description,
            metadata=None if metadata.is_empty else metadata.to_dict(),
        )

    def _check_amount_fits(self, money: Money) -> None:
        if self._amount_type is None or self._amount_type.scale is None:
            return

        precision = self._amount_type.precision
        scale = self._amount_type.scale
        amount = money.amount

        if amount.quantize(Decimal(1).scaleb(-scale)) != amount:
            raise InvalidAmountError(
                f"Amount {money} has more than {scale} decimal places and cannot be stored exactly"
            )

        if precision is not None and amount.adjusted() >= precision - scale:
            raise InvalidAmountError(
                f"Amount {money} exceeds {precision - scale} integer digits and cannot be stored"
            )
