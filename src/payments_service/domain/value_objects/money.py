from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from payments_service.domain.exceptions import InvalidAmountError, InvalidCurrencyError
from payments_service.domain.value_objects.currency import is_valid_currency, minor_units


@dataclass(frozen=True, slots=True)
class Money:
    """Value object for a positive monetary amount in a single currency.

      - amount > 0, finite, at most the currency's minor-unit precision
      - currency is an uppercase ISO-4217 code ("us" and "usd" are rejected)
      - amount is quantized to the currency's minor units, so
        Money.create(10, "USD") == Money.create("10.00", "USD")
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        if not is_valid_currency(self.currency):
            raise InvalidCurrencyError(
                f"Currency must be an uppercase ISO-4217 code, got {self.currency!r}"
            )

        amount = _to_decimal(self.amount)

        if not amount.is_finite():
            raise InvalidAmountError(f"Amount must be finite, got {amount}")

        if amount <= 0:
            raise InvalidAmountError(f"Amount must be greater than 0, got {amount}")

        quantum = Decimal(1).scaleb(-minor_units(self.currency))
        try:
            normalized = amount.quantize(quantum)
        except InvalidOperation as e:
            raise InvalidAmountError(f"Amount is out of range: {amount}") from e

        if normalized != amount:
            raise InvalidAmountError(
                f"Amount {amount} has more than {minor_units(self.currency)} "
                f"decimal places for {self.currency}"
            )

        object.__setattr__(self, "amount", normalized)

    @classmethod
    def create(cls, amount: Decimal | int | float | str, currency: str) -> Money:
        """Build Money from primitive input.

        Args:
            amount: Amount in major units. Floats go through str() so 10.1
                stays 10.1 rather than its binary approximation.
            currency: ISO-4217 alphabetic code, uppercase.

        Returns:
            A Money instance.

        Raises:
            InvalidAmountError: If the amount is not a positive finite number
                within the currency's precision.
            InvalidCurrencyError: If the currency code is not recognized.
        """
        return cls(amount=_to_decimal(amount), currency=currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


def _to_decimal(value: object) -> Decimal:
    # bool is an int subclass; True would otherwise become Decimal(1)
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")

    if isinstance(value, Decimal):
        return value

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        return Decimal(str(value))

    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidAmountError(f"Amount must be a number, got {value!r}") from e

    raise InvalidAmountError(f"Amount must be a number, got {type(value).__name__}")
