"""Value objects - Immutable objects defined by their attributes."""

from payments_service.domain.value_objects.currency import VALID_CURRENCIES, minor_units
from payments_service.domain.value_objects.metadata import Metadata
from payments_service.domain.value_objects.money import Money

__all__ = [
    "VALID_CURRENCIES",
    "Metadata",
    "Money",
    "minor_units",
]
