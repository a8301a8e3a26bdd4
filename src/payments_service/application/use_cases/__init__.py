"""Use cases - one class per command or query, invoked via execute()."""

from payments_service.application.use_cases.create_payment import (
    CreatePaymentCommand,
    CreatePaymentUseCase,
)
from payments_service.application.use_cases.get_payment import GetPaymentQuery, GetPaymentUseCase
from payments_service.application.use_cases.list_payments import (
    ListPaymentsQuery,
    ListPaymentsUseCase,
)

__all__ = [
    "CreatePaymentCommand",
    "CreatePaymentUseCase",
    "GetPaymentQuery",
    "GetPaymentUseCase",
    "ListPaymentsQuery",
    "ListPaymentsUseCase",
]
