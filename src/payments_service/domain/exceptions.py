"""Domain exceptions for payments-service.

Exception hierarchy:
    DomainException (base)
    ├── Validation Errors
    │   └── ValidationError
    │       ├── InvalidAmountError
    │       ├── InvalidCurrencyError
    │       ├── InvalidCustomerIdError
    │       ├── InvalidPaymentStatusError
    │       ├── InvalidPaymentIdError
    │       └── InvalidPaginationError
    ├── State & Transition Errors
    │   └── InvalidStateTransitionError
    └── Not Found Errors
        └── EntityNotFoundError
            └── PaymentNotFoundError

Validation errors are raised synchronously at construction time; nothing is
partially applied when one is raised.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(DomainException):
    """Raised when raw input cannot be turned into a valid domain object."""


class InvalidAmountError(ValidationError):
    """Raised when a monetary amount fails validation.

    The amount must be a finite decimal greater than 0 with no more decimal
    places than the currency's minor unit allows.
    """


class InvalidCurrencyError(ValidationError):
    """Raised when a currency is not an uppercase ISO-4217 alphabetic code."""


class InvalidCustomerIdError(ValidationError):
    """Raised when a payment is given an empty customer ID."""


class InvalidPaymentStatusError(ValidationError):
    """Raised when a stored status value is not a known PaymentStatus.

    Only reachable when loading a corrupt row.
    """


class InvalidPaymentIdError(ValidationError):
    """Raised when a payment ID is not a valid UUID."""


class InvalidPaginationError(ValidationError):
    """Raised when page or limit is lower than 1."""


# =============================================================================
# State & Transition Errors
# =============================================================================


class InvalidStateTransitionError(DomainException):
    """Raised when a status change violates the payment state machine.

    Valid transitions:
        - pending → completed
        - pending → failed

    Completed and failed are terminal. The aggregate is left unmodified
    when this error is raised.
    """


# =============================================================================
# Not Found Errors
# =============================================================================


class EntityNotFoundError(DomainException):
    """Raised when an entity expected to exist in the store is missing."""


class PaymentNotFoundError(EntityNotFoundError):
    """Raised when a payment cannot be found by ID.

    Soft-deleted payments are reported as not found.
    """
