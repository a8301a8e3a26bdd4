"""Tests for CreatePaymentUseCase.

Tests cover:
- Happy path: payment is processed, transitioned once and saved
- Processor outcome decides COMPLETED vs FAILED
- Validation failures raise before anything is processed or saved
- Store failures propagate unchanged
- Structured log event on success
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest
from structlog.testing import capture_logs

from payments_service.application.exceptions import PersistenceError
from payments_service.application.pagination import Page, Pagination
from payments_service.application.ports import PaymentRepository, ProcessingOutcome
from payments_service.application.use_cases import CreatePaymentCommand, CreatePaymentUseCase
from payments_service.domain.entities import Payment, PaymentStatus, Persisted
from payments_service.domain.exceptions import (
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidCustomerIdError,
)
from payments_service.infrastructure.payment_processor import FixedOutcomePaymentProcessor
from payments_service.infrastructure.persistence import InMemoryPaymentRepository

# =============================================================================
# Fixtures
# =============================================================================


class FailingPaymentRepository(PaymentRepository):
    """Repository whose store is unavailable."""

    async def find_one(self, criteria: Any) -> Payment[Persisted] | None:
        raise PersistenceError("store unavailable")

    async def find_with_pagination(self, criteria: Any, pagination: Pagination) -> Page[Payment[Persisted]]:
        raise PersistenceError("store unavailable")

    async def save(self, aggregate: Payment[Any]) -> Payment[Persisted]:
        raise PersistenceError("store unavailable")


@pytest.fixture
def use_case(
    payment_repository: InMemoryPaymentRepository,
    processor: FixedOutcomePaymentProcessor,
) -> CreatePaymentUseCase:
    return CreatePaymentUseCase(payment_repository, processor)


@pytest.fixture
def command() -> CreatePaymentCommand:
    return CreatePaymentCommand(
        amount=Decimal("100.00"),
        currency="USD",
        customer_id="cust_123",
        description="Order #42",
        metadata={"order_id": "42"},
    )


# =============================================================================
# Happy Path Tests
# =============================================================================


class TestCreatePaymentHappyPath:
    """Test a valid command produces a saved, terminal payment."""

    @pytest.mark.asyncio
    async def test_successful_processing_completes_payment(
        self, use_case: CreatePaymentUseCase, command: CreatePaymentCommand
    ) -> None:
        payment = await use_case.execute(command)

        assert payment.status == PaymentStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_failed_processing_fails_payment(
        self,
        use_case: CreatePaymentUseCase,
        processor: FixedOutcomePaymentProcessor,
        command: CreatePaymentCommand,
    ) -> None:
        processor.set_outcome(ProcessingOutcome.FAILED)

        payment = await use_case.execute(command)

        assert payment.status == PaymentStatus.FAILED

    @pytest.mark.asyncio
    async def test_returns_payment_with_store_assigned_identity(
        self,
        use_case: CreatePaymentUseCase,
        command: CreatePaymentCommand,
        fixed_time: datetime,
    ) -> None:
        payment = await use_case.execute(command)

        assert payment.is_persisted()
        assert payment.created_at == fixed_time
        assert payment.updated_at == fixed_time

    @pytest.mark.asyncio
    async def test_returned_payment_carries_command_values(
        self, use_case: CreatePaymentUseCase, command: CreatePaymentCommand
    ) -> None:
        payment = await use_case.execute(command)

        assert payment.amount.amount == Decimal("100.00")
        assert payment.amount.currency == "USD"
        assert payment.customer_id == "cust_123"
        assert payment.description == "Order #42"
        assert payment.metadata.to_dict() == {"order_id": "42"}

    @pytest.mark.asyncio
    async def test_payment_is_retrievable_after_create(
        self,
        use_case: CreatePaymentUseCase,
        payment_repository: InMemoryPaymentRepository,
        command: CreatePaymentCommand,
    ) -> None:
        payment = await use_case.execute(command)

        stored = await payment_repository.get(payment.id)

        assert stored is not None
        assert stored.id == payment.id
        assert stored.status == PaymentStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_processor_sees_pending_payment_once(
        self,
        use_case: CreatePaymentUseCase,
        processor: FixedOutcomePaymentProcessor,
        command: CreatePaymentCommand,
    ) -> None:
        await use_case.execute(command)

        assert len(processor.processed) == 1
        assert processor.processed[0].is_persisted() is False

    @pytest.mark.asyncio
    async def test_optional_fields_default(
        self, use_case: CreatePaymentUseCase
    ) -> None:
        payment = await use_case.execute(
            CreatePaymentCommand(amount="5", currency="EUR", customer_id="cust_9")
        )

        assert payment.description is None
        assert payment.metadata.is_empty
        assert payment.amount.amount == Decimal("5.00")

    @pytest.mark.asyncio
    async def test_logs_payment_created(
        self, use_case: CreatePaymentUseCase, command: CreatePaymentCommand
    ) -> None:
        with capture_logs() as logs:
            payment = await use_case.execute(command)

        events = [log for log in logs if log["event"] == "payment_created"]
        assert len(events) == 1
        assert events[0]["payment_id"] == str(payment.id)
        assert events[0]["status"] == "COMPLETED"


# =============================================================================
# Validation Tests
# =============================================================================


class TestCreatePaymentValidation:
    """Test invalid input is rejected before processing and saving."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "error"),
        [
            ({"amount": 0}, InvalidAmountError),
            ({"amount": "-10"}, InvalidAmountError),
            ({"currency": "usd"}, InvalidCurrencyError),
            ({"currency": "XYZ"}, InvalidCurrencyError),
            ({"customer_id": ""}, InvalidCustomerIdError),
        ],
    )
    async def test_invalid_input_raises_and_saves_nothing(
        self,
        use_case: CreatePaymentUseCase,
        payment_repository: InMemoryPaymentRepository,
        processor: FixedOutcomePaymentProcessor,
        overrides: dict[str, Any],
        error: type[Exception],
    ) -> None:
        values: dict[str, Any] = {"amount": "10.00", "currency": "USD", "customer_id": "cust_1"}
        values.update(overrides)

        with pytest.raises(error):
            await use_case.execute(CreatePaymentCommand(**values))

        page = await payment_repository.find_with_pagination({}, Pagination())
        assert page.total == 0
        assert processor.processed == []


# =============================================================================
# Persistence Failure Tests
# =============================================================================


class TestCreatePaymentPersistenceFailure:
    """Test store failures reach the caller unchanged."""

    @pytest.mark.asyncio
    async def test_persistence_error_propagates(
        self,
        processor: FixedOutcomePaymentProcessor,
        command: CreatePaymentCommand,
    ) -> None:
        use_case = CreatePaymentUseCase(FailingPaymentRepository(), processor)

        with pytest.raises(PersistenceError, match="store unavailable"):
            await use_case.execute(command)
