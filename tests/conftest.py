"""Shared pytest fixtures for the test suite."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from payments_service.domain.entities import Payment, Transient
from payments_service.domain.value_objects import Metadata, Money
from payments_service.infrastructure.payment_processor import FixedOutcomePaymentProcessor
from payments_service.infrastructure.persistence import InMemoryPaymentRepository
from payments_service.infrastructure.time_provider import FixedTimeProvider


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def payment_repository(time_provider: FixedTimeProvider) -> InMemoryPaymentRepository:
    """An empty in-memory payment repository on the fixed clock."""
    return InMemoryPaymentRepository(time_provider)


@pytest.fixture
def processor() -> FixedOutcomePaymentProcessor:
    """A processor that always succeeds unless told otherwise."""
    return FixedOutcomePaymentProcessor()


@pytest.fixture
def transient_payment() -> Payment[Transient]:
    """A new PENDING payment of 100.00 USD with one metadata entry."""
    return Payment.create(
        amount=Money.create(Decimal("100.00"), "USD"),
        customer_id="cust_123",
        description="Order #42",
        metadata=Metadata.create({"order_id": "42"}),
    )
