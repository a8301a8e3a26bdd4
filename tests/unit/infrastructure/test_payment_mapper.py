"""Tests for PaymentMapper.

Tests cover:
- Row → domain: value objects rebuilt, lifecycle is Persisted
- Domain → row: transient aggregates produce rows without identity
- Round trip: to_persistence(to_domain(row)) == row for stored rows in canonical form
- Empty-dict metadata normalizes to None
- Amounts that do not fit the column type are rejected
- Corrupt rows raise instead of producing a degraded payment
"""

import uuid
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy import Numeric

from payments_service.domain.entities import Payment, PaymentStatus, Persisted, Transient
from payments_service.domain.exceptions import InvalidAmountError, InvalidPaymentStatusError, ValidationError
from payments_service.domain.value_objects import Metadata, Money
from payments_service.infrastructure.persistence import PaymentMapper, PaymentRow

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mapper() -> PaymentMapper:
    return PaymentMapper()


@pytest.fixture
def stored_at() -> datetime:
    return datetime(2024, 3, 1, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def stored_row(stored_at: datetime) -> PaymentRow:
    return PaymentRow(
        id=uuid.uuid4(),
        created_at=stored_at,
        updated_at=stored_at,
        deleted_at=None,
        amount=Decimal("49.90"),
        currency="EUR",
        status="COMPLETED",
        customer_id="cust_7",
        description="Subscription",
        metadata={"plan": "pro", "seats": 3},
    )


# =============================================================================
# to_domain Tests
# =============================================================================


class TestToDomain:
    """Test rows become loaded payments."""

    def test_maps_all_fields(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        payment = mapper.to_domain(stored_row)

        assert payment.id == stored_row.id
        assert payment.created_at == stored_row.created_at
        assert payment.updated_at == stored_row.updated_at
        assert payment.amount == Money.create("49.90", "EUR")
        assert payment.status == PaymentStatus.COMPLETED
        assert payment.customer_id == "cust_7"
        assert payment.description == "Subscription"
        assert payment.metadata == Metadata.create({"plan": "pro", "seats": 3})

    def test_lifecycle_is_persisted(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        assert isinstance(mapper.to_domain(stored_row).lifecycle, Persisted)

    def test_null_metadata_becomes_empty(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        row = PaymentRow(
            id=stored_row.id,
            created_at=stored_row.created_at,
            updated_at=stored_row.updated_at,
            amount=stored_row.amount,
            currency=stored_row.currency,
            status=stored_row.status,
            customer_id=stored_row.customer_id,
        )

        payment = mapper.to_domain(row)

        assert payment.metadata.is_empty
        assert payment.description is None

    def test_unknown_status_raises(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        with pytest.raises(InvalidPaymentStatusError):
            mapper.to_domain(replace(stored_row, status="CHARGEBACK"))

    def test_invalid_amount_raises(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        with pytest.raises(ValidationError):
            mapper.to_domain(replace(stored_row, amount=Decimal("0")))

    def test_row_without_identity_raises(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        with pytest.raises(ValueError, match="no identity"):
            mapper.to_domain(replace(stored_row, id=None))

    def test_to_domain_many_preserves_order(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        second = replace(stored_row, id=uuid.uuid4())

        payments = mapper.to_domain_many([stored_row, second])

        assert [p.id for p in payments] == [stored_row.id, second.id]


# =============================================================================
# to_persistence Tests
# =============================================================================


class TestToPersistence:
    """Test payments become rows."""

    def test_transient_payment_has_no_identity_columns(self, mapper: PaymentMapper) -> None:
        payment: Payment[Transient] = Payment.create(
            amount=Money.create("10", "USD"), customer_id="cust_1"
        )

        row = mapper.to_persistence(payment)

        assert row.id is None
        assert row.created_at is None
        assert row.updated_at is None
        assert row.deleted_at is None
        assert row.amount == Decimal("10.00")
        assert row.currency == "USD"
        assert row.status == "PENDING"

    def test_empty_metadata_is_stored_as_null(self, mapper: PaymentMapper) -> None:
        payment = Payment.create(amount=Money.create("10", "USD"), customer_id="cust_1")

        assert mapper.to_persistence(payment).metadata is None

    def test_metadata_is_a_detached_dict(self, mapper: PaymentMapper) -> None:
        payment = Payment.create(
            amount=Money.create("10", "USD"),
            customer_id="cust_1",
            metadata=Metadata.create({"tags": ["a"]}),
        )

        row = mapper.to_persistence(payment)
        assert row.metadata is not None
        row.metadata["tags"].append("b")

        assert payment.metadata.get("tags") == ["a"]

    def test_status_follows_transition(self, mapper: PaymentMapper) -> None:
        payment = Payment.create(amount=Money.create("10", "USD"), customer_id="cust_1")
        payment.fail()

        assert mapper.to_persistence(payment).status == "FAILED"


# =============================================================================
# Round Trip Tests
# =============================================================================


class TestRoundTrip:
    """Test stored rows survive a domain round trip unchanged."""

    def test_row_round_trip(self, mapper: PaymentMapper, stored_row: PaymentRow) -> None:
        assert mapper.to_persistence(mapper.to_domain(stored_row)) == stored_row

    def test_row_round_trip_with_nulls(self, mapper: PaymentMapper, stored_at: datetime) -> None:
        row = PaymentRow(
            id=uuid.uuid4(),
            created_at=stored_at,
            updated_at=stored_at,
            amount=Decimal("1.00"),
            currency="USD",
            status="PENDING",
            customer_id="cust_1",
            description=None,
            metadata=None,
        )

        assert mapper.to_persistence(mapper.to_domain(row)) == row

    def test_empty_dict_metadata_normalizes_to_null(
        self, mapper: PaymentMapper, stored_row: PaymentRow
    ) -> None:
        row = replace(stored_row, metadata={})

        assert mapper.to_persistence(mapper.to_domain(row)) == replace(row, metadata=None)

    def test_column_names(self) -> None:
        assert PaymentMapper.column_names() == {
            "id",
            "created_at",
            "updated_at",
            "deleted_at",
            "amount",
            "currency",
            "status",
            "customer_id",
            "description",
            "metadata",
        }


# =============================================================================
# Column Fit Tests
# =============================================================================


class TestAmountColumnFit:
    """Test amounts are checked against the column's precision and scale."""

    @pytest.fixture
    def column_mapper(self) -> PaymentMapper:
        return PaymentMapper(amount_type=Numeric(10, 2))

    @pytest.mark.parametrize(
        ("amount", "currency"),
        [("1.234", "KWD"), ("2.0001", "CLF"), ("0.005", "BHD")],
    )
    def test_rejects_amount_finer_than_scale(
        self, column_mapper: PaymentMapper, amount: str, currency: str
    ) -> None:
        payment = Payment.create(amount=Money.create(amount, currency), customer_id="cust_1")

        with pytest.raises(InvalidAmountError, match="more than 2 decimal places"):
            column_mapper.to_persistence(payment)

    def test_rejects_amount_beyond_precision(self, column_mapper: PaymentMapper) -> None:
        payment = Payment.create(amount=Money.create("100000000", "USD"), customer_id="cust_1")

        with pytest.raises(InvalidAmountError, match="8 integer digits"):
            column_mapper.to_persistence(payment)

    @pytest.mark.parametrize(
        ("amount", "currency"),
        [("1500", "JPY"), ("99999999.99", "USD"), ("1.230", "KWD"), ("2.5", "CLF")],
    )
    def test_accepts_amount_that_fits(
        self, column_mapper: PaymentMapper, amount: str, currency: str
    ) -> None:
        payment = Payment.create(amount=Money.create(amount, currency), customer_id="cust_1")

        row = column_mapper.to_persistence(payment)

        assert row.amount == Decimal(amount)

    def test_without_column_type_any_precision_is_kept(self, mapper: PaymentMapper) -> None:
        payment = Payment.create(amount=Money.create("1.234", "KWD"), customer_id="cust_1")

        assert mapper.to_persistence(payment).amount == Decimal("1.234")
