"""Test suite for QuoteCredit use case."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import Mock

import pytest

from dealer_credit.domain.credit import OfferOverride
from dealer_credit.domain.errors import InvalidInputError, NotFoundError, OfferComputationError
from dealer_credit.domain.rating import RatingLabel
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository
from dealer_credit.use_cases.quote_credit import (
    QuoteCredit,
    QuoteCreditRequest,
    QuoteCreditResponse,
)
from dealer_credit.use_cases.quote_inputs import QuoteInputs


@pytest.fixture()
def use_case(repository, today) -> QuoteCredit:
    return QuoteCredit(bank_catalog_repository=repository, today=today)


@pytest.fixture()
def inputs() -> QuoteInputs:
    return QuoteInputs(vehicle_price=Decimal("350000"), term_months=36)


# ==============================================================================
# Happy Path Tests
# ==============================================================================


def test_quote_with_default_down_payment(use_case: QuoteCredit, inputs: QuoteInputs) -> None:
    """Twenty percent down leaves 280,000 to finance."""
    response = use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=1))

    assert isinstance(response, QuoteCreditResponse)
    assert response.down_payment.percent == Decimal("20")
    assert response.down_payment.amount == Decimal("70000")
    assert response.result.principal == Decimal("280000")
    assert response.result.bank.name == "BBVA"
    assert 9_367 < response.result.monthly_payment < 9_368
    assert response.customized is False
    assert response.rating is None


def test_schedule_starts_a_month_after_today(use_case: QuoteCredit, inputs: QuoteInputs) -> None:
    response = use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=1))

    assert response.result.schedule[0].due_date == date(2026, 2, 15)


def test_explicit_start_date_wins_over_today(use_case: QuoteCredit) -> None:
    inputs = QuoteInputs(
        vehicle_price=Decimal("350000"), term_months=12, start_date=date(2026, 3, 31)
    )

    response = use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=1))

    assert response.result.schedule[0].due_date == date(2026, 4, 30)


def test_down_payment_amount_wins_over_percent(use_case: QuoteCredit) -> None:
    inputs = QuoteInputs(
        vehicle_price=Decimal("350000"),
        term_months=36,
        down_payment_percent=Decimal("50"),
        down_payment_amount=Decimal("35000"),
    )

    response = use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=1))

    assert response.down_payment.percent == Decimal("10.00")
    assert response.result.principal == Decimal("315000")


def test_quote_with_rating(use_case: QuoteCredit, inputs: QuoteInputs) -> None:
    response = use_case.execute(
        QuoteCreditRequest(inputs=inputs, bank_id=1, include_rating=True)
    )

    assert response.rating is not None
    assert response.rating.overall_rating is RatingLabel.LARGE
    assert response.rating.vehicle_value == Decimal("350000")


def test_quote_with_custom_rate(use_case: QuoteCredit, inputs: QuoteInputs) -> None:
    response = use_case.execute(
        QuoteCreditRequest(
            inputs=inputs, bank_id=1, override=OfferOverride(annual_rate_percent="10")
        )
    )

    assert response.customized is True
    assert response.result.bank.annual_rate_percent == Decimal("10")
    assert response.result.monthly_payment < Decimal("9367")


def test_empty_override_is_not_customized(use_case: QuoteCredit, inputs: QuoteInputs) -> None:
    response = use_case.execute(
        QuoteCreditRequest(inputs=inputs, bank_id=1, override=OfferOverride())
    )

    assert response.customized is False


# ==============================================================================
# Error Tests
# ==============================================================================


def test_unknown_bank_raises_not_found(inputs: QuoteInputs, today) -> None:
    repository = Mock(spec=BankCatalogRepository)
    repository.get_by_id.return_value = None
    use_case = QuoteCredit(bank_catalog_repository=repository, today=today)

    with pytest.raises(NotFoundError) as exc_info:
        use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=42))

    assert exc_info.value.message == "Bank with identifier '42' not found"
    repository.get_by_id.assert_called_once_with(42)


def test_invalid_custom_rate_raises(use_case: QuoteCredit, inputs: QuoteInputs) -> None:
    with pytest.raises(OfferComputationError):
        use_case.execute(
            QuoteCreditRequest(
                inputs=inputs, bank_id=1, override=OfferOverride(annual_rate_percent="abc")
            )
        )


def test_term_outside_the_allowed_set_raises(use_case: QuoteCredit) -> None:
    inputs = QuoteInputs(vehicle_price=Decimal("350000"), term_months=18)

    with pytest.raises(InvalidInputError, match="term_months"):
        use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=1))


def test_down_payment_equal_to_price_raises(use_case: QuoteCredit) -> None:
    inputs = QuoteInputs(
        vehicle_price=Decimal("350000"),
        term_months=36,
        down_payment_amount=Decimal("350000"),
    )

    with pytest.raises(InvalidInputError, match="down_payment_amount"):
        use_case.execute(QuoteCreditRequest(inputs=inputs, bank_id=1))


def test_inputs_are_validated_before_the_catalog(inputs: QuoteInputs, today) -> None:
    repository = Mock(spec=BankCatalogRepository)
    use_case = QuoteCredit(bank_catalog_repository=repository, today=today)
    bad = QuoteInputs(vehicle_price=Decimal("0"), term_months=36)

    with pytest.raises(InvalidInputError, match="vehicle_price"):
        use_case.execute(QuoteCreditRequest(inputs=bad, bank_id=1))

    repository.get_by_id.assert_not_called()
