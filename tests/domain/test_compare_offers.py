"""
Test suite for the multi-bank comparison.

- Cheapest monthly payment first, stable on ties
- Per-offer overrides (custom rate / CAT)
- Per-offer failures isolated from the rest of the comparison
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from dealer_credit.domain.amortization import compare_offers
from dealer_credit.domain.credit import LoanTerms, OfferOverride
from dealer_credit.domain.errors import InvalidInputError, OfferComputationError


@pytest.fixture
def terms(start_date) -> LoanTerms:
    return LoanTerms(principal=Decimal("200000"), term_months=48, start_date=start_date)


# ============================================================================
# Ordering
# ============================================================================


def test_sorts_by_monthly_payment(terms, three_offers):
    """Rates [14.5, 12.5, 13.8] → the 12.5% offer comes first."""
    entries = compare_offers(terms, three_offers)

    assert [entry.bank.annual_rate_percent for entry in entries] == [
        Decimal("12.5"),
        Decimal("13.8"),
        Decimal("14.5"),
    ]
    payments = [entry.result.monthly_payment for entry in entries]
    assert payments == sorted(payments)
    assert 5_315 < payments[0] < 5_317


def test_ties_keep_input_order(terms, offer_factory):
    offers = [
        offer_factory(9, "13.0", name="Ninth"),
        offer_factory(2, "13.0", name="Second"),
        offer_factory(5, "12.0", name="Fifth"),
        offer_factory(1, "13.0", name="First"),
    ]

    entries = compare_offers(terms, offers)

    assert [entry.bank.id for entry in entries] == [5, 9, 2, 1]


def test_every_offer_is_computed_with_the_same_terms(terms, three_offers):
    entries = compare_offers(terms, three_offers)

    for entry in entries:
        assert entry.ok
        assert entry.result.principal == terms.principal
        assert entry.result.term_months == 48
        assert len(entry.result.schedule) == 48
        assert entry.result.schedule[0].due_date.month == 2


def test_commission_comes_from_each_offer(terms, three_offers):
    entries = compare_offers(terms, three_offers)

    commissions = {entry.bank.id: entry.result.opening_commission_amount for entry in entries}
    assert commissions == {
        1: Decimal("4000"),
        3: Decimal("4400"),
        6: Decimal("3400"),
    }


def test_empty_offer_list(terms):
    assert compare_offers(terms, []) == []


def test_invalid_terms_abort_the_comparison(three_offers, start_date):
    terms = LoanTerms(principal=Decimal("0"), term_months=48, start_date=start_date)

    with pytest.raises(InvalidInputError, match="principal must be > 0"):
        compare_offers(terms, three_offers)


# ============================================================================
# Overrides
# ============================================================================


def test_custom_rate_can_change_the_ranking(terms, three_offers):
    overrides = {6: OfferOverride(annual_rate_percent=Decimal("9.9"))}

    entries = compare_offers(terms, three_offers, overrides)

    assert entries[0].bank.id == 6
    assert entries[0].bank.annual_rate_percent == Decimal("9.9")
    assert entries[0].customized is True
    assert all(not entry.customized for entry in entries[1:])


def test_custom_cat_keeps_the_payment(terms, three_offers):
    plain = compare_offers(terms, three_offers)
    custom = compare_offers(terms, three_offers, {1: OfferOverride(cat_percent="20.5")})

    assert custom[0].bank.cat_percent == Decimal("20.5")
    assert custom[0].result.monthly_payment == plain[0].result.monthly_payment


def test_override_accepts_raw_strings(terms, three_offers):
    entries = compare_offers(terms, three_offers, {3: OfferOverride(annual_rate_percent=" 10.5 ")})

    assert entries[0].bank.id == 3
    assert entries[0].bank.annual_rate_percent == Decimal("10.5")


def test_override_for_unknown_bank_is_ignored(terms, three_offers):
    entries = compare_offers(terms, three_offers, {99: OfferOverride(annual_rate_percent="1")})

    assert [entry.bank.id for entry in entries] == [1, 3, 6]


# ============================================================================
# Per-offer failures
# ============================================================================


@pytest.mark.parametrize("bad_rate", ["abc", "NaN", "-1", "Infinity", "150"])
def test_invalid_custom_rate_fails_only_that_offer(terms, three_offers, bad_rate):
    overrides = {1: OfferOverride(annual_rate_percent=bad_rate)}

    entries = compare_offers(terms, three_offers, overrides)

    assert len(entries) == 3
    assert [entry.bank.id for entry in entries] == [3, 6, 1]
    assert entries[0].ok and entries[1].ok

    failed = entries[2]
    assert not failed.ok
    assert failed.result is None
    assert isinstance(failed.error, OfferComputationError)
    assert failed.error.context["bank_id"] == 1
    assert failed.customized is True


def test_invalid_custom_cat_fails_only_that_offer(terms, three_offers):
    entries = compare_offers(terms, three_offers, {3: OfferOverride(cat_percent="x")})

    failed = [entry for entry in entries if not entry.ok]
    assert [entry.bank.id for entry in failed] == [3]
    assert failed[0].error.context["field"] == "cat_percent"


def test_failed_offers_keep_input_order(terms, three_offers):
    overrides = {
        3: OfferOverride(annual_rate_percent="bad"),
        6: OfferOverride(annual_rate_percent="worse"),
    }

    entries = compare_offers(terms, three_offers, overrides)

    assert [entry.bank.id for entry in entries] == [1, 6, 3]
    assert [entry.ok for entry in entries] == [True, False, False]


def test_invalid_reference_data_fails_only_that_offer(terms, offer_factory):
    offers = [offer_factory(1, "12.5"), offer_factory(2, "-3", cat="10")]

    entries = compare_offers(terms, offers)

    assert entries[0].ok
    assert not entries[1].ok
    assert isinstance(entries[1].error, OfferComputationError)


def test_all_offers_failing_still_returns_every_entry(terms, three_offers):
    overrides = {offer.id: OfferOverride(annual_rate_percent="?") for offer in three_offers}

    entries = compare_offers(terms, three_offers, overrides)

    assert [entry.bank.id for entry in entries] == [6, 1, 3]
    assert not any(entry.ok for entry in entries)
