"""
Qualitative credit rating shown next to a quote.

These are product heuristics, not mathematics: the thresholds and weights
below reproduce the dealership's scoring literally. Bucket edges are
inclusive on the better label (a cost of exactly 15% is still "Good").
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from dealer_credit.domain.credit import CalculationResult
from dealer_credit.domain.errors import InvalidInputError


class RatingLabel(str, Enum):
    GOOD = "Good"
    LARGE = "Large"
    POOR = "Poor"
    BAD = "Bad"


# Upper bounds (inclusive) for GOOD, LARGE and POOR; anything above is BAD.
COST_PERCENT_THRESHOLDS = (Decimal("15"), Decimal("25"), Decimal("35"))
CAT_SPREAD_THRESHOLDS = (Decimal("3"), Decimal("5"), Decimal("8"))
TERM_MONTHS_THRESHOLDS = (36, 48, 60)

# Lower bounds (inclusive) for GOOD, LARGE and POOR; anything below is BAD.
OVERALL_SCORE_THRESHOLDS = (Decimal("75"), Decimal("50"), Decimal("25"))

COST_PENALTY_PER_PERCENT = Decimal("2")
SPREAD_PENALTY_PER_POINT = Decimal("10")
REFERENCE_TERM_MONTHS = Decimal("60")

COST_WEIGHT = Decimal("0.5")
RATE_WEIGHT = Decimal("0.3")
TERM_WEIGHT = Decimal("0.2")

_LABELS = (RatingLabel.GOOD, RatingLabel.LARGE, RatingLabel.POOR)
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class CreditRating:
    cost_rating: RatingLabel
    rate_rating: RatingLabel
    term_rating: RatingLabel
    overall_rating: RatingLabel
    cost_score: Decimal
    rate_score: Decimal
    term_score: Decimal
    overall_score: Decimal
    cost_percentage: Decimal
    cat_vs_rate_diff: Decimal
    total_cost: Decimal
    vehicle_value: Decimal


def rate_credit(
    result: CalculationResult,
    vehicle_value: Decimal,
    term_months: int,
    effective_rate: Decimal | None = None,
    effective_cat: Decimal | None = None,
) -> CreditRating:
    """
    Classify a calculated credit into Good / Large / Poor / Bad buckets.

    Args:
        result: Calculation for the chosen bank
        vehicle_value: Value of the financed vehicle(s); reported back for display
        term_months: Credit term used for the term bucket and score
        effective_rate: Annual rate actually applied (defaults to the result's bank rate)
        effective_cat: CAT actually applied (defaults to the result's bank CAT)

    Raises:
        InvalidInputError: If the result has a non-positive principal
    """
    if result.principal <= 0:
        raise InvalidInputError("principal must be > 0 to rate a credit")

    rate = result.bank.annual_rate_percent if effective_rate is None else effective_rate
    cat = result.bank.cat_percent if effective_cat is None else effective_cat

    total_cost = result.total_interest + result.opening_commission_amount
    cost_percentage = total_cost / result.principal * _HUNDRED
    cat_vs_rate_diff = cat - rate

    cost_score = _clamp_score(_HUNDRED - cost_percentage * COST_PENALTY_PER_PERCENT)
    rate_score = _clamp_score(_HUNDRED - cat_vs_rate_diff * SPREAD_PENALTY_PER_POINT)
    term_score = _clamp_score(_HUNDRED - Decimal(term_months) / REFERENCE_TERM_MONTHS * _HUNDRED)
    overall_score = cost_score * COST_WEIGHT + rate_score * RATE_WEIGHT + term_score * TERM_WEIGHT

    return CreditRating(
        cost_rating=_bucket_at_most(cost_percentage, COST_PERCENT_THRESHOLDS),
        rate_rating=_bucket_at_most(cat_vs_rate_diff, CAT_SPREAD_THRESHOLDS),
        term_rating=_bucket_at_most(Decimal(term_months), TERM_MONTHS_THRESHOLDS),
        overall_rating=_bucket_at_least(overall_score, OVERALL_SCORE_THRESHOLDS),
        cost_score=cost_score,
        rate_score=rate_score,
        term_score=term_score,
        overall_score=overall_score,
        cost_percentage=cost_percentage,
        cat_vs_rate_diff=cat_vs_rate_diff,
        total_cost=total_cost,
        vehicle_value=vehicle_value,
    )


def _bucket_at_most(value: Decimal, thresholds: tuple) -> RatingLabel:
    for label, limit in zip(_LABELS, thresholds):
        if value <= limit:
            return label
    return RatingLabel.BAD


def _bucket_at_least(value: Decimal, thresholds: tuple) -> RatingLabel:
    for label, limit in zip(_LABELS, thresholds):
        if value >= limit:
            return label
    return RatingLabel.BAD


def _clamp_score(score: Decimal) -> Decimal:
    return max(_ZERO, min(_HUNDRED, score))
