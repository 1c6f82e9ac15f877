"""
How a credit evolves against the value of the vehicle it pays for.

Depreciation is an approximation used for the dealer's chart: a new car
loses about 15% in its first year and about 10% a year afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dealer_credit.domain.credit import CalculationResult
from dealer_credit.domain.errors import InvalidInputError


FIRST_YEAR_ANNUAL_DEPRECIATION = Decimal("0.15")
LATER_ANNUAL_DEPRECIATION = Decimal("0.10")
FIRST_YEAR_MONTHS = 12

_ZERO = Decimal("0")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")
_MONTHS_PER_YEAR = Decimal("12")


@dataclass(frozen=True, slots=True)
class ValuePoint:
    month: int
    value: Decimal


@dataclass(frozen=True, slots=True)
class PaymentPoint:
    month: int
    total_paid: Decimal
    principal_paid: Decimal
    interest_paid: Decimal


@dataclass(frozen=True, slots=True)
class CreditCosts:
    principal: Decimal
    total_interest: Decimal
    opening_commission: Decimal
    total_cost: Decimal
    cost_percentage: Decimal


@dataclass(frozen=True, slots=True)
class CreditEvolution:
    depreciation: tuple[ValuePoint, ...]
    payments: tuple[PaymentPoint, ...]
    break_even_month: int
    key_months: tuple[int, ...]
    costs: CreditCosts


def depreciation_curve(vehicle_value: Decimal, term_months: int) -> list[ValuePoint]:
    """Estimated vehicle value for every month from 0 to term_months."""
    first_year_rate = FIRST_YEAR_ANNUAL_DEPRECIATION / _MONTHS_PER_YEAR
    later_rate = LATER_ANNUAL_DEPRECIATION / _MONTHS_PER_YEAR

    points = [ValuePoint(month=0, value=vehicle_value)]
    value = vehicle_value
    for month in range(1, term_months + 1):
        rate = first_year_rate if month <= FIRST_YEAR_MONTHS else later_rate
        value = value * (_ONE - rate)
        points.append(ValuePoint(month=month, value=value))
    return points


def key_months(term_months: int) -> tuple[int, ...]:
    """Start, quarter marks and end of the term."""
    return (
        0,
        term_months // 4,
        term_months // 2,
        term_months * 3 // 4,
        term_months,
    )


def project_evolution(
    result: CalculationResult,
    vehicle_value: Decimal,
    down_payment_amount: Decimal,
) -> CreditEvolution:
    """
    Project cumulative payments and vehicle value over the credit's term.

    Month 0 of the payment curve is the down payment alone. The break-even
    month is the first month where everything paid reaches the vehicle
    value; if that never happens it is the last month of the term.
    """
    if not vehicle_value.is_finite() or vehicle_value <= 0:
        raise InvalidInputError("vehicle_value must be > 0")
    if not down_payment_amount.is_finite() or down_payment_amount < 0:
        raise InvalidInputError("down_payment_amount must be >= 0")

    term = result.term_months
    total_paid = down_payment_amount
    principal_paid = _ZERO
    interest_paid = _ZERO
    payments = [PaymentPoint(0, total_paid, principal_paid, interest_paid)]

    for row in result.schedule:
        total_paid += row.payment_amount
        principal_paid += row.principal_portion
        interest_paid += row.interest_portion
        payments.append(
            PaymentPoint(row.payment_number, total_paid, principal_paid, interest_paid)
        )

    break_even = next(
        (point.month for point in payments if point.total_paid >= vehicle_value),
        term,
    )

    total_cost = interest_paid + result.opening_commission_amount
    costs = CreditCosts(
        principal=result.principal,
        total_interest=interest_paid,
        opening_commission=result.opening_commission_amount,
        total_cost=total_cost,
        cost_percentage=total_cost / result.principal * _HUNDRED,
    )

    return CreditEvolution(
        depreciation=tuple(depreciation_curve(vehicle_value, term)),
        payments=tuple(payments),
        break_even_month=break_even,
        key_months=key_months(term),
        costs=costs,
    )
