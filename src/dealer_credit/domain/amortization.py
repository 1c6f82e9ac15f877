"""
Fixed-rate amortization engine.

Pure functions over Decimal inputs. Nothing here rounds: values keep full
Decimal precision and are rounded only when rendered for display.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from dealer_credit.domain.credit import (
    AmortizationRow,
    BankOffer,
    CalculationResult,
    ComparisonEntry,
    CreditRequest,
    CreditSummary,
    LoanTerms,
    OfferOverride,
)
from dealer_credit.domain.errors import InvalidInputError, OfferComputationError


# Running balances below one cent are floating drift, not debt.
BALANCE_EPSILON = Decimal("0.01")

_ZERO = Decimal("0")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")
_MONTHS_PER_YEAR = Decimal("12")


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / _HUNDRED / _MONTHS_PER_YEAR


def compute_monthly_payment(
    principal: Decimal, annual_rate_percent: Decimal, term_months: int
) -> Decimal:
    """
    Standard amortized loan payment.

    monthly_payment = P * r * (1+r)^n / ((1+r)^n - 1), with r the monthly rate.
    A zero rate falls back to straight-line repayment (P / n).

    Raises:
        InvalidInputError: If principal or term is not positive, or the rate
            is negative or not finite
    """
    _check_rate(annual_rate_percent)
    if not principal.is_finite() or principal <= 0:
        raise InvalidInputError("principal must be > 0", principal=str(principal))
    if term_months <= 0:
        raise InvalidInputError("term_months must be > 0", term_months=term_months)

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return principal / Decimal(term_months)

    factor = (_ONE + rate) ** term_months
    return principal * rate * factor / (factor - _ONE)


def generate_schedule(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_months: int,
    start_date: date,
) -> list[AmortizationRow]:
    """
    Build the row-by-row amortization schedule.

    Row i is due i calendar months after start_date. The running balance is
    clamped to zero once it drops below one cent, so the final row always
    closes the loan.

    An empty schedule is returned for a zero principal or zero term.

    Raises:
        InvalidInputError: For negative principal/term or an invalid rate
    """
    _check_rate(annual_rate_percent)
    if not principal.is_finite() or principal < 0:
        raise InvalidInputError("principal must be >= 0", principal=str(principal))
    if term_months < 0:
        raise InvalidInputError("term_months must be >= 0", term_months=term_months)
    if principal == 0 or term_months == 0:
        return []

    payment = compute_monthly_payment(principal, annual_rate_percent, term_months)
    rate = monthly_rate(annual_rate_percent)
    balance = principal
    rows: list[AmortizationRow] = []

    for number in range(1, term_months + 1):
        interest = balance * rate
        principal_portion = payment - interest
        balance -= principal_portion
        if balance < BALANCE_EPSILON:
            balance = _ZERO

        rows.append(
            AmortizationRow(
                payment_number=number,
                due_date=start_date + relativedelta(months=number),
                payment_amount=payment,
                principal_portion=principal_portion,
                interest_portion=interest,
                remaining_balance=balance,
            )
        )

    return rows


def summarize(
    schedule: Iterable[AmortizationRow],
    opening_commission_percent: Decimal,
    principal: Decimal,
) -> CreditSummary:
    total_paid = sum((row.payment_amount for row in schedule), _ZERO)
    return CreditSummary(
        total_amount_paid=total_paid,
        total_interest=total_paid - principal,
        opening_commission_amount=principal * opening_commission_percent / _HUNDRED,
    )


def calculate_offer(request: CreditRequest, bank: BankOffer) -> CalculationResult:
    """
    Full calculation for one bank: payment, schedule and totals.

    The request carries the effective rate and commission; ``bank`` is
    attached to the result as-is (already overridden, if it was).
    """
    request.validate()

    payment = compute_monthly_payment(
        request.principal, request.annual_rate_percent, request.term_months
    )
    schedule = generate_schedule(
        request.principal,
        request.annual_rate_percent,
        request.term_months,
        request.start_date,
    )
    summary = summarize(schedule, request.opening_commission_percent, request.principal)

    return CalculationResult(
        bank=bank,
        principal=request.principal,
        term_months=request.term_months,
        monthly_payment=payment,
        total_amount_paid=summary.total_amount_paid,
        total_interest=summary.total_interest,
        opening_commission_amount=summary.opening_commission_amount,
        schedule=tuple(schedule),
    )


def compare_offers(
    terms: LoanTerms,
    offers: Sequence[BankOffer],
    overrides: Mapping[int, OfferOverride] | None = None,
) -> list[ComparisonEntry]:
    """
    Compute every offer for the same principal and term, cheapest first.

    Successful entries are ordered by monthly payment; ties keep input order
    (sorted() is stable). An offer that cannot be computed is kept as an
    entry carrying its OfferComputationError, after the successful ones and
    in input order.

    Raises:
        InvalidInputError: If the shared terms themselves are invalid
    """
    terms.validate()
    overrides = overrides or {}

    computed: list[ComparisonEntry] = []
    failed: list[ComparisonEntry] = []

    for offer in offers:
        override = overrides.get(offer.id)
        customized = override is not None and not override.is_empty
        try:
            effective = override.apply(offer) if override is not None else offer
            result = calculate_offer(terms.for_offer(effective), effective)
        except OfferComputationError as exc:
            failed.append(ComparisonEntry(bank=offer, error=exc, customized=customized))
        except InvalidInputError as exc:
            error = OfferComputationError(exc.message, bank_id=offer.id)
            failed.append(ComparisonEntry(bank=offer, error=error, customized=customized))
        else:
            computed.append(
                ComparisonEntry(bank=effective, result=result, customized=customized)
            )

    ranked = sorted(computed, key=lambda entry: entry.result.monthly_payment)  # type: ignore[union-attr]
    return ranked + failed


def _check_rate(annual_rate_percent: Decimal) -> None:
    if not annual_rate_percent.is_finite() or annual_rate_percent < 0:
        raise InvalidInputError(
            "annual_rate_percent must be a finite number >= 0",
            annual_rate_percent=str(annual_rate_percent),
        )
