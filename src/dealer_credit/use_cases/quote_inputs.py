"""Inputs shared by every quoting use case."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dealer_credit.domain.credit import LoanTerms
from dealer_credit.domain.down_payment import DEFAULT_DOWN_PAYMENT_PERCENT, DownPaymentPlan


@dataclass(frozen=True, slots=True)
class QuoteInputs:
    """
    What the dealer enters before any bank is involved.

    The down payment may be given as a percentage or as an amount; an amount
    wins when both are present. With neither, the default percentage applies.
    """

    vehicle_price: Decimal
    term_months: int
    down_payment_percent: Decimal | None = None
    down_payment_amount: Decimal | None = None
    start_date: date | None = None

    def down_payment_plan(self) -> DownPaymentPlan:
        if self.down_payment_amount is not None:
            return DownPaymentPlan.from_amount(self.vehicle_price, self.down_payment_amount)
        percent = (
            DEFAULT_DOWN_PAYMENT_PERCENT
            if self.down_payment_percent is None
            else self.down_payment_percent
        )
        return DownPaymentPlan.from_percent(self.vehicle_price, percent)

    def loan_terms(self, plan: DownPaymentPlan, today: date) -> LoanTerms:
        terms = LoanTerms(
            principal=plan.financed_amount,
            term_months=self.term_months,
            start_date=self.start_date or today,
        )
        terms.validate()
        return terms
