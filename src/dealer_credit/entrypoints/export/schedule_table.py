"""
Amortization schedule as display rows for PDF export.

Currency follows the es-MX convention used on printed quotes: ``$`` prefix,
comma thousands separator, dot decimal separator, two decimals
(``$1,234.56``). Dates are written day/month/year.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from dealer_credit.domain.credit import AmortizationRow


SCHEDULE_COLUMNS = (
    "No. de pago",
    "Fecha de pago",
    "Pago",
    "Capital",
    "Interés",
    "Saldo",
)

_CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class ScheduleTableRow:
    payment_number: str
    due_date: str
    payment: str
    principal: str
    interest: str
    balance: str

    def as_tuple(self) -> tuple[str, ...]:
        return (
            self.payment_number,
            self.due_date,
            self.payment,
            self.principal,
            self.interest,
            self.balance,
        )


def round_money(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal) -> str:
    """Format a Decimal as es-MX currency, e.g. ``$1,234.56`` / ``-$12.00``."""
    rounded = round_money(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def format_percentage(value: Decimal | None) -> str:
    """Two-decimal percentage; missing or non-numeric values read as 0.00%."""
    if value is None or not value.is_finite():
        return "0.00%"
    return f"{round_money(value):.2f}%"


def build_schedule_table(schedule: Iterable[AmortizationRow]) -> list[ScheduleTableRow]:
    return [
        ScheduleTableRow(
            payment_number=str(row.payment_number),
            due_date=row.due_date.strftime("%d/%m/%Y"),
            payment=format_currency(row.payment_amount),
            principal=format_currency(row.principal_portion),
            interest=format_currency(row.interest_portion),
            balance=format_currency(row.remaining_balance),
        )
        for row in schedule
    ]
