from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from dealer_credit.domain.errors import InvalidInputError


DEFAULT_DOWN_PAYMENT_PERCENT = Decimal("20")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_PERCENT_PLACES = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class DownPaymentPlan:
    """
    Split of a vehicle price into down payment (enganche) and financed amount.

    The percentage and the amount are kept in sync: build the plan from
    whichever one the dealer typed.
    """

    vehicle_price: Decimal
    percent: Decimal
    amount: Decimal

    @property
    def financed_amount(self) -> Decimal:
        return self.vehicle_price - self.amount

    @classmethod
    def from_percent(cls, vehicle_price: Decimal, percent: Decimal) -> DownPaymentPlan:
        _check_price(vehicle_price)
        if not percent.is_finite() or percent < 0 or percent >= _HUNDRED:
            raise InvalidInputError("down_payment_percent must be >= 0 and < 100")

        plan = cls(
            vehicle_price=vehicle_price,
            percent=percent,
            amount=vehicle_price * percent / _HUNDRED,
        )
        plan.validate()
        return plan

    @classmethod
    def from_amount(cls, vehicle_price: Decimal, amount: Decimal) -> DownPaymentPlan:
        _check_price(vehicle_price)
        if not amount.is_finite():
            raise InvalidInputError("down_payment_amount must be a finite number")
        _check_amount(vehicle_price, amount)

        percent = (amount * _HUNDRED / vehicle_price).quantize(
            _PERCENT_PLACES, rounding=ROUND_HALF_UP
        )
        return cls(
            vehicle_price=vehicle_price,
            percent=max(_ZERO, min(_HUNDRED, percent)),
            amount=amount,
        )

    def validate(self) -> None:
        _check_price(self.vehicle_price)
        _check_amount(self.vehicle_price, self.amount)


def _check_price(vehicle_price: Decimal) -> None:
    if not vehicle_price.is_finite() or vehicle_price <= 0:
        raise InvalidInputError("vehicle_price must be > 0")


def _check_amount(vehicle_price: Decimal, amount: Decimal) -> None:
    if amount < 0:
        raise InvalidInputError("down_payment_amount must be >= 0")
    if amount >= vehicle_price:
        raise InvalidInputError("down_payment_amount must be < vehicle_price")
