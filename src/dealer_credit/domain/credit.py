from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal, InvalidOperation

from dealer_credit.domain.errors import InvalidInputError, OfferComputationError


ALLOWED_TERMS = (12, 24, 36, 48, 60)
MAX_ANNUAL_RATE_PERCENT = Decimal("99")
MAX_CAT_PERCENT = Decimal("999")
MAX_OPENING_COMMISSION_PERCENT = Decimal("100")

# Upper bound per percentage field of a BankOffer.
_PERCENT_CEILINGS = {
    "annual_rate_percent": MAX_ANNUAL_RATE_PERCENT,
    "cat_percent": MAX_CAT_PERCENT,
    "opening_commission_percent": MAX_OPENING_COMMISSION_PERCENT,
}


@dataclass(frozen=True, slots=True)
class BankOffer:
    """A named credit offer. All percentages are annual, e.g. 12.5 = 12.5%."""

    id: int
    name: str
    annual_rate_percent: Decimal
    cat_percent: Decimal
    opening_commission_percent: Decimal

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidInputError("name is required")
        for name, ceiling in _PERCENT_CEILINGS.items():
            value = getattr(self, name)
            if not value.is_finite() or value < 0:
                raise InvalidInputError(f"{name} must be >= 0", bank_id=self.id)
            if value > ceiling:
                raise InvalidInputError(f"{name} must be <= {ceiling}", bank_id=self.id)


@dataclass(frozen=True, slots=True)
class OfferOverride:
    """
    Custom rate and/or CAT replacing an offer's own values.

    Values are kept as given (they may still be raw strings from a form) and
    are only parsed when the override is applied, so a bad value fails just
    the offer it belongs to.
    """

    annual_rate_percent: Decimal | str | None = None
    cat_percent: Decimal | str | None = None

    def apply(self, offer: BankOffer) -> BankOffer:
        """
        Return the offer with this override's values in place.

        Raises:
            OfferComputationError: If an override value is not a finite number
                between 0 and its ceiling
        """
        changes: dict[str, Decimal] = {}
        if self.annual_rate_percent is not None:
            changes["annual_rate_percent"] = _parse_override(
                offer, "annual_rate_percent", self.annual_rate_percent
            )
        if self.cat_percent is not None:
            changes["cat_percent"] = _parse_override(offer, "cat_percent", self.cat_percent)
        return replace(offer, **changes)

    @property
    def is_empty(self) -> bool:
        return self.annual_rate_percent is None and self.cat_percent is None


def _parse_override(offer: BankOffer, field_name: str, raw: Decimal | str) -> Decimal:
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise OfferComputationError(
            f"{field_name} override is not a number: {raw!r}",
            bank_id=offer.id,
            field=field_name,
        )

    if not value.is_finite() or value < 0:
        raise OfferComputationError(
            f"{field_name} override must be a finite number >= 0",
            bank_id=offer.id,
            field=field_name,
        )
    ceiling = _PERCENT_CEILINGS[field_name]
    if value > ceiling:
        raise OfferComputationError(
            f"{field_name} override must be <= {ceiling}",
            bank_id=offer.id,
            field=field_name,
        )
    return value


@dataclass(frozen=True, slots=True)
class LoanTerms:
    """The bank-independent part of a credit request."""

    principal: Decimal
    term_months: int
    start_date: date

    def validate(self) -> None:
        if not self.principal.is_finite() or self.principal <= 0:
            raise InvalidInputError("principal must be > 0")
        if self.term_months not in ALLOWED_TERMS:
            raise InvalidInputError(f"term_months must be one of {list(ALLOWED_TERMS)}")

    def for_offer(self, offer: BankOffer) -> CreditRequest:
        return CreditRequest(
            principal=self.principal,
            annual_rate_percent=offer.annual_rate_percent,
            term_months=self.term_months,
            opening_commission_percent=offer.opening_commission_percent,
            start_date=self.start_date,
        )


@dataclass(frozen=True, slots=True)
class CreditRequest:
    principal: Decimal
    annual_rate_percent: Decimal
    term_months: int
    opening_commission_percent: Decimal
    start_date: date

    def validate(self) -> None:
        if not self.principal.is_finite() or self.principal <= 0:
            raise InvalidInputError("principal must be > 0")
        if not self.annual_rate_percent.is_finite() or self.annual_rate_percent < 0:
            raise InvalidInputError("annual_rate_percent must be >= 0")
        if self.annual_rate_percent > MAX_ANNUAL_RATE_PERCENT:
            raise InvalidInputError(f"annual_rate_percent must be <= {MAX_ANNUAL_RATE_PERCENT}")
        if self.term_months not in ALLOWED_TERMS:
            raise InvalidInputError(f"term_months must be one of {list(ALLOWED_TERMS)}")
        if (
            not self.opening_commission_percent.is_finite()
            or self.opening_commission_percent < 0
        ):
            raise InvalidInputError("opening_commission_percent must be >= 0")


@dataclass(frozen=True, slots=True)
class AmortizationRow:
    payment_number: int
    due_date: date
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True, slots=True)
class CreditSummary:
    total_amount_paid: Decimal
    total_interest: Decimal
    opening_commission_amount: Decimal


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Everything computed for one bank/request pair. Values are unrounded."""

    bank: BankOffer
    principal: Decimal
    term_months: int
    monthly_payment: Decimal
    total_amount_paid: Decimal
    total_interest: Decimal
    opening_commission_amount: Decimal
    schedule: tuple[AmortizationRow, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ComparisonEntry:
    """One line of a bank comparison: either a result or the reason it failed."""

    bank: BankOffer
    result: CalculationResult | None = None
    error: OfferComputationError | None = None
    customized: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None
