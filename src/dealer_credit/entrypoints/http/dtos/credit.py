from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from dealer_credit.entrypoints.http.dtos.banks import BankOfferDTO


# Up to 12 integer digits keeps every cent-rounded amount inside the Decimal context.
DECIMAL_PATTERN = r"^\d{1,12}(\.\d{1,2})?$"


# ==============================================================================
# Requests
# ==============================================================================


class QuoteInputsDTO(BaseModel):
    """Vehicle price, down payment and term shared by every credit request."""

    vehicle_price: str = Field(
        description="Vehicle price as decimal string",
        examples=["350000.00"],
        pattern=DECIMAL_PATTERN,
    )
    term_months: int = Field(
        description="Credit term in months. Must be one of: 12, 24, 36, 48, 60",
        examples=[36],
        ge=1,
    )
    down_payment_percent: str | None = Field(
        default=None,
        description="Down payment (enganche) as a percentage of the price. Defaults to 20",
        examples=["20"],
        pattern=DECIMAL_PATTERN,
    )
    down_payment_amount: str | None = Field(
        default=None,
        description="Down payment amount; takes precedence over down_payment_percent",
        examples=["70000.00"],
        pattern=DECIMAL_PATTERN,
    )
    start_date: date | None = Field(
        default=None,
        description="Credit start date; the first payment is due one month later. Defaults to today",
        examples=["2026-01-15"],
    )


class SingleBankRequestDTO(QuoteInputsDTO):
    """Quote inputs for one bank, with optional custom rate and CAT."""

    bank_id: int = Field(description="Bank catalog identifier", examples=[1])
    custom_rate: str | None = Field(
        default=None,
        description="Custom annual rate in percent replacing the bank's own rate",
        examples=["11.9"],
    )
    custom_cat: str | None = Field(
        default=None,
        description="Custom CAT in percent replacing the bank's own CAT",
        examples=["15.4"],
    )


class QuoteRequestDTO(SingleBankRequestDTO):
    """Request payload for a single-bank credit quote."""

    include_rating: bool = Field(
        default=False,
        description="Also return the qualitative credit rating",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "vehicle_price": "350000.00",
                "down_payment_percent": "20",
                "term_months": 36,
                "bank_id": 1,
                "include_rating": True,
            }
        }
    )


class OfferOverrideDTO(BaseModel):
    """
    Custom rate/CAT for one bank in a comparison.

    Values are not pattern-checked here: an invalid value marks only that
    bank as failed in the comparison.
    """

    bank_id: int
    custom_rate: str | None = None
    custom_cat: str | None = None


class ComparisonRequestDTO(QuoteInputsDTO):
    """Request payload for a multi-bank comparison."""

    bank_ids: list[int] | None = Field(
        default=None,
        description="Banks to compare, in tie-break order. Defaults to the whole catalog",
        examples=[[1, 3, 6]],
    )
    overrides: list[OfferOverrideDTO] = Field(
        default_factory=list,
        description="Per-bank custom rate/CAT",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "vehicle_price": "350000.00",
                "down_payment_percent": "20",
                "term_months": 48,
                "overrides": [{"bank_id": 3, "custom_rate": "11.5"}],
            }
        }
    )


# ==============================================================================
# Responses
# ==============================================================================


class DownPaymentDTO(BaseModel):
    percent: str = Field(examples=["20.00"])
    amount: str = Field(examples=["70000.00"])
    financed_amount: str = Field(examples=["280000.00"])


class AmortizationRowDTO(BaseModel):
    payment_number: int = Field(examples=[1])
    due_date: date = Field(examples=["2026-02-15"])
    payment_amount: str = Field(examples=["9367.02"])
    principal_portion: str = Field(examples=["6450.35"])
    interest_portion: str = Field(examples=["2916.67"])
    remaining_balance: str = Field(examples=["273549.65"])


class CalculationSummaryDTO(BaseModel):
    """Totals for one bank. Monetary values are rounded to cents for display."""

    bank: BankOfferDTO
    principal: str = Field(examples=["280000.00"])
    term_months: int = Field(examples=[36])
    monthly_payment: str = Field(examples=["9367.02"])
    total_amount_paid: str = Field(examples=["337212.55"])
    total_interest: str = Field(examples=["57212.55"])
    opening_commission_amount: str = Field(examples=["5600.00"])


class CalculationDTO(CalculationSummaryDTO):
    schedule: list[AmortizationRowDTO]


class CreditRatingDTO(BaseModel):
    """Display-only classification: Good, Large, Poor or Bad."""

    cost_rating: str = Field(examples=["Large"])
    rate_rating: str = Field(examples=["Large"])
    term_rating: str = Field(examples=["Good"])
    overall_rating: str = Field(examples=["Large"])
    cost_score: str = Field(examples=["55.13"])
    rate_score: str = Field(examples=["63.00"])
    term_score: str = Field(examples=["40.00"])
    overall_score: str = Field(examples=["54.47"])
    cost_percentage: str = Field(examples=["22.43"])
    cat_vs_rate_diff: str = Field(examples=["3.70"])
    total_cost: str = Field(examples=["62812.55"])


class QuoteResponseDTO(BaseModel):
    """Response with a single-bank quote and its full schedule."""

    down_payment: DownPaymentDTO
    calculation: CalculationDTO
    customized: bool = Field(description="True when a custom rate or CAT was applied")
    rating: CreditRatingDTO | None = None


class OfferErrorDTO(BaseModel):
    code: str = Field(examples=["OFFER_COMPUTATION_ERROR"])
    message: str = Field(examples=["annual_rate_percent override is not a number: 'abc'"])
    field: str | None = Field(default=None, examples=["annual_rate_percent"])


class ComparisonEntryDTO(BaseModel):
    bank: BankOfferDTO
    status: Literal["ok", "error"]
    customized: bool
    calculation: CalculationSummaryDTO | None = None
    error: OfferErrorDTO | None = None


class ComparisonResponseDTO(BaseModel):
    """Comparison sorted by monthly payment; failed offers are listed last."""

    down_payment: DownPaymentDTO
    best_bank_id: int | None = Field(
        description="Bank with the lowest monthly payment, if any offer succeeded",
        examples=[1],
    )
    entries: list[ComparisonEntryDTO]


class ValuePointDTO(BaseModel):
    month: int
    value: str


class PaymentPointDTO(BaseModel):
    month: int
    total_paid: str
    principal_paid: str
    interest_paid: str


class CreditCostsDTO(BaseModel):
    principal: str
    total_interest: str
    opening_commission: str
    total_cost: str
    cost_percentage: str


class EvolutionResponseDTO(BaseModel):
    """Cumulative payments against estimated vehicle value, month by month."""

    down_payment: DownPaymentDTO
    calculation: CalculationSummaryDTO
    depreciation: list[ValuePointDTO]
    payments: list[PaymentPointDTO]
    break_even_month: int = Field(
        description="First month where the total paid reaches the vehicle value",
        examples=[30],
    )
    key_months: list[int] = Field(examples=[[0, 9, 18, 27, 36]])
    costs: CreditCostsDTO


class ScheduleTableResponseDTO(BaseModel):
    """Schedule rows formatted for PDF embedding (es-MX currency strings)."""

    bank_name: str = Field(examples=["BBVA"])
    columns: list[str]
    rows: list[list[str]] = Field(
        examples=[[["1", "15/02/2026", "$9,367.02", "$6,450.35", "$2,916.67", "$273,549.65"]]]
    )
    monthly_payment: str = Field(examples=["$9,367.02"])
    total_amount_paid: str = Field(examples=["$337,212.55"])
    total_interest: str = Field(examples=["$57,212.55"])
    opening_commission_amount: str = Field(examples=["$5,600.00"])
    annual_rate: str = Field(examples=["12.50%"])
    cat: str = Field(examples=["16.20%"])
