from __future__ import annotations

from decimal import Decimal, InvalidOperation

from dealer_credit.domain.credit import CalculationResult, ComparisonEntry, OfferOverride
from dealer_credit.domain.down_payment import DownPaymentPlan
from dealer_credit.domain.errors import ValidationError
from dealer_credit.domain.rating import CreditRating
from dealer_credit.entrypoints.export.schedule_table import (
    SCHEDULE_COLUMNS,
    build_schedule_table,
    format_currency,
    format_percentage,
    round_money,
)
from dealer_credit.entrypoints.http.dtos.credit import (
    AmortizationRowDTO,
    CalculationDTO,
    CalculationSummaryDTO,
    ComparisonEntryDTO,
    ComparisonRequestDTO,
    ComparisonResponseDTO,
    CreditCostsDTO,
    CreditRatingDTO,
    DownPaymentDTO,
    EvolutionResponseDTO,
    OfferErrorDTO,
    PaymentPointDTO,
    QuoteInputsDTO,
    QuoteRequestDTO,
    QuoteResponseDTO,
    ScheduleTableResponseDTO,
    SingleBankRequestDTO,
    ValuePointDTO,
)
from dealer_credit.entrypoints.http.mappers.bank_mapper import BankMapper
from dealer_credit.use_cases.compare_bank_offers import (
    CompareBankOffersRequest,
    CompareBankOffersResponse,
)
from dealer_credit.use_cases.project_credit_evolution import (
    ProjectCreditEvolutionRequest,
    ProjectCreditEvolutionResponse,
)
from dealer_credit.use_cases.quote_credit import QuoteCreditRequest, QuoteCreditResponse
from dealer_credit.use_cases.quote_inputs import QuoteInputs


def _money(value: Decimal) -> str:
    return str(round_money(value))


class CreditMapper:
    """
    Maps between REST DTOs and domain models for credit quoting.

    String → Decimal on the way in, Decimal → string (rounded to cents) on
    the way out. No business logic.
    """

    # ==========================================================================
    # DTO → Domain
    # ==========================================================================

    @staticmethod
    def to_quote_inputs(dto: QuoteInputsDTO) -> QuoteInputs:
        """
        Converts the shared price/down payment/term fields.

        Raises:
            ValidationError: If monetary strings cannot be converted to Decimals
        """
        errors: list[dict[str, str]] = []

        vehicle_price = _parse_decimal("vehicle_price", dto.vehicle_price, errors)
        down_payment_percent = (
            None
            if dto.down_payment_percent is None
            else _parse_decimal("down_payment_percent", dto.down_payment_percent, errors)
        )
        down_payment_amount = (
            None
            if dto.down_payment_amount is None
            else _parse_decimal("down_payment_amount", dto.down_payment_amount, errors)
        )

        if errors:
            raise ValidationError(errors=errors)

        return QuoteInputs(
            vehicle_price=vehicle_price,
            term_months=dto.term_months,
            down_payment_percent=down_payment_percent,
            down_payment_amount=down_payment_amount,
            start_date=dto.start_date,
        )

    @staticmethod
    def to_override(custom_rate: str | None, custom_cat: str | None) -> OfferOverride | None:
        """Raw custom values are passed through; the domain parses them per offer."""
        if custom_rate is None and custom_cat is None:
            return None
        return OfferOverride(annual_rate_percent=custom_rate, cat_percent=custom_cat)

    @staticmethod
    def to_quote_request(dto: SingleBankRequestDTO) -> QuoteCreditRequest:
        return QuoteCreditRequest(
            inputs=CreditMapper.to_quote_inputs(dto),
            bank_id=dto.bank_id,
            override=CreditMapper.to_override(dto.custom_rate, dto.custom_cat),
            include_rating=isinstance(dto, QuoteRequestDTO) and dto.include_rating,
        )

    @staticmethod
    def to_evolution_request(dto: SingleBankRequestDTO) -> ProjectCreditEvolutionRequest:
        return ProjectCreditEvolutionRequest(
            inputs=CreditMapper.to_quote_inputs(dto),
            bank_id=dto.bank_id,
            override=CreditMapper.to_override(dto.custom_rate, dto.custom_cat),
        )

    @staticmethod
    def to_comparison_request(dto: ComparisonRequestDTO) -> CompareBankOffersRequest:
        """
        Raises:
            ValidationError: If two overrides name the same bank
        """
        seen: set[int] = set()
        errors: list[dict[str, str]] = []
        for item in dto.overrides:
            if item.bank_id in seen:
                errors.append(
                    {
                        "field": "overrides",
                        "message": f"Duplicate override for bank_id {item.bank_id}",
                        "code": "DUPLICATE_BANK_ID",
                    }
                )
            seen.add(item.bank_id)
        if errors:
            raise ValidationError(errors=errors)

        overrides = {}
        for item in dto.overrides:
            override = CreditMapper.to_override(item.custom_rate, item.custom_cat)
            if override is not None:
                overrides[item.bank_id] = override

        return CompareBankOffersRequest(
            inputs=CreditMapper.to_quote_inputs(dto),
            bank_ids=tuple(dto.bank_ids) if dto.bank_ids is not None else None,
            overrides=overrides,
        )

    # ==========================================================================
    # Domain → DTO
    # ==========================================================================

    @staticmethod
    def to_down_payment_dto(plan: DownPaymentPlan) -> DownPaymentDTO:
        return DownPaymentDTO(
            percent=_money(plan.percent),
            amount=_money(plan.amount),
            financed_amount=_money(plan.financed_amount),
        )

    @staticmethod
    def to_summary_dto(result: CalculationResult) -> CalculationSummaryDTO:
        return CalculationSummaryDTO(
            bank=BankMapper.to_dto(result.bank),
            principal=_money(result.principal),
            term_months=result.term_months,
            monthly_payment=_money(result.monthly_payment),
            total_amount_paid=_money(result.total_amount_paid),
            total_interest=_money(result.total_interest),
            opening_commission_amount=_money(result.opening_commission_amount),
        )

    @staticmethod
    def to_calculation_dto(result: CalculationResult) -> CalculationDTO:
        summary = CreditMapper.to_summary_dto(result)
        return CalculationDTO(
            **summary.model_dump(),
            schedule=[
                AmortizationRowDTO(
                    payment_number=row.payment_number,
                    due_date=row.due_date,
                    payment_amount=_money(row.payment_amount),
                    principal_portion=_money(row.principal_portion),
                    interest_portion=_money(row.interest_portion),
                    remaining_balance=_money(row.remaining_balance),
                )
                for row in result.schedule
            ],
        )

    @staticmethod
    def to_rating_dto(rating: CreditRating) -> CreditRatingDTO:
        return CreditRatingDTO(
            cost_rating=rating.cost_rating.value,
            rate_rating=rating.rate_rating.value,
            term_rating=rating.term_rating.value,
            overall_rating=rating.overall_rating.value,
            cost_score=_money(rating.cost_score),
            rate_score=_money(rating.rate_score),
            term_score=_money(rating.term_score),
            overall_score=_money(rating.overall_score),
            cost_percentage=_money(rating.cost_percentage),
            cat_vs_rate_diff=_money(rating.cat_vs_rate_diff),
            total_cost=_money(rating.total_cost),
        )

    @staticmethod
    def to_quote_response(response: QuoteCreditResponse) -> QuoteResponseDTO:
        return QuoteResponseDTO(
            down_payment=CreditMapper.to_down_payment_dto(response.down_payment),
            calculation=CreditMapper.to_calculation_dto(response.result),
            customized=response.customized,
            rating=(
                CreditMapper.to_rating_dto(response.rating)
                if response.rating is not None
                else None
            ),
        )

    @staticmethod
    def to_comparison_entry_dto(entry: ComparisonEntry) -> ComparisonEntryDTO:
        if entry.result is not None:
            return ComparisonEntryDTO(
                bank=BankMapper.to_dto(entry.bank),
                status="ok",
                customized=entry.customized,
                calculation=CreditMapper.to_summary_dto(entry.result),
            )

        error = None
        if entry.error is not None:
            error = OfferErrorDTO(
                code=entry.error.error_code,
                message=entry.error.message,
                field=entry.error.context.get("field"),
            )
        return ComparisonEntryDTO(
            bank=BankMapper.to_dto(entry.bank),
            status="error",
            customized=entry.customized,
            error=error,
        )

    @staticmethod
    def to_comparison_response(response: CompareBankOffersResponse) -> ComparisonResponseDTO:
        best = response.best
        return ComparisonResponseDTO(
            down_payment=CreditMapper.to_down_payment_dto(response.down_payment),
            best_bank_id=best.bank.id if best is not None else None,
            entries=[CreditMapper.to_comparison_entry_dto(entry) for entry in response.entries],
        )

    @staticmethod
    def to_evolution_response(response: ProjectCreditEvolutionResponse) -> EvolutionResponseDTO:
        evolution = response.evolution
        costs = evolution.costs
        return EvolutionResponseDTO(
            down_payment=CreditMapper.to_down_payment_dto(response.down_payment),
            calculation=CreditMapper.to_summary_dto(response.result),
            depreciation=[
                ValuePointDTO(month=point.month, value=_money(point.value))
                for point in evolution.depreciation
            ],
            payments=[
                PaymentPointDTO(
                    month=point.month,
                    total_paid=_money(point.total_paid),
                    principal_paid=_money(point.principal_paid),
                    interest_paid=_money(point.interest_paid),
                )
                for point in evolution.payments
            ],
            break_even_month=evolution.break_even_month,
            key_months=list(evolution.key_months),
            costs=CreditCostsDTO(
                principal=_money(costs.principal),
                total_interest=_money(costs.total_interest),
                opening_commission=_money(costs.opening_commission),
                total_cost=_money(costs.total_cost),
                cost_percentage=_money(costs.cost_percentage),
            ),
        )

    @staticmethod
    def to_schedule_table_response(response: QuoteCreditResponse) -> ScheduleTableResponseDTO:
        result = response.result
        return ScheduleTableResponseDTO(
            bank_name=result.bank.name,
            columns=list(SCHEDULE_COLUMNS),
            rows=[list(row.as_tuple()) for row in build_schedule_table(result.schedule)],
            monthly_payment=format_currency(result.monthly_payment),
            total_amount_paid=format_currency(result.total_amount_paid),
            total_interest=format_currency(result.total_interest),
            opening_commission_amount=format_currency(result.opening_commission_amount),
            annual_rate=format_percentage(result.bank.annual_rate_percent),
            cat=format_percentage(result.bank.cat_percent),
        )


def _parse_decimal(field: str, raw: str, errors: list[dict[str, str]]) -> Decimal:
    try:
        return Decimal(raw)
    except (InvalidOperation, ValueError):
        errors.append(
            {
                "field": field,
                "message": f"Must be a valid decimal: {raw}",
                "code": "INVALID_DECIMAL",
            }
        )
        return Decimal("0")  # Placeholder to continue validation
