from fastapi import APIRouter, Depends

from dealer_credit.entrypoints.http.dependencies import (
    get_compare_bank_offers_use_case,
    get_project_credit_evolution_use_case,
    get_quote_credit_use_case,
)
from dealer_credit.entrypoints.http.dtos.credit import (
    ComparisonRequestDTO,
    ComparisonResponseDTO,
    EvolutionResponseDTO,
    QuoteRequestDTO,
    QuoteResponseDTO,
    ScheduleTableResponseDTO,
    SingleBankRequestDTO,
)
from dealer_credit.entrypoints.http.error_responses import ERROR_RESPONSES
from dealer_credit.entrypoints.http.mappers.credit_mapper import CreditMapper
from dealer_credit.use_cases.compare_bank_offers import CompareBankOffers
from dealer_credit.use_cases.project_credit_evolution import ProjectCreditEvolution
from dealer_credit.use_cases.quote_credit import QuoteCredit


router = APIRouter(prefix="/credit", tags=["Credit"])


@router.post(
    "/quote",
    response_model=QuoteResponseDTO,
    summary="Quote a credit with one bank",
    description="""
    Calculate the monthly payment, amortization schedule and totals of a
    vehicle credit with one bank.

    ## Monetary Values
    - Requests and responses use decimal strings (e.g. "350000.00")
    - Responses are rounded to cents; calculations keep full precision

    ## Down Payment
    - `down_payment_amount` wins over `down_payment_percent`
    - With neither, 20% of the price is used
    - Financed amount = vehicle_price - down payment

    ## Terms
    - Allowed terms: 12, 24, 36, 48 or 60 months
    - `custom_rate` / `custom_cat` replace the bank's own rate / CAT

    ## Rating
    - `include_rating: true` adds the Good / Large / Poor / Bad classification
    """,
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def quote_credit(
    payload: QuoteRequestDTO,
    use_case: QuoteCredit = Depends(get_quote_credit_use_case),
) -> QuoteResponseDTO:
    request = CreditMapper.to_quote_request(payload)
    response = use_case.execute(request)
    return CreditMapper.to_quote_response(response)


@router.post(
    "/comparison",
    response_model=ComparisonResponseDTO,
    summary="Compare banks",
    description="""
    Calculate the same credit with several banks, cheapest monthly payment
    first (ties keep catalog order).

    A bank whose custom rate/CAT is invalid is not dropped: it is listed
    after the successful ones with `status: "error"` and the reason.
    """,
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def compare_banks(
    payload: ComparisonRequestDTO,
    use_case: CompareBankOffers = Depends(get_compare_bank_offers_use_case),
) -> ComparisonResponseDTO:
    request = CreditMapper.to_comparison_request(payload)
    response = use_case.execute(request)
    return CreditMapper.to_comparison_response(response)


@router.post(
    "/evolution",
    response_model=EvolutionResponseDTO,
    summary="Project credit evolution",
    description="""
    Month-by-month cumulative payments (starting from the down payment)
    against an estimated vehicle depreciation curve, with the month where
    the total paid reaches the vehicle value.
    """,
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def project_evolution(
    payload: SingleBankRequestDTO,
    use_case: ProjectCreditEvolution = Depends(get_project_credit_evolution_use_case),
) -> EvolutionResponseDTO:
    request = CreditMapper.to_evolution_request(payload)
    response = use_case.execute(request)
    return CreditMapper.to_evolution_response(response)


@router.post(
    "/schedule-table",
    response_model=ScheduleTableResponseDTO,
    summary="Schedule table for PDF export",
    description="""
    The amortization schedule as display strings, ready to be embedded in a
    printed quote: payment number, due date (dd/mm/yyyy), payment, principal,
    interest and balance, with es-MX currency formatting (`$1,234.56`).
    """,
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def schedule_table(
    payload: SingleBankRequestDTO,
    use_case: QuoteCredit = Depends(get_quote_credit_use_case),
) -> ScheduleTableResponseDTO:
    request = CreditMapper.to_quote_request(payload)
    response = use_case.execute(request)
    return CreditMapper.to_schedule_table_response(response)
