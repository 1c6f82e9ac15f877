"""Single-bank credit quote use case."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from dealer_credit.domain.amortization import calculate_offer
from dealer_credit.domain.credit import BankOffer, CalculationResult, OfferOverride
from dealer_credit.domain.down_payment import DownPaymentPlan
from dealer_credit.domain.errors import NotFoundError
from dealer_credit.domain.rating import CreditRating, rate_credit
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository
from dealer_credit.use_cases.quote_inputs import QuoteInputs


@dataclass(frozen=True, slots=True)
class QuoteCreditRequest:
    inputs: QuoteInputs
    bank_id: int
    override: OfferOverride | None = None
    include_rating: bool = False


@dataclass(frozen=True, slots=True)
class QuoteCreditResponse:
    down_payment: DownPaymentPlan
    result: CalculationResult
    customized: bool = False
    rating: CreditRating | None = None


def resolve_offer(
    repository: BankCatalogRepository, bank_id: int, override: OfferOverride | None
) -> BankOffer:
    """
    Look up an offer and apply the caller's custom rate/CAT to it.

    Raises:
        NotFoundError: If the bank is not in the catalog
        OfferComputationError: If the override values are invalid
    """
    offer = repository.get_by_id(bank_id)
    if offer is None:
        raise NotFoundError(resource="Bank", identifier=str(bank_id))
    return override.apply(offer) if override is not None else offer


class QuoteCredit:
    """
    Quote a vehicle credit with one bank.

    Responsibilities:
    - Split the vehicle price into down payment and financed amount
    - Resolve the bank offer (with custom rate/CAT if given)
    - Run the amortization engine and, on request, the rating heuristic
    """

    def __init__(
        self,
        bank_catalog_repository: BankCatalogRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = bank_catalog_repository
        self._today = today

    def execute(self, request: QuoteCreditRequest) -> QuoteCreditResponse:
        """
        Raises:
            InvalidInputError: If price, down payment or term are invalid
            NotFoundError: If the bank does not exist
            OfferComputationError: If the custom rate/CAT are invalid
        """
        plan = request.inputs.down_payment_plan()
        terms = request.inputs.loan_terms(plan, self._today())
        offer = resolve_offer(self._repository, request.bank_id, request.override)

        result = calculate_offer(terms.for_offer(offer), offer)

        rating = None
        if request.include_rating:
            rating = rate_credit(result, plan.vehicle_price, result.term_months)

        return QuoteCreditResponse(
            down_payment=plan,
            result=result,
            customized=request.override is not None and not request.override.is_empty,
            rating=rating,
        )
