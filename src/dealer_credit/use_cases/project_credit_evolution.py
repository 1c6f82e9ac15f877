"""Credit evolution use case."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from dealer_credit.domain.amortization import calculate_offer
from dealer_credit.domain.credit import CalculationResult, OfferOverride
from dealer_credit.domain.down_payment import DownPaymentPlan
from dealer_credit.domain.evolution import CreditEvolution, project_evolution
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository
from dealer_credit.use_cases.quote_credit import resolve_offer
from dealer_credit.use_cases.quote_inputs import QuoteInputs


@dataclass(frozen=True, slots=True)
class ProjectCreditEvolutionRequest:
    inputs: QuoteInputs
    bank_id: int
    override: OfferOverride | None = None


@dataclass(frozen=True, slots=True)
class ProjectCreditEvolutionResponse:
    down_payment: DownPaymentPlan
    result: CalculationResult
    evolution: CreditEvolution


class ProjectCreditEvolution:
    """Project payments and vehicle depreciation over a one-bank credit."""

    def __init__(
        self,
        bank_catalog_repository: BankCatalogRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = bank_catalog_repository
        self._today = today

    def execute(self, request: ProjectCreditEvolutionRequest) -> ProjectCreditEvolutionResponse:
        plan = request.inputs.down_payment_plan()
        terms = request.inputs.loan_terms(plan, self._today())
        offer = resolve_offer(self._repository, request.bank_id, request.override)

        result = calculate_offer(terms.for_offer(offer), offer)
        evolution = project_evolution(result, plan.vehicle_price, plan.amount)

        return ProjectCreditEvolutionResponse(
            down_payment=plan,
            result=result,
            evolution=evolution,
        )
