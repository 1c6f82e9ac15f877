"""Multi-bank comparison use case."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date

from dealer_credit.domain.amortization import compare_offers
from dealer_credit.domain.credit import ComparisonEntry, OfferOverride
from dealer_credit.domain.down_payment import DownPaymentPlan
from dealer_credit.domain.errors import NotFoundError
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository
from dealer_credit.use_cases.quote_inputs import QuoteInputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompareBankOffersRequest:
    inputs: QuoteInputs
    # None compares the whole catalog
    bank_ids: tuple[int, ...] | None = None
    overrides: Mapping[int, OfferOverride] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CompareBankOffersResponse:
    down_payment: DownPaymentPlan
    entries: list[ComparisonEntry]

    @property
    def best(self) -> ComparisonEntry | None:
        """Cheapest successfully computed offer."""
        return next((entry for entry in self.entries if entry.ok), None)


class CompareBankOffers:
    """
    Compare the same credit across banks, cheapest monthly payment first.

    Offers whose custom parameters are invalid stay in the comparison as
    failed entries; they are logged, not raised.
    """

    def __init__(
        self,
        bank_catalog_repository: BankCatalogRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = bank_catalog_repository
        self._today = today

    def execute(self, request: CompareBankOffersRequest) -> CompareBankOffersResponse:
        """
        Raises:
            InvalidInputError: If price, down payment or term are invalid
            NotFoundError: If a requested bank id is not in the catalog
        """
        plan = request.inputs.down_payment_plan()
        terms = request.inputs.loan_terms(plan, self._today())

        offers = self._repository.list_offers()
        if request.bank_ids is not None:
            by_id = {offer.id: offer for offer in offers}
            missing = [bank_id for bank_id in request.bank_ids if bank_id not in by_id]
            if missing:
                raise NotFoundError(resource="Bank", identifier=", ".join(map(str, missing)))
            offers = [by_id[bank_id] for bank_id in request.bank_ids]

        entries = compare_offers(terms, offers, request.overrides)

        for entry in entries:
            if entry.error is not None:
                logger.warning(
                    "Bank offer could not be computed",
                    extra={
                        "bank_id": entry.bank.id,
                        "bank_name": entry.bank.name,
                        "error_code": entry.error.error_code,
                        "error_message": entry.error.message,
                    },
                )

        return CompareBankOffersResponse(down_payment=plan, entries=entries)
