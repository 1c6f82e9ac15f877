from __future__ import annotations

from dataclasses import dataclass

from dealer_credit.domain.credit import BankOffer
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository


@dataclass(frozen=True, slots=True)
class ListBankOffersResponse:
    offers: list[BankOffer]


class ListBankOffers:
    def __init__(self, bank_catalog_repository: BankCatalogRepository) -> None:
        self._repository = bank_catalog_repository

    def execute(self) -> ListBankOffersResponse:
        return ListBankOffersResponse(offers=self._repository.list_offers())
