"""
Dependency injection for FastAPI routes.

Key principle: the bank catalog is immutable reference data, so it is built
once and cached. Use cases are cheap and stateless and are built per request.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends

from dealer_credit.adapters.in_memory_bank_catalog_repository import (
    InMemoryBankCatalogRepository,
)
from dealer_credit.infra.config import bank_catalog_file
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository
from dealer_credit.use_cases.compare_bank_offers import CompareBankOffers
from dealer_credit.use_cases.get_bank_offer_by_id import GetBankOfferById
from dealer_credit.use_cases.list_bank_offers import ListBankOffers
from dealer_credit.use_cases.project_credit_evolution import ProjectCreditEvolution
from dealer_credit.use_cases.quote_credit import QuoteCredit

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_bank_catalog_repository() -> BankCatalogRepository:
    """
    Provides the bank catalog (built once per process).

    Uses the JSON file named by BANK_CATALOG_FILE when set, otherwise the
    built-in bank table.
    """
    path = bank_catalog_file()
    if path is None:
        return InMemoryBankCatalogRepository()

    repository = InMemoryBankCatalogRepository.from_json_file(path)
    logger.info(
        "Bank catalog loaded from file",
        extra={"path": path, "offers": len(repository.list_offers())},
    )
    return repository


def get_list_bank_offers_use_case(
    repository: BankCatalogRepository = Depends(get_bank_catalog_repository),
) -> ListBankOffers:
    return ListBankOffers(bank_catalog_repository=repository)


def get_get_bank_offer_by_id_use_case(
    repository: BankCatalogRepository = Depends(get_bank_catalog_repository),
) -> GetBankOfferById:
    return GetBankOfferById(bank_catalog_repository=repository)


def get_quote_credit_use_case(
    repository: BankCatalogRepository = Depends(get_bank_catalog_repository),
) -> QuoteCredit:
    return QuoteCredit(bank_catalog_repository=repository)


def get_compare_bank_offers_use_case(
    repository: BankCatalogRepository = Depends(get_bank_catalog_repository),
) -> CompareBankOffers:
    return CompareBankOffers(bank_catalog_repository=repository)


def get_project_credit_evolution_use_case(
    repository: BankCatalogRepository = Depends(get_bank_catalog_repository),
) -> ProjectCreditEvolution:
    return ProjectCreditEvolution(bank_catalog_repository=repository)
