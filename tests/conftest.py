from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from dealer_credit.adapters.in_memory_bank_catalog_repository import (
    InMemoryBankCatalogRepository,
)
from dealer_credit.domain.credit import BankOffer


@pytest.fixture
def start_date() -> date:
    return date(2026, 1, 15)


@pytest.fixture
def today(start_date: date):
    """Deterministic clock for use cases."""
    return lambda: start_date


def make_offer(
    bank_id: int,
    rate: str,
    cat: str | None = None,
    commission: str = "2.0",
    name: str | None = None,
) -> BankOffer:
    return BankOffer(
        id=bank_id,
        name=name or f"Bank {bank_id}",
        annual_rate_percent=Decimal(rate),
        cat_percent=Decimal(cat) if cat is not None else Decimal(rate) + Decimal("3.7"),
        opening_commission_percent=Decimal(commission),
    )


@pytest.fixture
def bbva() -> BankOffer:
    return make_offer(1, "12.5", "16.2", "2.0", name="BBVA")


@pytest.fixture
def three_offers() -> list[BankOffer]:
    return [
        make_offer(6, "14.5", "18.9", "1.7", name="HSBC"),
        make_offer(1, "12.5", "16.2", "2.0", name="BBVA"),
        make_offer(3, "13.8", "17.5", "2.2", name="Santander"),
    ]


@pytest.fixture
def repository() -> InMemoryBankCatalogRepository:
    return InMemoryBankCatalogRepository()


@pytest.fixture
def offer_factory():
    """Build BankOffer instances from short string values."""
    return make_offer
