from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from dealer_credit.domain.credit import BankOffer
from dealer_credit.domain.errors import InvalidInputError
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository


# Approximate Mexican-market auto credit offers (annual %).
DEFAULT_BANK_OFFERS: tuple[BankOffer, ...] = tuple(
    BankOffer(
        id=bank_id,
        name=name,
        annual_rate_percent=Decimal(rate),
        cat_percent=Decimal(cat),
        opening_commission_percent=Decimal(commission),
    )
    for bank_id, name, rate, cat, commission in (
        (1, "BBVA", "12.5", "16.2", "2.0"),
        (2, "Banorte", "13.2", "17.1", "1.8"),
        (3, "Santander", "13.8", "17.5", "2.2"),
        (4, "Scotiabank", "14.2", "18.3", "1.5"),
        (5, "Citibanamex", "13.5", "17.8", "2.0"),
        (6, "HSBC", "14.5", "18.9", "1.7"),
        (7, "Inbursa", "12.8", "16.5", "1.9"),
        (8, "Afirme", "14.8", "19.2", "2.1"),
        (9, "BanRegio", "13.9", "18.0", "1.6"),
        (10, "Hey Banco", "12.9", "16.8", "1.8"),
    )
)


class InMemoryBankCatalogRepository(BankCatalogRepository):
    """
    Bank catalog held in memory.

    - Keeps offers in insertion order
    - Defaults to the built-in Mexican bank table
    - Can be loaded from a JSON file (list of offer objects)
    """

    def __init__(self, offers: list[BankOffer] | tuple[BankOffer, ...] = DEFAULT_BANK_OFFERS) -> None:
        ids = [offer.id for offer in offers]
        if len(ids) != len(set(ids)):
            raise ValueError("bank offer ids must be unique")
        for offer in offers:
            offer.validate()
        self._offers = list(offers)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryBankCatalogRepository:
        """
        Load offers from a JSON file.

        Expected format:
            [{"id": 1, "name": "BBVA", "annual_rate_percent": "12.5",
              "cat_percent": "16.2", "opening_commission_percent": "2.0"}, ...]

        Raises:
            ValueError: If the file is not a list of well-formed, valid offers
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"{path}: expected a JSON list of bank offers")
        offers = [_offer_from_dict(item) for item in raw]
        try:
            return cls(offers)
        except InvalidInputError as exc:
            raise ValueError(f"{path}: {exc.message}") from exc

    def list_offers(self) -> list[BankOffer]:
        return list(self._offers)

    def get_by_id(self, bank_id: int) -> BankOffer | None:
        return next((offer for offer in self._offers if offer.id == bank_id), None)


def _offer_from_dict(item: Any) -> BankOffer:
    try:
        return BankOffer(
            id=int(item["id"]),
            name=str(item["name"]),
            # str() first so JSON floats keep their written digits
            annual_rate_percent=Decimal(str(item["annual_rate_percent"])),
            cat_percent=Decimal(str(item["cat_percent"])),
            opening_commission_percent=Decimal(str(item["opening_commission_percent"])),
        )
    except (KeyError, TypeError, InvalidOperation) as exc:
        raise ValueError(f"Malformed bank offer: {item!r}") from exc
