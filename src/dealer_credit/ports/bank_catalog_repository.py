from __future__ import annotations

from abc import ABC, abstractmethod

from dealer_credit.domain.credit import BankOffer


class BankCatalogRepository(ABC):
    """
    Port for bank offer reference data.

    Offers are immutable; implementations return them in catalog order, which
    is also the tie-break order of a comparison.
    """

    @abstractmethod
    def list_offers(self) -> list[BankOffer]:
        """Return every available offer in catalog order."""
        ...

    @abstractmethod
    def get_by_id(self, bank_id: int) -> BankOffer | None:
        """
        Get a single offer.

        Args:
            bank_id: Catalog identifier

        Returns:
            The offer, or None if no offer has that id
        """
        ...
