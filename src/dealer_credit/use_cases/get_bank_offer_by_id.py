"""Get bank offer by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from dealer_credit.domain.credit import BankOffer
from dealer_credit.domain.errors import NotFoundError
from dealer_credit.ports.bank_catalog_repository import BankCatalogRepository


@dataclass(frozen=True, slots=True)
class GetBankOfferByIdRequest:
    bank_id: int


@dataclass(frozen=True, slots=True)
class GetBankOfferByIdResponse:
    offer: BankOffer


class GetBankOfferById:
    """
    Use case for retrieving a single bank offer.

    Raises NotFoundError if the id is not in the catalog.
    """

    def __init__(self, bank_catalog_repository: BankCatalogRepository) -> None:
        self._repository = bank_catalog_repository

    def execute(self, request: GetBankOfferByIdRequest) -> GetBankOfferByIdResponse:
        offer = self._repository.get_by_id(request.bank_id)

        if offer is None:
            raise NotFoundError(resource="Bank", identifier=str(request.bank_id))

        return GetBankOfferByIdResponse(offer=offer)
