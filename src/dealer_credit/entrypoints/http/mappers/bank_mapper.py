from __future__ import annotations

from dealer_credit.domain.credit import BankOffer
from dealer_credit.entrypoints.http.dtos.banks import BankOfferDTO, BankOfferListResponseDTO


class BankMapper:
    """Maps domain bank offers to REST DTOs (Decimal → str)."""

    @staticmethod
    def to_dto(offer: BankOffer) -> BankOfferDTO:
        return BankOfferDTO(
            id=offer.id,
            name=offer.name,
            annual_rate_percent=str(offer.annual_rate_percent),
            cat_percent=str(offer.cat_percent),
            opening_commission_percent=str(offer.opening_commission_percent),
        )

    @staticmethod
    def to_list_response(offers: list[BankOffer]) -> BankOfferListResponseDTO:
        return BankOfferListResponseDTO(
            banks=[BankMapper.to_dto(offer) for offer in offers],
            total=len(offers),
        )
