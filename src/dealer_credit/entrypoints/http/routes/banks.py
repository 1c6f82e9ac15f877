from fastapi import APIRouter, Depends

from dealer_credit.entrypoints.http.dependencies import (
    get_get_bank_offer_by_id_use_case,
    get_list_bank_offers_use_case,
)
from dealer_credit.entrypoints.http.dtos.banks import BankOfferDTO, BankOfferListResponseDTO
from dealer_credit.entrypoints.http.error_responses import ERROR_RESPONSES
from dealer_credit.entrypoints.http.mappers.bank_mapper import BankMapper
from dealer_credit.use_cases.get_bank_offer_by_id import (
    GetBankOfferById,
    GetBankOfferByIdRequest,
)
from dealer_credit.use_cases.list_bank_offers import ListBankOffers


router = APIRouter(tags=["Banks"])


@router.get(
    "/banks",
    response_model=BankOfferListResponseDTO,
    summary="List bank offers",
    description="""
    List the auto credit offers available for quoting, in catalog order.

    Catalog order is also the tie-break order when two banks produce the
    same monthly payment in a comparison.
    """,
)
def list_banks(
    use_case: ListBankOffers = Depends(get_list_bank_offers_use_case),
) -> BankOfferListResponseDTO:
    response = use_case.execute()
    return BankMapper.to_list_response(response.offers)


@router.get(
    "/banks/{bank_id}",
    response_model=BankOfferDTO,
    summary="Get bank offer",
    responses={404: ERROR_RESPONSES[404]},
)
def get_bank(
    bank_id: int,
    use_case: GetBankOfferById = Depends(get_get_bank_offer_by_id_use_case),
) -> BankOfferDTO:
    response = use_case.execute(GetBankOfferByIdRequest(bank_id=bank_id))
    return BankMapper.to_dto(response.offer)
