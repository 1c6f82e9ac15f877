"""Tests for BankMapper (domain → DTO)."""

from __future__ import annotations

from dealer_credit.entrypoints.http.mappers.bank_mapper import BankMapper


def test_to_dto_keeps_decimal_digits(bbva) -> None:
    dto = BankMapper.to_dto(bbva)

    assert dto.model_dump() == {
        "id": 1,
        "name": "BBVA",
        "annual_rate_percent": "12.5",
        "cat_percent": "16.2",
        "opening_commission_percent": "2.0",
    }


def test_to_list_response(three_offers) -> None:
    response = BankMapper.to_list_response(three_offers)

    assert response.total == 3
    assert [bank.name for bank in response.banks] == ["HSBC", "BBVA", "Santander"]


def test_to_list_response_empty() -> None:
    response = BankMapper.to_list_response([])

    assert response.total == 0
    assert response.banks == []
