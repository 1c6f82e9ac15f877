"""Test suite for the /v1/banks routes."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dealer_credit.domain.errors import NotFoundError
from dealer_credit.entrypoints.http.dependencies import (
    get_bank_catalog_repository,
    get_get_bank_offer_by_id_use_case,
)
from dealer_credit.entrypoints.http.exception_handlers import register_exception_handlers
from dealer_credit.entrypoints.http.routes.banks import router


@pytest.fixture
def app(repository) -> FastAPI:
    """Test app serving the built-in catalog."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_bank_catalog_repository] = lambda: repository
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


# ==============================================================================
# GET /v1/banks
# ==============================================================================


def test_list_banks(client: TestClient) -> None:
    response = client.get("/v1/banks")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 10
    assert data["banks"][0] == {
        "id": 1,
        "name": "BBVA",
        "annual_rate_percent": "12.5",
        "cat_percent": "16.2",
        "opening_commission_percent": "2.0",
    }
    assert [bank["name"] for bank in data["banks"]][-1] == "Hey Banco"


# ==============================================================================
# GET /v1/banks/{bank_id}
# ==============================================================================


def test_get_bank(client: TestClient) -> None:
    response = client.get("/v1/banks/6")

    assert response.status_code == 200
    assert response.json()["name"] == "HSBC"
    assert response.json()["annual_rate_percent"] == "14.5"


def test_get_unknown_bank_returns_404(client: TestClient) -> None:
    response = client.get("/v1/banks/11")

    assert response.status_code == 404
    assert response.json() == {
        "detail": "Bank with identifier '11' not found",
        "code": "NOT_FOUND",
    }


def test_get_bank_with_non_integer_id_returns_422(client: TestClient) -> None:
    response = client.get("/v1/banks/bbva")

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "bank_id"


def test_get_bank_delegates_to_use_case(app: FastAPI, client: TestClient) -> None:
    mock_use_case = Mock()
    mock_use_case.execute.side_effect = NotFoundError(resource="Bank", identifier="3")
    app.dependency_overrides[get_get_bank_offer_by_id_use_case] = lambda: mock_use_case

    response = client.get("/v1/banks/3")

    assert response.status_code == 404
    request = mock_use_case.execute.call_args[0][0]
    assert request.bank_id == 3
