from __future__ import annotations

from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings


def _client() -> TestClient:
    return TestClient(create_app(Settings()))


def test_health():
    with _client() as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["precedence_mode"] == "tier"


def test_evaluate_endpoint_returns_value():
    with _client() as client:
        response = client.post(
            "/evaluate",
            json={"expression": "51 a -1 m 8 m 20", "operators": "a + 10 L m * 10 L"},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["value"] == -109.0
    assert body["display"] == "-109.0"
    assert body["token_count"] == 7


def test_evaluate_endpoint_honours_precedence_override():
    with _client() as client:
        response = client.post(
            "/evaluate",
            json={"expression": "2 a 3 m 4", "operators": "a + 50 L m * 1 L", "precedence": "priority"},
        )

    assert response.status_code == 200
    assert response.json()["value"] == 20.0


def test_evaluate_endpoint_reports_infinity_as_display_only():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "1 d 0", "operators": "d / 1 L"})

    assert response.status_code == 200
    assert response.json()["value"] is None
    assert response.json()["display"] == "inf"


def test_evaluate_endpoint_maps_malformed_expression_to_422():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "1 a", "operators": "a + 10 L"})

    assert response.status_code == 422
    assert response.json()["detail"] == "malformed expression"
    assert response.json()["reason"]


def test_evaluate_endpoint_missing_expression_is_malformed():
    with _client() as client:
        response = client.post("/evaluate", json={"operators": "a + 10 L"})

    assert response.status_code == 422
    assert response.json()["detail"] == "malformed expression"
