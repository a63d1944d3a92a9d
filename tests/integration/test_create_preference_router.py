import dataclasses

import pytest

from checkout_api.payments.errors import (
    DEFAULT_ERROR_MESSAGE,
    ProviderError,
    ProviderHTTPError,
    ProviderTransportError,
)

ONE_ITEM = {"items": [{"title": "A", "quantity": 1, "unit_price": 1}]}


def test_create_preference_returns_only_init_point(client, preference_client):
    payload = {"items": [{"title": "Camisa", "quantity": 2, "unit_price": 19.999}]}
    res = client.post("/create_preference", json=payload)
    assert res.status_code == 200
    assert res.json() == {"init_point": "https://pay.example/abc"}
    assert len(preference_client.calls) == 1


def test_create_preference_sends_rounded_prices_in_order(client, preference_client):
    payload = {
        "items": [
            {"title": "Camisa", "quantity": 2, "unit_price": 19.999},
            {"title": "Gorra", "quantity": 1, "unit_price": 3.14159},
            {"title": "Taza", "quantity": 4, "unit_price": 80},
        ]
    }
    assert client.post("/create_preference", json=payload).status_code == 200
    sent = preference_client.calls[0]
    assert sent["items"] == [
        {"title": "Camisa", "quantity": 2, "unit_price": 20.0},
        {"title": "Gorra", "quantity": 1, "unit_price": 3.14},
        {"title": "Taza", "quantity": 4, "unit_price": 80.0},
    ]


@pytest.mark.parametrize("base_url", ["https://tienda.example", "https://tienda.example/"])
def test_back_urls_built_from_base_url(settings, make_client, base_url):
    c, fake = make_client(settings_override=dataclasses.replace(settings, base_url=base_url))
    res = c.post("/create_preference", json=ONE_ITEM)
    assert res.status_code == 200
    assert fake.calls[0]["back_urls"] == {
        "success": "https://tienda.example/success",
        "failure": "https://tienda.example/failure",
        "pending": "https://tienda.example/pending",
    }


def test_extra_fields_are_accepted_and_ignored(client, preference_client):
    payload = {
        "items": [{"title": "Camisa", "quantity": 1, "unit_price": 10}],
        "pedidoId": "P-2024-001",
        "datosEnvio": {"nombre": "Ana", "cp": "06600"},
    }
    res = client.post("/create_preference", json=payload)
    assert res.status_code == 200
    assert set(preference_client.calls[0]) == {"items", "back_urls"}


@pytest.mark.parametrize("payload", [{}, {"items": []}, {"items": "nope"}, [], {"pedidoId": "P-1"}])
def test_missing_or_empty_items_returns_400(client, preference_client, payload):
    res = client.post("/create_preference", json=payload)
    assert res.status_code == 400
    assert "no vacío" in res.json()["message"]
    assert preference_client.calls == []


def test_invalid_item_returns_400_with_item_json(client, preference_client):
    res = client.post("/create_preference", json={"items": [{"title": "", "quantity": 1, "unit_price": 5}]})
    assert res.status_code == 400
    body = res.json()
    assert set(body) == {"message"}
    assert '{"title":"","quantity":1,"unit_price":5}' in body["message"]
    assert preference_client.calls == []


@pytest.mark.parametrize("item", [
    {"title": "  ", "quantity": 1, "unit_price": 5},
    {"title": "Camisa", "quantity": 0, "unit_price": 5},
    {"title": "Camisa", "quantity": 1, "unit_price": -1},
    {"title": "Camisa", "quantity": "1", "unit_price": 5},
])
def test_each_invalid_field_returns_400(client, item):
    res = client.post("/create_preference", json={"items": [item]})
    assert res.status_code == 400
    assert "Item defectuoso" in res.json()["message"]


def test_malformed_json_returns_400(client, preference_client):
    res = client.post("/create_preference", content="{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["message"]
    assert preference_client.calls == []


def test_provider_http_error_returns_normalized_500(make_client):
    c, _ = make_client(error=ProviderHTTPError(400, {"message": "invalid token"}))
    res = c.post("/create_preference", json=ONE_ITEM)
    assert res.status_code == 500
    assert res.json() == {
        "message": "invalid token",
        "details": {"status": 400, "apiResponse": {"message": "invalid token"}},
    }


def test_provider_transport_error_returns_500_with_cause(make_client):
    err = ProviderTransportError("No se pudo contactar a Mercado Pago: timeout", cause="ReadTimeout: timeout")
    c, _ = make_client(error=err)
    res = c.post("/create_preference", json=ONE_ITEM)
    assert res.status_code == 500
    body = res.json()
    assert body["message"].startswith("No se pudo contactar")
    assert body["details"] == {"cause": "ReadTimeout: timeout"}


def test_unknown_error_without_message_uses_generic_message(make_client):
    c, _ = make_client(error=RuntimeError())
    res = c.post("/create_preference", json=ONE_ITEM)
    assert res.status_code == 500
    assert res.json() == {"message": DEFAULT_ERROR_MESSAGE, "details": {}}


def test_success_without_init_point_is_a_500(make_client):
    c, _ = make_client(response={"id": "pref-1"})
    res = c.post("/create_preference", json=ONE_ITEM)
    assert res.status_code == 500
    assert res.json()["message"]


def test_provider_error_is_logged(make_client, caplog):
    c, _ = make_client(error=ProviderError("caído"))
    with caplog.at_level("ERROR"):
        res = c.post("/create_preference", json=ONE_ITEM)
    assert res.status_code == 500
    assert res.json()["message"] == "caído"
    assert any("create_preference" in r.getMessage() for r in caplog.records)


def test_cors_allows_any_origin(client):
    res = client.options(
        "/create_preference",
        headers={
            "Origin": "https://cualquier.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"


def test_unknown_route_uses_message_shape(client):
    res = client.get("/nope")
    assert res.status_code == 404
    assert "message" in res.json()
