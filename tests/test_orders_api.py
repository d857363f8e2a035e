"""HTTP-level tests for the orders router and error mapping."""

from decimal import Decimal

from orderfx.core.errors import UpstreamTransportError


def test_get_order_converted(client, make_order, quote_client):
    make_order("100.00", "120.00")
    r = client.get("/api/v1/orders/7", params={"currency": "eur"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert Decimal(body["paid_price"]) == Decimal("92.34")
    assert Decimal(body["total_price"]) == Decimal("110.81")
    assert body["currency"] == "EUR"
    assert len(quote_client.calls) == 1


def test_get_order_unconverted(client, make_order, quote_client):
    make_order("100.00", "120.00")
    r = client.get("/api/v1/orders/7")
    assert r.status_code == 200
    assert Decimal(r.json()["paid_price"]) == Decimal("100.00")
    assert r.json()["currency"] == "USD"
    assert quote_client.calls == []


def test_list_orders(client, make_order):
    make_order(order_id=3)
    r = client.get("/api/v1/orders")
    assert r.status_code == 200
    assert [o["id"] for o in r.json()] == [3]


def test_unknown_currency_is_400(client, make_order, quote_client):
    make_order()
    r = client.get("/api/v1/orders/7", params={"currency": "ZZZ"})
    assert r.status_code == 400
    assert r.json()["error"] == "unknown_currency"
    assert "ZZZ" in r.json()["detail"]
    assert quote_client.calls == []


def test_missing_order_is_404(client, quote_client):
    r = client.get("/api/v1/orders/999", params={"currency": "EUR"})
    assert r.status_code == 404
    assert r.json()["error"] == "order_not_found"
    assert quote_client.calls == []


def test_upstream_unavailable_is_503(client, make_order, quote_client):
    make_order()
    quote_client.payload = {"success": False}
    r = client.get("/api/v1/orders/7", params={"currency": "EUR"})
    assert r.status_code == 503
    assert r.json()["error"] == "upstream_unavailable"


def test_upstream_transport_error_is_503_with_own_slug(client, make_order, quote_client):
    make_order()
    quote_client.exc = UpstreamTransportError("timed out")
    r = client.get("/api/v1/orders/7", params={"currency": "EUR"})
    assert r.status_code == 503
    assert r.json()["error"] == "upstream_transport_error"


def test_put_full_replace(client, make_order, refs):
    make_order()
    body = {"id": 7, "paid_price": "80.00", "total_price": "90.00", **refs}
    r = client.put("/api/v1/orders", json=body)
    assert r.status_code == 200, r.text
    assert Decimal(r.json()["total_price"]) == Decimal("90.00")


def test_put_full_replace_missing_payment(client, make_order, refs):
    make_order()
    body = {"id": 7, "paid_price": "80.00", "total_price": "90.00", **refs}
    body["payment_id"] = 12345
    r = client.put("/api/v1/orders", json=body)
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"
    assert "Payment" in r.json()["detail"]


def test_put_partial_update_and_no_changes(client, make_order):
    make_order("100.00", "120.00")
    r = client.put("/api/v1/orders/7", json={"paid_price": "95.50"})
    assert r.status_code == 200
    assert Decimal(r.json()["paid_price"]) == Decimal("95.50")

    r = client.put("/api/v1/orders/7", json={"paid_price": "95.50"})
    assert r.status_code == 400
    assert r.json()["error"] == "no_changes"


def test_put_partial_update_empty_body_is_422(client, make_order):
    make_order()
    r = client.put("/api/v1/orders/7", json={})
    assert r.status_code == 422
    assert r.json()["error"] == "validation_error"


def test_negative_price_rejected(client, make_order, refs):
    make_order()
    body = {"id": 7, "paid_price": "-1", "total_price": "90.00", **refs}
    r = client.put("/api/v1/orders", json=body)
    assert r.status_code == 422


def test_unknown_route_and_health(client):
    assert client.get("/nope").json()["error"] == "not_found"
    assert client.get("/health").json() == {"status": "ok"}


def test_request_id_header_round_trips(client):
    r = client.get("/health", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"
