import pytest

from orderfx.core.errors import UpstreamTransportError, UpstreamUnavailable
from orderfx.services.http_client import HttpError
from orderfx.services.rates import client as client_mod
from orderfx.services.rates.client import CurrencyApiClient


@pytest.fixture
def captured(monkeypatch):
    calls = []
    payload = {
        "success": True,
        "terms": "https://currencylayer.com/terms",
        "privacy": "https://currencylayer.com/privacy",
        "timestamp": 1700000000,
        "source": "USD",
        "quotes": {"USDEUR": 0.9234},
    }

    def fake_get_json(url, params=None, *, timeout=5.0):
        calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        return payload

    monkeypatch.setattr(client_mod, "get_json", fake_get_json)
    return calls


def test_fetch_sends_live_request_with_four_params(captured):
    api = CurrencyApiClient("http://apilayer.net/api/", timeout=3.0)
    resp = api.fetch("key123", "EUR", source="USD", fmt=1)

    assert len(captured) == 1
    assert captured[0]["url"] == "http://apilayer.net/api/live"
    assert captured[0]["params"] == {
        "access_key": "key123",
        "currencies": "EUR",
        "source": "USD",
        "format": 1,
    }
    assert captured[0]["timeout"] == 3.0
    assert resp.success is True
    assert resp.quotes == {"USDEUR": 0.9234}
    assert resp.source == "USD"


def test_fetch_wraps_transport_errors(monkeypatch):
    def failing(url, params=None, *, timeout=5.0):
        raise HttpError("HTTP 500 for http://apilayer.net/api/live")

    monkeypatch.setattr(client_mod, "get_json", failing)
    with pytest.raises(UpstreamTransportError):
        CurrencyApiClient().fetch("key", "EUR")


@pytest.mark.parametrize(
    "quotes",
    ["nope", {"USDEUR": True}, {"USDEUR": "0.9"}, {"USDEUR": None}],
)
def test_fetch_rejects_malformed_quotes(monkeypatch, quotes):
    monkeypatch.setattr(
        client_mod,
        "get_json",
        lambda url, params=None, *, timeout=5.0: {"success": True, "quotes": quotes},
    )
    with pytest.raises(UpstreamUnavailable):
        CurrencyApiClient().fetch("key", "EUR")


def test_fetch_rejects_mistyped_envelope(monkeypatch):
    monkeypatch.setattr(
        client_mod,
        "get_json",
        lambda url, params=None, *, timeout=5.0: {
            "success": True,
            "timestamp": "yesterday",
            "quotes": {"USDEUR": 0.9},
        },
    )
    with pytest.raises(UpstreamTransportError):
        CurrencyApiClient().fetch("key", "EUR")


def test_fetch_returns_failure_envelope_untouched(monkeypatch):
    monkeypatch.setattr(
        client_mod,
        "get_json",
        lambda url, params=None, *, timeout=5.0: {
            "success": False,
            "error": {"code": 101, "type": "invalid_access_key", "info": "bad key"},
        },
    )
    resp = CurrencyApiClient().fetch("key", "EUR")
    assert resp.success is False
    assert resp.quotes is None
    assert resp.error.code == 101
