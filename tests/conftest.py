"""Shared fixtures: temp SQLite database, fake quote client, test app."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from orderfx.core.config import Settings
from orderfx.db.dal import Database
from orderfx.db.migrate import apply_migrations
from orderfx.main import create_app
from orderfx.routers.orders import get_rate_resolver
from orderfx.services.order_service import OrderService
from orderfx.services.rates import RateResolver
from orderfx.services.rates.client import decode_response

TEST_ACCESS_KEY = "test-access-key"


class FakeQuoteClient:
    """In-memory stand-in for CurrencyApiClient that records every fetch."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None, exc: Exception | None = None):
        self.payload = payload if payload is not None else {"success": True, "quotes": {}}
        self.exc = exc
        self.calls: List[Dict[str, Any]] = []

    def fetch(self, access_key, currencies, source="USD", fmt=1):
        self.calls.append(
            {
                "access_key": access_key,
                "currencies": currencies,
                "source": source,
                "format": fmt,
            }
        )
        if self.exc is not None:
            raise self.exc
        return decode_response(self.payload)


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(
        _env_file=None,
        access_key=TEST_ACCESS_KEY,
        data_dir=tmp_path,
        db_filename="test.sqlite3",
    )
    s.init_post_load()
    return s


@pytest.fixture
def db(settings) -> Database:
    apply_migrations(settings.db_path)
    return Database(settings.db_path)


@pytest.fixture
def refs(db) -> Dict[str, int]:
    customer_id = db.insert_customer("Ada", "Lovelace", "ada@example.com")
    payment_id = db.insert_payment(Decimal("100.00"), "CREDIT_CARD")
    cart_id = db.insert_cart(customer_id)
    return {"customer_id": customer_id, "payment_id": payment_id, "cart_id": cart_id}


@pytest.fixture
def make_order(db, refs):
    def _make(paid: str = "100.00", total: str = "120.00", order_id: int = 7) -> int:
        return db.insert_order(
            Decimal(paid), Decimal(total), order_id=order_id, **refs
        )

    return _make


@pytest.fixture
def quote_client() -> FakeQuoteClient:
    return FakeQuoteClient({"success": True, "quotes": {"USDEUR": 0.9234}})


@pytest.fixture
def resolver(quote_client) -> RateResolver:
    return RateResolver(quote_client, TEST_ACCESS_KEY)


@pytest.fixture
def service(db, resolver) -> OrderService:
    return OrderService(db, resolver)


@pytest.fixture
def client(settings, resolver) -> TestClient:
    app = create_app(settings_override=settings)
    app.dependency_overrides[get_rate_resolver] = lambda: resolver
    with TestClient(app) as c:
        yield c
