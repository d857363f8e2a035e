"""Seeding helper for a local demo database.

``seed_demo_order`` ensures one customer, payment, cart and order exist so
the read path can be exercised against a fresh install. Re-running it leaves
an already populated database untouched. Run ``python -m orderfx.db.seed``
(or ``scripts/seed_demo.py``) against the configured database.
"""

from __future__ import annotations
import argparse
import json
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

from .dal import Database
from .migrate import apply_migrations


def seed_demo_order(
    db_path: Path,
    paid_price: Decimal = Decimal("100.00"),
    total_price: Decimal = Decimal("120.00"),
) -> int:
    apply_migrations(db_path)  # ensure tables exist
    db = Database(db_path)
    existing = db.list_orders()
    if existing:
        return int(existing[0]["id"])
    customer_id = db.insert_customer("Demo", "Customer", "demo@example.com")
    payment_id = db.insert_payment(paid_price, "CREDIT_CARD")
    cart_id = db.insert_cart(customer_id)
    return db.insert_order(paid_price, total_price, customer_id, payment_id, cart_id)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Seed the configured (or given) database and print the order id."""
    parser = argparse.ArgumentParser(description="Seed a demo order")
    parser.add_argument("--db-path", type=Path, default=None)
    parser.add_argument("--paid", type=Decimal, default=Decimal("100.00"))
    parser.add_argument("--total", type=Decimal, default=Decimal("120.00"))
    args = parser.parse_args(argv)

    db_path = args.db_path
    if db_path is None:
        from orderfx.core.config import get_settings

        db_path = get_settings().db_path
    order_id = seed_demo_order(db_path, args.paid, args.total)
    print(json.dumps({"db_path": str(db_path), "order_id": order_id}))


if __name__ == "__main__":
    main()
