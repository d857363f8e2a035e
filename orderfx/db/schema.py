"""Database schema DDL definitions and initialization utilities.

Tables:
  - customers, payments, carts: sibling aggregates an order references
  - orders: stored orders; prices kept as TEXT decimal strings (base USD)
  - metadata: key/value store (schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

CUSTOMERS_DDL = f"""
CREATE TABLE IF NOT EXISTS customers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name TEXT,
    last_name TEXT,
    email TEXT,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

PAYMENTS_DDL = f"""
CREATE TABLE IF NOT EXISTS payments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    paid_price TEXT NOT NULL DEFAULT '0.00',
    payment_method TEXT,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

CARTS_DDL = f"""
CREATE TABLE IF NOT EXISTS carts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    customer_id INTEGER,
    cart_state TEXT NOT NULL DEFAULT 'CREATED',
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (customer_id) REFERENCES customers(id)
);
"""

# Prices are decimal strings (e.g. '120.00'); REAL would lose the cents digit.
ORDERS_DDL = f"""
CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    paid_price TEXT NOT NULL,
    total_price TEXT NOT NULL,
    customer_id INTEGER NOT NULL,
    payment_id INTEGER NOT NULL,
    cart_id INTEGER NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (customer_id) REFERENCES customers(id),
    FOREIGN KEY (payment_id) REFERENCES payments(id),
    FOREIGN KEY (cart_id) REFERENCES carts(id)
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

ORDERS_CUSTOMER_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_orders_customer ON orders(customer_id);"
)

DDL_ORDER: Sequence[str] = (
    CUSTOMERS_DDL,
    PAYMENTS_DDL,
    CARTS_DDL,
    ORDERS_DDL,
    METADATA_DDL,
    ORDERS_CUSTOMER_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
