"""Data Access Layer for orders and the aggregates they reference.

Responsibilities
----------------
- Resolve an order id to its stored row (or ``None``).
- Persist full replacements and price-only updates.
- Answer existence probes for customers, payments and carts.

Monetary values cross this boundary as ``Decimal`` and are stored as strings.
"""

from __future__ import annotations

from contextlib import closing, contextmanager
from decimal import Decimal
from pathlib import Path
import sqlite3
from typing import Any, Dict, Iterator, List, Optional

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"
_EXISTS_TABLES = {"customer": "customers", "payment": "payments", "cart": "carts"}


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """One connection per call: commit or roll back, then always close."""
        with closing(self._connect()) as conn:
            with conn:
                yield conn

    def _exists(self, entity: str, entity_id: int) -> bool:
        table = _EXISTS_TABLES[entity]
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(f"SELECT 1 FROM {table} WHERE id = ?", (entity_id,))
            return cur.fetchone() is not None

    # ------------------------------------------------------------------
    # Existence probes
    def customer_exists(self, customer_id: int) -> bool:
        return self._exists("customer", customer_id)

    def payment_exists(self, payment_id: int) -> bool:
        return self._exists("payment", payment_id)

    def cart_exists(self, cart_id: int) -> bool:
        return self._exists("cart", cart_id)

    # ------------------------------------------------------------------
    # Orders
    def get_order(self, order_id: int) -> Optional[Dict[str, Any]]:
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM orders WHERE id = ?", (order_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def list_orders(self) -> List[Dict[str, Any]]:
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM orders ORDER BY id ASC")
            return [dict(r) for r in cur.fetchall()]

    def insert_order(
        self,
        paid_price: Decimal,
        total_price: Decimal,
        customer_id: int,
        payment_id: int,
        cart_id: int,
        order_id: Optional[int] = None,
    ) -> int:
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO orders (id, paid_price, total_price, customer_id, payment_id, cart_id)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    order_id,
                    str(paid_price),
                    str(total_price),
                    customer_id,
                    payment_id,
                    cart_id,
                ),
            )
            return int(cur.lastrowid)

    def save_order(
        self,
        order_id: int,
        paid_price: Decimal,
        total_price: Decimal,
        customer_id: int,
        payment_id: int,
        cart_id: int,
    ) -> None:
        """Upsert the full order row keyed by ``order_id``."""
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO orders (id, paid_price, total_price, customer_id, payment_id, cart_id)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    paid_price = excluded.paid_price,
                    total_price = excluded.total_price,
                    customer_id = excluded.customer_id,
                    payment_id = excluded.payment_id,
                    cart_id = excluded.cart_id,
                    updated_at = ({UTC_NOW_SQL})
                """,
                (
                    order_id,
                    str(paid_price),
                    str(total_price),
                    customer_id,
                    payment_id,
                    cart_id,
                ),
            )

    def update_order_prices(
        self,
        order_id: int,
        paid_price: Optional[Decimal] = None,
        total_price: Optional[Decimal] = None,
    ) -> None:
        sets: List[str] = []
        params: List[Any] = []
        if paid_price is not None:
            sets.append("paid_price = ?")
            params.append(str(paid_price))
        if total_price is not None:
            sets.append("total_price = ?")
            params.append(str(total_price))
        if not sets:
            return
        sets.append(f"updated_at = ({UTC_NOW_SQL})")
        params.append(order_id)
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(f"UPDATE orders SET {', '.join(sets)} WHERE id = ?", params)
            if cur.rowcount == 0:
                raise ValueError("order not found")

    # ------------------------------------------------------------------
    # Sibling aggregates (seeding / tests)
    def insert_customer(
        self,
        first_name: str,
        last_name: str,
        email: Optional[str] = None,
    ) -> int:
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO customers (first_name, last_name, email) VALUES (?, ?, ?)",
                (first_name, last_name, email),
            )
            return int(cur.lastrowid)

    def insert_payment(
        self, paid_price: Decimal, payment_method: Optional[str] = None
    ) -> int:
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO payments (paid_price, payment_method) VALUES (?, ?)",
                (str(paid_price), payment_method),
            )
            return int(cur.lastrowid)

    def insert_cart(self, customer_id: Optional[int] = None, state: str = "CREATED") -> int:
        with self._session() as conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO carts (customer_id, cart_state) VALUES (?, ?)",
                (customer_id, state),
            )
            return int(cur.lastrowid)
