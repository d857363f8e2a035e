"""Order read and update operations.

The read path (``retrieve_order_detail_by_id``) optionally converts the
stored USD prices into a requested currency. The converted amounts are a
view only; storage is never written on that path.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from orderfx.core.errors import (
    NoChanges,
    OrderNotFound,
    RelatedEntityNotFound,
)
from orderfx.db.dal import Database
from orderfx.models.order import OrderIn, OrderOut, OrderUpdateIn
from orderfx.services.money import round2

from .rates.resolver import RateResolver

logger = logging.getLogger("orderfx.orders")


class OrderService:
    def __init__(self, db: Database, rate_resolver: RateResolver):
        self._db = db
        self._rates = rate_resolver

    def _load(self, order_id: int) -> dict:
        row = self._db.get_order(order_id)
        if row is None:
            raise OrderNotFound(order_id)
        return row

    def retrieve_order_list(self) -> List[OrderOut]:
        return [OrderOut.from_row(r) for r in self._db.list_orders()]

    def retrieve_order_detail_by_id(
        self, order_id: int, currency: Optional[str] = None
    ) -> OrderOut:
        # Order lookup precedes the rate fetch so a missing order costs no upstream call
        view = OrderOut.from_row(self._load(order_id))
        if currency is None:
            return view

        code = self._rates.validate_currency(currency)
        rate = self._rates.rate_for(code)
        logger.debug(
            "converting order at %s",
            rate,
            extra={"order_id": order_id, "currency": code},
        )
        return view.model_copy(
            update={
                "paid_price": round2(view.paid_price * rate),
                "total_price": round2(view.total_price * rate),
                "currency": code,
            }
        )

    def _validate_related_fields_exist(self, order: OrderIn) -> None:
        if not self._db.customer_exists(order.customer_id):
            raise RelatedEntityNotFound("customer", order.customer_id)
        if not self._db.payment_exists(order.payment_id):
            raise RelatedEntityNotFound("payment", order.payment_id)
        if not self._db.cart_exists(order.cart_id):
            raise RelatedEntityNotFound("cart", order.cart_id)

    def update_order(self, order: OrderIn) -> OrderOut:
        self._load(order.id)
        self._validate_related_fields_exist(order)
        self._db.save_order(
            order_id=order.id,
            paid_price=order.paid_price,
            total_price=order.total_price,
            customer_id=order.customer_id,
            payment_id=order.payment_id,
            cart_id=order.cart_id,
        )
        logger.info("order replaced", extra={"order_id": order.id})
        return OrderOut.from_row(self._load(order.id))

    def update_order_by_id(self, order_id: int, update: OrderUpdateIn) -> OrderOut:
        row = self._load(order_id)
        new_paid: Optional[Decimal] = None
        new_total: Optional[Decimal] = None

        # Decimal equality ignores scale: 100 == 100.00 is not a change
        if update.paid_price is not None and update.paid_price != Decimal(row["paid_price"]):
            new_paid = update.paid_price
        if update.total_price is not None and update.total_price != Decimal(row["total_price"]):
            new_total = update.total_price

        if new_paid is None and new_total is None:
            raise NoChanges(order_id)

        self._db.update_order_prices(order_id, paid_price=new_paid, total_price=new_total)
        logger.info("order prices updated", extra={"order_id": order_id})
        return OrderOut.from_row(self._load(order_id))
