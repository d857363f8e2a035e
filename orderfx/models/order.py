from __future__ import annotations
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import BASE_CURRENCY


class OrderIn(BaseModel):
    """Full replacement payload; every reference must point at an existing row."""

    id: int = Field(..., gt=0)
    paid_price: Decimal = Field(..., ge=0)
    total_price: Decimal = Field(..., ge=0)
    customer_id: int
    payment_id: int
    cart_id: int


class OrderUpdateIn(BaseModel):
    """Partial update of the monetary fields. At least one must be provided."""

    paid_price: Optional[Decimal] = Field(None, ge=0)
    total_price: Optional[Decimal] = Field(None, ge=0)

    @model_validator(mode="after")
    def at_least_one(self) -> "OrderUpdateIn":
        if self.paid_price is None and self.total_price is None:
            raise ValueError("at least one field must be provided for update")
        return self


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    paid_price: Decimal
    total_price: Decimal
    customer_id: int
    payment_id: int
    cart_id: int
    currency: str = BASE_CURRENCY

    @classmethod
    def from_row(cls, row: dict) -> "OrderOut":
        return cls(
            id=row["id"],
            paid_price=Decimal(row["paid_price"]),
            total_price=Decimal(row["total_price"]),
            customer_id=row["customer_id"],
            payment_id=row["payment_id"],
            cart_id=row["cart_id"],
        )
