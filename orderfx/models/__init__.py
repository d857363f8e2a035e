"""Pydantic models for the order service."""

from .constants import BASE_CURRENCY, CURRENCIES  # re-export
from .order import OrderIn, OrderOut, OrderUpdateIn
from .rates import CurrencyApiError, CurrencyApiResponse

__all__ = [
    "BASE_CURRENCY",
    "CURRENCIES",
    "OrderIn",
    "OrderOut",
    "OrderUpdateIn",
    "CurrencyApiError",
    "CurrencyApiResponse",
]
