from __future__ import annotations

"""Quote client abstraction.

The resolver only needs ``fetch``; tests substitute an in-memory client.
"""
from typing import Protocol

from orderfx.models.rates import CurrencyApiResponse


class QuoteClient(Protocol):
    def fetch(
        self,
        access_key: str,
        currencies: str,
        source: str = "USD",
        fmt: int = 1,
    ) -> CurrencyApiResponse: ...
