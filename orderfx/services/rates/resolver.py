from __future__ import annotations

"""Rate resolution: currency code -> Decimal rate (1 USD = rate TARGET).

Flow for ``rate_for``:
    1. normalize + validate against the currency registry (no upstream call on miss)
    2. exactly one upstream ``fetch`` with source ``BASE_CURRENCY``
    3. require ``success`` and the ``USD<TARGET>`` quote key
    4. bring the float quote into Decimal and reject non-positive, NaN and infinite values
"""
import logging
import math
from decimal import Decimal

from orderfx.core.errors import UnknownCurrency, UpstreamUnavailable
from orderfx.models.constants import BASE_CURRENCY, CURRENCIES, normalize_currency
from orderfx.services.money import to_decimal

from .base import QuoteClient

logger = logging.getLogger("orderfx.rates.resolver")


class RateResolver:
    def __init__(self, client: QuoteClient, access_key: str):
        self._client = client
        self._access_key = access_key

    def validate_currency(self, code: str) -> str:
        """Return the canonical code or raise UnknownCurrency."""
        canonical = normalize_currency(code)
        if canonical not in CURRENCIES:
            raise UnknownCurrency(code)
        return canonical

    def _unavailable(self, message: str, currency: str, quote_key: str) -> UpstreamUnavailable:
        logger.warning(
            message,
            extra={
                "currency": currency,
                "quote_key": quote_key,
                "slug": UpstreamUnavailable.slug,
            },
        )
        return UpstreamUnavailable(message)

    def rate_for(self, code: str) -> Decimal:
        currency = self.validate_currency(code)
        quote_key = BASE_CURRENCY + currency
        response = self._client.fetch(
            self._access_key, currency, source=BASE_CURRENCY, fmt=1
        )

        if not response.success:
            info = response.error.info if response.error else None
            raise self._unavailable(
                f"Currency API is unavailable{': ' + info if info else ''}",
                currency,
                quote_key,
            )

        quote = (response.quotes or {}).get(quote_key)
        if quote is None:
            raise self._unavailable(
                f"Quote {quote_key} missing from response", currency, quote_key
            )
        if not math.isfinite(quote) or quote <= 0:
            raise self._unavailable(
                f"Quote {quote_key} is not a positive rate", currency, quote_key
            )

        rate = to_decimal(quote)
        logger.debug(
            "resolved rate %s",
            rate,
            extra={"currency": currency, "quote_key": quote_key},
        )
        return rate
