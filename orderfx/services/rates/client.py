from __future__ import annotations

"""Currency layer ``/live`` client.

Issues one GET per call and returns the decoded envelope as-is. No retries,
caching or interpretation of ``success``; that belongs to the resolver.
"""
import logging
from typing import Any, Dict

from pydantic import ValidationError

from orderfx.core.errors import UpstreamTransportError, UpstreamUnavailable
from orderfx.models.rates import CurrencyApiResponse
from orderfx.services.http_client import HttpError, get_json

logger = logging.getLogger("orderfx.rates.client")

DEFAULT_BASE_URL = "http://apilayer.net/api"


def decode_response(payload: Dict[str, Any]) -> CurrencyApiResponse:
    """Validate a raw ``/live`` payload.

    Malformed ``quotes`` raise UpstreamUnavailable; any other shape problem
    is a decode failure (UpstreamTransportError).
    """
    try:
        return CurrencyApiResponse.model_validate(payload)
    except ValidationError as e:
        locs = [err["loc"] for err in e.errors()]
        if locs and all(loc and loc[0] == "quotes" for loc in locs):
            logger.warning(
                "quote map rejected: %s", e, extra={"slug": UpstreamUnavailable.slug}
            )
            raise UpstreamUnavailable("Malformed quotes in provider response") from e
        logger.warning(
            "quote payload rejected: %s", e, extra={"slug": UpstreamTransportError.slug}
        )
        raise UpstreamTransportError("undecodable quote payload") from e


class CurrencyApiClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 5.0):
        self._live_url = base_url.rstrip("/") + "/live"
        self._timeout = timeout

    def fetch(
        self,
        access_key: str,
        currencies: str,
        source: str = "USD",
        fmt: int = 1,
    ) -> CurrencyApiResponse:
        params = {
            "access_key": access_key,
            "currencies": currencies,
            "source": source,
            "format": fmt,
        }
        logger.debug(
            "GET %s",
            self._live_url,
            extra={"currency": currencies, "source": source},
        )
        try:
            payload = get_json(self._live_url, params, timeout=self._timeout)
        except HttpError as e:
            logger.warning(
                "quote request failed: %s",
                e,
                extra={"currency": currencies, "slug": UpstreamTransportError.slug},
            )
            raise UpstreamTransportError(str(e)) from e
        return decode_response(payload)
