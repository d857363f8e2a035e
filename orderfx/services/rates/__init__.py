"""Exchange rate lookup: upstream quote client and rate resolution."""

from .base import QuoteClient
from .client import CurrencyApiClient
from .resolver import RateResolver

__all__ = ["QuoteClient", "CurrencyApiClient", "RateResolver"]
