from __future__ import annotations
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator


class CurrencyApiError(BaseModel):
    code: Optional[int] = None
    type: Optional[str] = None
    info: Optional[str] = None


class CurrencyApiResponse(BaseModel):
    """Decoded ``/live`` envelope.

    ``success`` and ``quotes`` stay optional here; the resolver decides what a
    missing field means. Quote keys are source+target, e.g. ``USDEUR``.
    """

    success: Optional[bool] = None
    terms: Optional[str] = None
    privacy: Optional[str] = None
    timestamp: Optional[int] = None
    source: Optional[str] = None
    quotes: Optional[Dict[str, float]] = None
    error: Optional[CurrencyApiError] = None

    @field_validator("quotes", mode="before")
    @classmethod
    def quotes_are_numbers(cls, v: Any) -> Any:
        # Lax float parsing would turn true into 1.0 and "0.9" into 0.9
        if isinstance(v, dict):
            for key, value in v.items():
                if isinstance(value, (bool, str)):
                    raise ValueError(f"quote {key} is not a number")
        return v
