from __future__ import annotations

"""Lightweight HTTP client util.

Single GET returning decoded JSON. Callers decide on retries; this helper
makes exactly one attempt.
"""
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Mapping, Optional


class HttpError(Exception):
    pass


def build_url(url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    if not params:
        return url
    return f"{url}?{urllib.parse.urlencode(params)}"


def get_json(
    url: str, params: Optional[Mapping[str, Any]] = None, *, timeout: float = 5.0
) -> Dict[str, Any]:
    full_url = build_url(url, params)
    try:
        with urllib.request.urlopen(full_url, timeout=timeout) as resp:  # nosec B310
            if resp.status >= 300:
                raise HttpError(f"HTTP {resp.status} for {url}")
            data = resp.read()
            payload = json.loads(data.decode("utf-8"))
    except HttpError:
        raise
    except (
        urllib.error.URLError,
        TimeoutError,
        ValueError,
    ) as e:  # ValueError for JSON decode
        # URL is reported without its query string; it carries the access key
        raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
    if not isinstance(payload, dict):
        raise HttpError(f"Expected JSON object from {url}")
    return payload
