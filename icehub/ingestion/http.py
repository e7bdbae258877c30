"""Thin JSON-over-HTTP helper shared by the provider clients."""

from __future__ import annotations

from typing import Any

import requests

MAX_ERROR_SNIPPET = 300
CONNECT_TIMEOUT_SECONDS = 5
READ_TIMEOUT_SECONDS = 12
DEFAULT_USER_AGENT = "icehub-api/1.0"


class ProviderError(RuntimeError):
    pass


def _truncate(value: str, limit: int = MAX_ERROR_SNIPPET) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + "...<truncated>"


def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """GET a JSON document or raise ProviderError.

    Timeouts, connection errors, HTTP >= 400 and non-JSON bodies all surface
    as ProviderError so callers have a single failure type to handle.
    """

    request_headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }
    if headers:
        request_headers.update(headers)
    clean_params = {key: value for key, value in (params or {}).items() if value is not None}

    try:
        response = requests.get(
            url,
            params=clean_params or None,
            headers=request_headers,
            timeout=(CONNECT_TIMEOUT_SECONDS, READ_TIMEOUT_SECONDS),
        )
    except requests.Timeout as exc:
        raise ProviderError(f"Request to {url} timed out: {exc}") from exc
    except requests.RequestException as exc:
        raise ProviderError(f"Request to {url} failed: {exc}") from exc

    if response.status_code >= 400:
        raise ProviderError(
            f"{url} returned {response.status_code}: {_truncate(response.text or '')}"
        )
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(
            f"{url} returned non-JSON response: {_truncate(response.text or '')}"
        ) from exc
