"""Shared HTTP utilities for the search provider boundary."""

from enum import Enum
from typing import Any

import httpx

from perplexity_search.utils.logging import setup_logger

logger = setup_logger(__name__)


class ProviderErrorKind(str, Enum):
    """Failure categories surfaced by the search provider boundary."""

    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN = "unknown"


class ProviderError(Exception):
    """Tagged failure raised by provider calls.

    The proxy handler switches on ``kind`` to pick the response status, so the
    message text is free to carry whatever the provider said.
    """

    def __init__(self, kind: ProviderErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


_STATUS_KINDS = {
    401: ProviderErrorKind.UNAUTHORIZED,
    403: ProviderErrorKind.UNAUTHORIZED,
    404: ProviderErrorKind.NOT_FOUND,
}


def _error_message(response: httpx.Response) -> str:
    """Extract the provider's own error text, falling back to the status code."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and value.get("message"):
                return str(value["message"])

    return f"Request failed with status {response.status_code}"


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """POST a JSON payload and return the decoded JSON body.

    Args:
        client: Async HTTP client to send the request with
        url: Endpoint URL
        payload: JSON body
        headers: Extra request headers

    Returns:
        Parsed JSON response as dictionary

    Raises:
        ProviderError: For timeouts, HTTP error statuses and transport failures
    """
    try:
        response = await client.post(url, json=payload, headers=headers)
    except httpx.TimeoutException as e:
        logger.error(f"Request timeout for URL: {url}")
        raise ProviderError(ProviderErrorKind.TIMEOUT, f"Provider request timed out: {e}") from e
    except httpx.HTTPError as e:
        logger.error("HTTP error during API request", extra={"url": url, "error": str(e)})
        raise ProviderError(ProviderErrorKind.UNKNOWN, str(e) or type(e).__name__) from e

    if response.is_error:
        kind = _STATUS_KINDS.get(response.status_code, ProviderErrorKind.UNKNOWN)
        message = _error_message(response)
        logger.error(
            "Provider returned an error status",
            extra={"url": url, "status": response.status_code, "kind": kind.value},
        )
        raise ProviderError(kind, message)

    try:
        data = response.json()
    except ValueError as e:
        raise ProviderError(ProviderErrorKind.UNKNOWN, "Provider returned invalid JSON") from e

    if not isinstance(data, dict):
        raise ProviderError(ProviderErrorKind.UNKNOWN, "Provider returned an unexpected payload")

    return data
