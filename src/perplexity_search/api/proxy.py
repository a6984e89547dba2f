"""Timeout-guarded provider call and failure classification for the proxy route."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from perplexity_search.config import settings
from perplexity_search.tools._http_utils import ProviderError, ProviderErrorKind

SearchFn = Callable[[str], Awaitable[dict[str, Any]]]

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"

KIND_STATUS = {
    ProviderErrorKind.TIMEOUT: 504,
    ProviderErrorKind.NOT_FOUND: 404,
    ProviderErrorKind.UNAUTHORIZED: 401,
    ProviderErrorKind.UNKNOWN: 500,
}


async def search_with_timeout(
    query: str,
    search_fn: SearchFn,
    timeout_ms: int | None = None,
) -> dict[str, Any]:
    """Race the provider call against a fixed timeout.

    On timeout the provider task is cancelled so its connection is released.

    Raises:
        ProviderError: TIMEOUT kind if the call does not settle in time,
            otherwise whatever the provider raised
    """
    timeout_ms = timeout_ms or settings.search_timeout_ms
    try:
        return await asyncio.wait_for(search_fn(query), timeout=timeout_ms / 1000)
    except asyncio.TimeoutError as e:
        raise ProviderError(
            ProviderErrorKind.TIMEOUT, f"Request timed out after {timeout_ms}ms"
        ) from e


def _kind_from_message(message: str) -> ProviderErrorKind:
    """Best-effort classification of untagged failures by their message text."""
    lowered = message.lower()
    if "timed out" in lowered:
        return ProviderErrorKind.TIMEOUT
    if "not found" in lowered or "404" in lowered:
        return ProviderErrorKind.NOT_FOUND
    if "unauthorized" in lowered or "invalid key" in lowered:
        return ProviderErrorKind.UNAUTHORIZED
    return ProviderErrorKind.UNKNOWN


def classify_error(error: BaseException) -> tuple[int, str]:
    """Map a failure to an HTTP status code and the message shown to the client.

    Tagged ``ProviderError`` values are mapped by kind; anything else falls back
    to substring matching on its message.
    """
    if isinstance(error, ProviderError):
        return KIND_STATUS[error.kind], error.message or UNKNOWN_ERROR_MESSAGE

    message = str(error)
    if not message:
        return 500, UNKNOWN_ERROR_MESSAGE

    return KIND_STATUS[_kind_from_message(message)], message
