"""JigsawStack web search client (AI overview, sources and images)."""

from typing import Any

import httpx

from perplexity_search.config import settings
from perplexity_search.tools._http_utils import post_json
from perplexity_search.utils.logging import setup_logger

logger = setup_logger(__name__)

WEB_SEARCH_PATH = "/web/search"


async def jigsaw_web_search(
    query: str,
    api_key: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Run an AI-powered web search through JigsawStack.

    The provider body is returned untouched so the proxy can relay it verbatim.

    Args:
        query: Search query string
        api_key: JigsawStack API key. If None, uses settings.jigsaw_api_key
        client: Async HTTP client. If None, a short-lived client is created

    Returns:
        Raw provider response (success, query, ai_overview, image_urls, results, ...)

    Raises:
        ValueError: If query is empty
        ProviderError: If the provider call fails
    """
    if not query or not query.strip():
        raise ValueError("Search query cannot be empty")

    if api_key is None:
        api_key = settings.jigsaw_api_key

    if not api_key:
        logger.warning("JigsawStack API key not configured. Set JIGSAW_API_KEY in .env file")

    url = settings.jigsaw_base_url.rstrip("/") + WEB_SEARCH_PATH
    headers = {"x-api-key": api_key, "Content-Type": "application/json"}

    logger.info(f"Fetching web search results from JigsawStack: {query}")

    if client is None:
        # No client-side timeout here: the proxy handler owns the time budget.
        async with httpx.AsyncClient(timeout=None) as own_client:
            data = await post_json(own_client, url, {"query": query}, headers=headers)
    else:
        data = await post_json(client, url, {"query": query}, headers=headers)

    logger.info(
        f"Successfully fetched {len(data.get('results') or [])} results from JigsawStack",
        extra={"query": query, "images": len(data.get("image_urls") or [])},
    )

    return data
