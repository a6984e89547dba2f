"""HTTP client the front end uses to reach the proxy route."""

import httpx

from perplexity_search.api.proxy import UNKNOWN_ERROR_MESSAGE
from perplexity_search.config import settings
from perplexity_search.types.search import SearchResponse
from perplexity_search.utils.logging import setup_logger

logger = setup_logger(__name__)

PROXY_PATH = "/api/perplexity"


class SearchRequestError(Exception):
    """Raised when the proxy answers with an error or cannot be reached.

    The message is what the user sees, verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProxyClient:
    """Sync client for ``GET /api/perplexity``."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the proxy client.

        Args:
            base_url: Proxy API base URL. If None, uses settings.api_base_url
            timeout: Request timeout in seconds. If None, uses settings.client_timeout
            client: Shared httpx client. If None, one is opened per request
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.client_timeout
        self.client = client

    def search(self, query: str) -> SearchResponse:
        """Search through the proxy.

        The query is sent as a URL-encoded ``query`` parameter.

        Raises:
            SearchRequestError: On a non-2xx reply or a transport failure
        """
        url = f"{self.base_url}{PROXY_PATH}"
        params = {"query": query}

        try:
            if self.client is not None:
                response = self.client.get(url, params=params, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("Proxy request failed", extra={"url": url, "error": str(e)})
            raise SearchRequestError(str(e) or UNKNOWN_ERROR_MESSAGE) from e

        if response.is_error:
            raise SearchRequestError(_error_message(response), status_code=response.status_code)

        return SearchResponse.model_validate(response.json())


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Request failed with status {response.status_code}"
