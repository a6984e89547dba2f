"""Integration tests for the FastAPI server.

The provider call is patched; everything from the HTTP request to the
front end controller runs for real.
"""

import asyncio
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from perplexity_search.api import server
from perplexity_search.config import settings
from perplexity_search.tools._http_utils import ProviderError, ProviderErrorKind
from perplexity_search.ui.client import ProxyClient
from perplexity_search.ui.controller import Phase, SearchController, Tab

pytestmark = pytest.mark.integration


class FakeProvider:
    """Async stand-in for jigsaw_web_search."""

    def __init__(self, reply=None, error: Exception | None = None, delay: float = 0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.queries: list[str] = []

    async def __call__(self, query: str) -> dict:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.reply is not None:
            return self.reply
        return {"success": True, "query": query, "ai_overview": "", "image_urls": [], "results": []}


class TestApiServer:
    """Integration tests for GET /api/perplexity and GET /health."""

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch):
        self.monkeypatch = monkeypatch
        self.client = TestClient(server.app)

    def use_provider(self, provider: FakeProvider) -> FakeProvider:
        self.monkeypatch.setattr(server, "jigsaw_web_search", provider)
        return provider

    def test_health_check(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data
        assert isinstance(data["provider_configured"], bool)

    def test_success_returns_provider_body_verbatim(self, provider_payload: dict):
        provider = self.use_provider(FakeProvider(reply=provider_payload))

        response = self.client.get("/api/perplexity", params={"query": "capital of France"})

        assert response.status_code == 200
        assert response.json() == provider_payload
        assert provider.queries == ["capital of France"]

    def test_encoded_query_is_decoded_and_echoed(self):
        provider = self.use_provider(FakeProvider())
        query = "what's 2 + 2 & why?"

        response = self.client.get(f"/api/perplexity?query={quote(query)}")

        assert response.status_code == 200
        assert response.json()["query"] == query
        assert provider.queries == [query]

    @pytest.mark.parametrize(
        "url", ["/api/perplexity", "/api/perplexity?query=", "/api/perplexity?query=%20%20%20"]
    )
    def test_missing_query_uses_default_question(self, url: str):
        provider = self.use_provider(FakeProvider())

        response = self.client.get(url)

        assert response.status_code == 200
        assert provider.queries == [settings.default_query]
        assert provider.queries == ["What is the capital of France?"]

    def test_timeout_returns_504(self):
        self.monkeypatch.setattr(settings, "search_timeout_ms", 50)
        self.use_provider(FakeProvider(delay=2))

        response = self.client.get("/api/perplexity", params={"query": "slow"})

        assert response.status_code == 504
        assert response.json() == {"error": "Request timed out after 50ms"}
        assert "timed out" in response.json()["error"]

    @pytest.mark.parametrize(
        ("error", "status", "message"),
        [
            (ProviderError(ProviderErrorKind.UNAUTHORIZED, "Invalid API key"), 401, "Invalid API key"),
            (ProviderError(ProviderErrorKind.NOT_FOUND, "No such route"), 404, "No such route"),
            (ProviderError(ProviderErrorKind.TIMEOUT, "Provider request timed out"), 504, "Provider request timed out"),
            (RuntimeError("401 unauthorized"), 401, "401 unauthorized"),
            (RuntimeError("resource not found"), 404, "resource not found"),
            (RuntimeError("socket closed"), 500, "socket closed"),
            (RuntimeError(), 500, "An unknown error occurred"),
        ],
    )
    def test_failures_map_to_status(self, error: Exception, status: int, message: str):
        provider = self.use_provider(FakeProvider(error=error))

        response = self.client.get("/api/perplexity", params={"query": "q"})

        assert response.status_code == status
        assert response.json() == {"error": message}
        # No retries inside the handler
        assert provider.queries == ["q"]


class TestFrontEndThroughProxy:
    """Controller + ProxyClient + FastAPI app wired together."""

    @pytest.fixture
    def proxy_client(self) -> ProxyClient:
        return ProxyClient(base_url="http://testserver", client=TestClient(server.app))

    def test_capital_of_france_scenario(
        self, monkeypatch, proxy_client: ProxyClient, provider_payload: dict
    ):
        provider = FakeProvider(reply=provider_payload)
        monkeypatch.setattr(server, "jigsaw_web_search", provider)
        controller = SearchController()

        ticket = controller.submit("capital of France")
        assert controller.state.phase is Phase.SEARCHING
        controller.run(ticket, proxy_client.search)

        state = controller.state
        assert state.phase is Phase.RESULTS
        assert state.active_tab is Tab.SEARCH
        assert state.response.query == "capital of France"
        assert len(state.response.image_urls) == 5
        assert len(state.response.results) == 3

        controller.select_tab(Tab.IMAGES)
        controller.select_tab(Tab.SOURCES)
        assert provider.queries == ["capital of France"]

    def test_unauthorized_scenario_with_retry(self, monkeypatch, proxy_client: ProxyClient):
        provider = FakeProvider(error=RuntimeError("401 unauthorized"))
        monkeypatch.setattr(server, "jigsaw_web_search", provider)
        controller = SearchController()

        controller.run(controller.submit("capital of France"), proxy_client.search)
        assert controller.state.phase is Phase.RESULTS
        assert controller.state.error == "401 unauthorized"

        provider.error = None
        controller.run(controller.retry(), proxy_client.search)

        assert controller.state.error is None
        assert controller.state.response.query == "capital of France"
        assert provider.queries == ["capital of France", "capital of France"]
