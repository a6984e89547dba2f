"""Pure helpers deciding what each result tab shows."""

from perplexity_search.types.search import SearchResponse, SearchResult
from perplexity_search.ui.controller import Tab

TOP_RESULTS = 3
MAX_SNIPPETS = 2
SNIPPET_MAX_CHARS = 200
ELLIPSIS = "..."


def truncate_snippet(snippet: str, limit: int = SNIPPET_MAX_CHARS) -> str:
    """Cut a snippet to ``limit`` characters plus an ellipsis; shorter ones pass unchanged."""
    if len(snippet) > limit:
        return snippet[:limit] + ELLIPSIS
    return snippet


def visible_snippets(result: SearchResult) -> list[str]:
    """Snippets shown for a source on the Sources tab."""
    return [truncate_snippet(s) for s in result.snippets[:MAX_SNIPPETS]]


def top_results(response: SearchResponse) -> list[SearchResult]:
    """Sources listed under the AI overview on the Search tab."""
    return list(response.results[:TOP_RESULTS])


def tab_label(tab: Tab, response: SearchResponse) -> str:
    if tab is Tab.IMAGES:
        return f"Images ({len(response.image_urls)})"
    if tab is Tab.SOURCES:
        return f"Sources ({len(response.results)})"
    return "Search"
