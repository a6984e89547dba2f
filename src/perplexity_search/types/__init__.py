"""Type definitions for perplexity-search.

This module re-exports all types from submodules for convenient imports.
"""

from perplexity_search.types.api import ErrorEnvelope, HealthResponse
from perplexity_search.types.search import SearchResponse, SearchResult

__all__ = [
    # Search
    "SearchResponse",
    "SearchResult",
    # API
    "ErrorEnvelope",
    "HealthResponse",
]
