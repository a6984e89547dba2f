"""View-state machine for the search front end.

The whole UI state is one immutable ``SearchState`` value. Transitions:

    PRE_SEARCH --submit--> SEARCHING --resolve/reject--> RESULTS
    RESULTS (error) --retry--> RESULTS (loading) --resolve/reject--> RESULTS
    any phase --new_search--> PRE_SEARCH

Every request gets a ``SearchTicket``; a ticket that is no longer the pending
one (the user started over, or a newer request replaced it) settles nothing.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from perplexity_search.api.proxy import UNKNOWN_ERROR_MESSAGE
from perplexity_search.types.search import SearchResponse
from perplexity_search.utils.logging import setup_logger

logger = setup_logger(__name__)


class Phase(str, Enum):
    """Top-level UI phase."""

    PRE_SEARCH = "pre-search"
    SEARCHING = "searching"
    RESULTS = "results"


class Tab(str, Enum):
    """Result tabs, in display order."""

    SEARCH = "search"
    IMAGES = "images"
    SOURCES = "sources"


class SearchTicket(BaseModel):
    """Handle for one outbound request."""

    model_config = ConfigDict(frozen=True)

    request_id: int
    query: str


class SearchState(BaseModel):
    """Snapshot of the search UI."""

    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.PRE_SEARCH
    query: str = Field(default="", description="Text currently in the input box")
    submitted_query: str | None = Field(
        default=None, description="Trimmed query of the last submission, reused by retry"
    )
    response: SearchResponse | None = None
    error: str | None = None
    active_tab: Tab = Tab.SEARCH
    pending_request: int | None = Field(
        default=None, description="Id of the request whose result is still awaited"
    )
    retry_count: int = 0

    @property
    def loading(self) -> bool:
        return self.pending_request is not None

    @model_validator(mode="after")
    def check_phase(self) -> SearchState:
        if self.response is not None and self.error is not None:
            raise ValueError("state cannot hold both a response and an error")
        if self.phase is Phase.PRE_SEARCH:
            if self.loading or self.response is not None or self.error is not None:
                raise ValueError("pre-search state cannot be loading or hold results")
        elif self.phase is Phase.SEARCHING:
            if not self.loading or self.response is not None or self.error is not None:
                raise ValueError("searching state must have a pending request and no results")
        elif self.loading and self.error is None:
            raise ValueError("results can only be loading while retrying after an error")
        return self


class SearchController:
    """Owns the current ``SearchState`` and applies transitions to it."""

    def __init__(self, state: SearchState | None = None):
        self.state = state or SearchState()
        self._ids = itertools.count(1)

    def set_query(self, text: str) -> None:
        """Update the input box text (pre-search only)."""
        if self.state.phase is Phase.PRE_SEARCH:
            self.state = self.state.model_copy(update={"query": text})

    def submit(self, query: str | None = None) -> SearchTicket | None:
        """Start a search from the input form.

        Empty or whitespace-only input is ignored: no transition, no ticket.
        """
        if self.state.phase is not Phase.PRE_SEARCH:
            return None

        raw = self.state.query if query is None else query
        text = raw.strip()
        if not text:
            return None

        ticket = SearchTicket(request_id=next(self._ids), query=text)
        self.state = SearchState(
            phase=Phase.SEARCHING,
            query=raw,
            submitted_query=text,
            pending_request=ticket.request_id,
        )
        logger.info(f"Search submitted: {text}", extra={"request_id": ticket.request_id})
        return ticket

    def retry(self) -> SearchTicket | None:
        """Re-send the last submitted query after a failed request."""
        state = self.state
        if state.phase is not Phase.RESULTS or state.error is None or state.loading:
            return None
        if state.submitted_query is None:
            return None

        ticket = SearchTicket(request_id=next(self._ids), query=state.submitted_query)
        self.state = state.model_copy(
            update={"pending_request": ticket.request_id, "retry_count": state.retry_count + 1}
        )
        logger.info(
            f"Retrying search: {ticket.query}",
            extra={"request_id": ticket.request_id, "retry_count": state.retry_count + 1},
        )
        return ticket

    def is_current(self, ticket: SearchTicket) -> bool:
        return ticket.request_id == self.state.pending_request

    def pending_ticket(self) -> SearchTicket | None:
        """Ticket of the request still awaited, if any."""
        state = self.state
        if state.pending_request is None or state.submitted_query is None:
            return None
        return SearchTicket(request_id=state.pending_request, query=state.submitted_query)

    def resolve(self, ticket: SearchTicket, response: SearchResponse | dict[str, Any]) -> bool:
        """Settle a request successfully. Returns False for a stale ticket."""
        if not self.is_current(ticket):
            logger.debug("Ignoring stale search result", extra={"request_id": ticket.request_id})
            return False

        if not isinstance(response, SearchResponse):
            response = SearchResponse.model_validate(response)

        self.state = self.state.model_copy(
            update={
                "phase": Phase.RESULTS,
                "response": response,
                "error": None,
                "pending_request": None,
                "active_tab": Tab.SEARCH,
            }
        )
        return True

    def reject(self, ticket: SearchTicket, message: str) -> bool:
        """Settle a request with an error. Returns False for a stale ticket."""
        if not self.is_current(ticket):
            logger.debug("Ignoring stale search error", extra={"request_id": ticket.request_id})
            return False

        self.state = self.state.model_copy(
            update={
                "phase": Phase.RESULTS,
                "response": None,
                "error": message or UNKNOWN_ERROR_MESSAGE,
                "pending_request": None,
            }
        )
        return True

    def run(self, ticket: SearchTicket, fetch: Callable[[str], SearchResponse]) -> bool:
        """Execute ``fetch`` for a ticket and settle it.

        Returns whether the outcome was applied (False if the ticket went stale
        while the request was in flight).
        """
        try:
            response = fetch(ticket.query)
        except Exception as e:
            logger.error(f"Error fetching data: {e}", extra={"request_id": ticket.request_id})
            return self.reject(ticket, str(e))
        return self.resolve(ticket, response)

    def new_search(self) -> None:
        """Return to the input form, discarding the query, results and any pending request."""
        self.state = SearchState()

    def select_tab(self, tab: Tab) -> bool:
        """Switch the visible result tab. Never issues a request."""
        state = self.state
        if state.phase is not Phase.RESULTS or state.response is None or state.loading:
            return False
        self.state = state.model_copy(update={"active_tab": Tab(tab)})
        return True
