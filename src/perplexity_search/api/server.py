"""FastAPI server for perplexity-search.

Bridges the front end to the JigsawStack web search provider.

Endpoints:
    GET /api/perplexity - Timeout-guarded proxy to the provider
    GET /health - Health check
"""

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from perplexity_search import __version__
from perplexity_search.api.proxy import classify_error, search_with_timeout
from perplexity_search.config import settings
from perplexity_search.tools.jigsaw_search import jigsaw_web_search
from perplexity_search.types.api import ErrorEnvelope, HealthResponse
from perplexity_search.utils.logging import log_with_context, setup_logger

logger = setup_logger(__name__)


# =============================================================================
# FastAPI App
# =============================================================================
app = FastAPI(
    title="Perplexity Search API",
    description="Proxy API for AI-powered web search via JigsawStack.",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8501",  # Streamlit
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# =============================================================================
# Endpoints
# =============================================================================


@app.get(
    "/api/perplexity",
    responses={
        401: {"model": ErrorEnvelope},
        404: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
        504: {"model": ErrorEnvelope},
    },
)
async def perplexity_search(query: str | None = Query(default=None)) -> JSONResponse:
    """Forward a query to the search provider and relay its reply verbatim.

    A missing, empty or whitespace-only ``query`` falls back to
    ``settings.default_query``.
    Provider failures and timeouts come back as ``{"error": ...}`` with the
    matching status code; nothing is retried here.
    """
    query = (query or "").strip() or settings.default_query

    try:
        result = await search_with_timeout(query, jigsaw_web_search)
    except Exception as e:
        logger.exception(f"Error in Perplexity API route: {e}")
        status_code, message = classify_error(e)
        return JSONResponse(
            status_code=status_code,
            content=ErrorEnvelope(error=message).model_dump(),
        )

    log_with_context(
        logger,
        "info",
        "Search proxied",
        query=query,
        results=len(result.get("results") or []),
    )
    return JSONResponse(content=result)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=__version__,
        provider_configured=bool(settings.jigsaw_api_key),
    )
