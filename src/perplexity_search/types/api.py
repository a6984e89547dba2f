"""API request/response schemas for FastAPI endpoints."""

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    """Error body returned with a non-2xx status by GET /api/perplexity."""

    error: str = Field(..., description="Human-readable failure message")


class HealthResponse(BaseModel):
    """Response schema for GET /health endpoint."""

    status: str = Field(default="ok")
    version: str = Field(default="0.1.0")
    provider_configured: bool = Field(
        default=False, description="Whether a JigsawStack API key is configured"
    )
