# =============================================================================
# API Response Models - Pydantic V2 Schemas
# =============================================================================
#
# These models define the shape of data coming OUT of the API:
# 1. Automatically serialized to JSON by FastAPI
# 2. Generate OpenAPI response schemas (visible at /docs)
#
# The buffered analysis body uses camelCase (`textLength`) on the wire, so
# existing browser clients keep working. Python code uses snake_case and
# the alias handles the translation.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /health - confirms the API is running."""

    status: str = "ok"
    version: str
    service: str


class AnalysisResponse(BaseModel):
    """
    Response for POST /api/analyze?mode=buffered - the complete gap analysis.

    Carries the same text the streaming mode delivers one fragment at a
    time.
    """

    analysis: str = Field(description="Markdown gap analysis generated by the LLM")
    text_length: int = Field(
        alias="textLength",
        description="Number of characters extracted from the uploaded PDF",
    )

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """
    Error body for every failed analysis request.

    `details` is only present on 500 responses.
    """

    error: str = Field(description="Short, human-readable error message")
    details: str | None = Field(
        default=None,
        description="Internal error detail (not guaranteed safe for end users)",
    )
