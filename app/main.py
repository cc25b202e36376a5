# =============================================================================
# FastAPI Application - Entry Point
# =============================================================================
#
# Run locally:
#   uvicorn app.main:app --reload
#
# Wires together:
#   - logging (level from LOG_LEVEL)
#   - the /api/analyze router
#   - exception handlers that render every error as {"error", "details"}
#   - GET /health
# =============================================================================

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.analyze import router as analyze_router
from app.config import settings
from app.exceptions import AnalysisError
from app.models.responses import ErrorResponse, HealthResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Upload a clinical trial PDF and receive a GCP compliance-gap "
        "analysis grounded in reference inspection case studies."
    ),
)

app.include_router(analyze_router)


# ---------------------------------------------------------------------------
# Exception Handlers
# ---------------------------------------------------------------------------
# 4xx bodies carry only the short message. 5xx bodies add `details`.
# ---------------------------------------------------------------------------


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    if exc.is_client_error:
        logger.info("Rejected %s: %s (%s)", request.url.path, exc.message, exc.details)
        body = ErrorResponse(error=exc.message)
    else:
        logger.error("Failed %s: %s (%s)", request.url.path, exc.message, exc.details)
        body = ErrorResponse(error=exc.message, details=exc.details or exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s: %s", request.url.path, exc)
    body = ErrorResponse(error="Error processing request", details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------------------------------------------------------
# GET /health
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health() -> HealthResponse:
    return HealthResponse(version=settings.app_version, service=settings.app_name)
