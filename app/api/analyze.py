# =============================================================================
# Analyze API - PDF Upload → GCP Gap Analysis
# =============================================================================
#
# ENDPOINT:
#   POST /api/analyze  (multipart form, field `file`, application/pdf)
#
# RESPONSE MODES (query param `mode`, default from DEFAULT_RESPONSE_MODE):
#   stream   - 200 text/event-stream:
#                data: {"content":"<char>"}\n\n ... data: {"done":true}\n\n
#   buffered - 200 {"analysis": "...", "textLength": <int>}
#
# ERRORS (JSON, rendered by the handlers in app/main.py):
#   400 {"error": ...}              - missing file, not a PDF, too large,
#                                     no extractable text
#   500 {"error": ..., "details": ...} - extraction, LLM, anything else
#
# Validation and extraction finish BEFORE the streaming response starts.
# Once frames are flowing, a failure (LLM error, timeout) aborts the
# response without a done frame.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from starlette.datastructures import UploadFile

from app.api.deps import get_analyzer
from app.config import settings
from app.exceptions import FileTooLarge, MissingFile
from app.models.events import StreamEvent
from app.models.requests import ResponseMode
from app.models.responses import AnalysisResponse, ErrorResponse
from app.services.analyzer import Analyzer
from app.services.extractor import UploadedDocument

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

UPLOAD_REQUEST_BODY = {
    "required": True,
    "content": {
        "multipart/form-data": {
            "schema": {
                "type": "object",
                "required": ["file"],
                "properties": {
                    "file": {
                        "type": "string",
                        "format": "binary",
                        "description": "PDF document to analyze (protocol, monitoring report, site file, ...)",
                    },
                },
            },
        },
    },
}


# ---------------------------------------------------------------------------
# POST /api/analyze - Analyze an uploaded PDF
# ---------------------------------------------------------------------------


@router.post(
    "/api/analyze",
    response_model=AnalysisResponse,
    summary="Analyze a clinical trial document for GCP compliance gaps",
    description=(
        "Upload a PDF. Its text is compared against reference GCP inspection "
        "case studies by the LLM. By default the analysis is streamed as "
        "text/event-stream frames; use mode=buffered for a single JSON body."
    ),
    responses={
        200: {
            "content": {"text/event-stream": {}},
            "description": "Streamed analysis (mode=stream) or JSON body (mode=buffered)",
        },
        400: {"model": ErrorResponse, "description": "Invalid upload"},
        500: {"model": ErrorResponse, "description": "Processing failed"},
    },
    openapi_extra={"requestBody": UPLOAD_REQUEST_BODY},
)
async def analyze_endpoint(
    request: Request,
    mode: ResponseMode | None = Query(
        default=None,
        description="Delivery mode: 'stream' (default) or 'buffered'",
    ),
    analyzer: Analyzer = Depends(get_analyzer),
):
    """
    Analyze one PDF and deliver the result in the requested mode.

    The pipeline:
    1. Read the upload and enforce the size limit
    2. Validate media type, extract text, reject blank documents
    3. Call the LLM (streamed or buffered)
    """
    # A missing `file` field and a plain-text `file` field are both a 400
    async with request.form() as form:
        file = form.get("file")
        if not isinstance(file, UploadFile):
            raise MissingFile()
        content = await file.read()

    if len(content) > settings.max_upload_bytes:
        raise FileTooLarge(
            f"{len(content)} bytes exceeds the {settings.max_upload_bytes} byte limit"
        )

    document = UploadedDocument(
        content=content,
        media_type=file.content_type or "",
        filename=file.filename or "document.pdf",
    )

    resolved_mode = mode or ResponseMode(settings.default_response_mode)
    logger.info(
        "Analyze request: filename=%s, media_type=%s, size=%d, mode=%s",
        document.filename, document.media_type, len(content), resolved_mode.value,
    )

    prepared = await analyzer.prepare(document)

    if resolved_mode is ResponseMode.BUFFERED:
        result = await analyzer.complete(prepared)
        return AnalysisResponse(analysis=result.analysis, text_length=result.text_length)

    return StreamingResponse(
        _event_frames(analyzer.stream_prepared(prepared)),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )


async def _event_frames(events: AsyncIterator[StreamEvent]) -> AsyncIterator[str]:
    """Serialize StreamEvents to wire frames, closing the relay on exit."""
    async with aclosing(events):
        async for event in events:
            yield event.to_frame()
