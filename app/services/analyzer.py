# =============================================================================
# Analyzer - GCP Gap Analysis over One Uploaded PDF
# =============================================================================
#
# One analysis operation, two delivery strategies:
#   run(document)    → AnalysisResult   (buffered: full text at once)
#   stream(document) → StreamEvents     (streamed: fragments as they arrive)
#
# FLOW (identical up to the LLM call):
#   1. Validate media type        - UnsupportedMediaType
#   2. Extract text (Docling)     - ExtractionFailure
#   3. Reject blank text          - EmptyDocument
#   4. Build prompt (system + document + case studies)
#   5. Call the LLM               - UpstreamError
#
# Steps 1-4 run in prepare(). The API layer awaits prepare() before it
# starts a streaming response, so validation errors still produce a proper
# JSON error body. No LLM call happens unless prepare() succeeded.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import aclosing
from dataclasses import dataclass

from app.exceptions import EmptyDocument, UnsupportedMediaType
from app.models.events import StreamEvent
from app.services.case_studies import load_case_studies
from app.services.extractor import PDF_MEDIA_TYPE, UploadedDocument, extract_text
from app.services.llm import LLMProvider, get_llm_provider
from app.services.prompts import AnalysisPrompt, build_prompt
from app.services.relay import StreamRelay

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


@dataclass
class PreparedAnalysis:
    """A validated document, ready to be sent to the LLM."""

    prompt: AnalysisPrompt
    text_length: int


@dataclass
class AnalysisResult:
    """Result of a buffered analysis."""

    analysis: str
    text_length: int
    model: str
    input_tokens: int
    output_tokens: int


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class Analyzer:
    """
    Runs the gap analysis for uploaded PDFs.

    Holds no per-request state: one instance can serve concurrent uploads.
    """

    def __init__(
        self,
        llm: LLMProvider | None = None,
        case_studies: str | None = None,
        timeout_seconds: float | None = None,
        per_character: bool | None = None,
    ) -> None:
        self._llm = llm
        self._case_studies = case_studies
        self._timeout_seconds = timeout_seconds
        self._per_character = per_character

    @property
    def llm(self) -> LLMProvider:
        """The LLM provider, created from config on first use."""
        if self._llm is None:
            self._llm = get_llm_provider()
        return self._llm

    async def prepare(self, document: UploadedDocument) -> PreparedAnalysis:
        """
        Validate the upload and build its prompt.

        Raises:
            UnsupportedMediaType: If the document is not application/pdf.
            ExtractionFailure: If the PDF cannot be parsed.
            EmptyDocument: If the PDF has no text after trimming whitespace.
        """
        if not document.is_pdf:
            raise UnsupportedMediaType(
                f"Expected {PDF_MEDIA_TYPE}, got {document.media_type or 'no media type'}"
            )

        text = await asyncio.to_thread(extract_text, document)
        if not text.strip():
            raise EmptyDocument(f"'{document.filename}' contains no extractable text")

        case_studies = self._case_studies
        if case_studies is None:
            case_studies = load_case_studies()

        return PreparedAnalysis(
            prompt=build_prompt(text, case_studies),
            text_length=len(text),
        )

    async def run(self, document: UploadedDocument) -> AnalysisResult:
        """Analyze a document and wait for the complete result."""
        prepared = await self.prepare(document)
        return await self.complete(prepared)

    async def stream(self, document: UploadedDocument) -> AsyncIterator[StreamEvent]:
        """Analyze a document, yielding StreamEvents as the LLM produces text."""
        prepared = await self.prepare(document)
        async with aclosing(self.stream_prepared(prepared)) as events:
            async for event in events:
                yield event

    async def complete(self, prepared: PreparedAnalysis) -> AnalysisResult:
        """Buffered LLM call for an already prepared analysis."""
        logger.info("Requesting buffered analysis (%d characters of text)", prepared.text_length)

        response = await self.llm.complete(
            messages=prepared.prompt.as_messages(),
            system=prepared.prompt.system,
        )

        logger.info(
            "Analysis complete: model=%s, tokens=%d+%d",
            response.model, response.input_tokens, response.output_tokens,
        )

        return AnalysisResult(
            analysis=response.content,
            text_length=prepared.text_length,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )

    def stream_prepared(self, prepared: PreparedAnalysis) -> AsyncIterator[StreamEvent]:
        """Streamed LLM call for an already prepared analysis."""
        logger.info("Requesting streamed analysis (%d characters of text)", prepared.text_length)

        fragments = self.llm.stream(
            messages=prepared.prompt.as_messages(),
            system=prepared.prompt.system,
        )
        return StreamRelay(
            fragments,
            timeout_seconds=self._timeout_seconds,
            per_character=self._per_character,
        ).events()
