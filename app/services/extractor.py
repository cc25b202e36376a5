# =============================================================================
# PDF Text Extractor - Docling Document Intelligence
# =============================================================================
#
# Turns an uploaded PDF into one plain-text string for the analysis prompt:
#   - text fragments on the same page are joined with a single space
#   - pages are joined with "\n", in page order
#   - pages without text still contribute their (empty) line
#
# Docling yields decoded Unicode text, so no percent-escapes or PDF string
# encodings leak into the prompt.
#
# The converter works on an in-memory DocumentStream. Uploads are never
# written to disk.
# =============================================================================

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from io import BytesIO

from docling.datamodel.base_models import DocumentStream, InputFormat
from docling.datamodel.pipeline_options import PdfPipelineOptions
from docling.document_converter import DocumentConverter, PdfFormatOption
from docling_core.types.doc.labels import DocItemLabel

from app.config import settings
from app.exceptions import ExtractionFailure

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


@dataclass
class UploadedDocument:
    """Raw upload as received from the client. Owned by a single request."""

    content: bytes
    media_type: str
    filename: str = "document.pdf"

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE


# ---------------------------------------------------------------------------
# Docling Converter - Lazy Singleton
# ---------------------------------------------------------------------------
# Initialization loads layout models into memory, so one converter is
# created on first use and shared by every request.
# ---------------------------------------------------------------------------

_converter: DocumentConverter | None = None


def _get_converter() -> DocumentConverter:
    """Lazily initialize and cache the Docling DocumentConverter."""
    global _converter
    if _converter is None:
        logger.info(
            "Initializing Docling DocumentConverter "
            "(first use, may take a few seconds)..."
        )

        pipeline_options = PdfPipelineOptions()
        pipeline_options.do_table_structure = True
        pipeline_options.do_ocr = settings.pdf_ocr_enabled

        _converter = DocumentConverter(
            format_options={
                InputFormat.PDF: PdfFormatOption(
                    pipeline_options=pipeline_options,
                ),
            }
        )
        logger.info("Docling DocumentConverter initialized")
    return _converter


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_text(document: UploadedDocument) -> str:
    """
    Extract the text of every page of an uploaded PDF.

    Args:
        document: The uploaded PDF bytes.

    Returns:
        Page texts joined with "\\n"; fragments within a page joined with " ".
        May be empty or whitespace-only: callers decide what that means.

    Raises:
        ExtractionFailure: If Docling cannot parse the binary.

    This is CPU-bound. Async callers should run it via asyncio.to_thread().
    """
    logger.info(
        "Extracting text: %s (%d bytes)", document.filename, len(document.content),
    )
    converter = _get_converter()

    # Docling detects the input format from the stream name
    stream_name = document.filename
    if not stream_name.lower().endswith(".pdf"):
        stream_name = f"{stream_name}.pdf"

    try:
        result = converter.convert(
            DocumentStream(name=stream_name, stream=BytesIO(document.content)),
        )
    except Exception as exc:
        raise ExtractionFailure(
            f"Docling failed to parse '{document.filename}': {exc}"
        ) from exc

    fragments_by_page: dict[int, list[str]] = defaultdict(list)

    for item, _level in result.document.iterate_items():
        page_no = 0
        if hasattr(item, "prov") and item.prov:
            page_no = item.prov[0].page_no

        label = getattr(item, "label", None)
        if label == DocItemLabel.TABLE:
            text = _table_to_text(item, result.document)
        else:
            text = getattr(item, "text", "") or ""

        text = " ".join(text.split())
        if text:
            fragments_by_page[page_no].append(text)

    page_numbers = set(fragments_by_page) | set(getattr(result.document, "pages", {}) or {})
    pages = [
        " ".join(fragments_by_page.get(page_no, []))
        for page_no in sorted(page_numbers)
    ]
    text = "\n".join(pages)

    logger.info(
        "Extracted '%s': %d pages, %d characters",
        document.filename, len(pages), len(text),
    )
    return text


def _table_to_text(table_item: object, document: object) -> str:
    """
    Flatten a Docling TableItem into text.

    Uses the markdown export so cell boundaries survive as "|" separators.
    Falls back to the item's plain text.
    """
    try:
        if hasattr(table_item, "export_to_markdown"):
            return table_item.export_to_markdown(doc=document)
    except Exception as exc:
        logger.warning("Table export to markdown failed: %s", exc)

    return getattr(table_item, "text", "") or ""
