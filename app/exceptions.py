# =============================================================================
# Analysis Errors - Request-Terminal Failure Taxonomy
# =============================================================================
#
# Every failure in the upload → extract → prompt → LLM → relay pipeline is
# raised as one of these. None are retried. The exception handlers in
# app/main.py turn them into JSON error bodies:
#
#   400 {"error": message}                     - client can fix the upload
#   500 {"error": message, "details": details} - everything else
#
# `details` carries internal detail (SDK error text, parser output) and is
# not guaranteed safe to show to end users verbatim.
# =============================================================================

from __future__ import annotations


class AnalysisError(Exception):
    """Base exception for all analysis pipeline errors."""

    status_code: int = 500
    message: str = "Error processing request"

    def __init__(self, details: str | None = None, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(details or self.message)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class MissingFile(AnalysisError):
    """Raised when the multipart form has no `file` field."""

    status_code = 400
    message = "No file provided"


class UnsupportedMediaType(AnalysisError):
    """Raised when the uploaded file is not declared as application/pdf."""

    status_code = 400
    message = "File must be a PDF"


class FileTooLarge(AnalysisError):
    """Raised when the upload exceeds the configured size limit."""

    status_code = 400
    message = "File is too large"


class EmptyDocument(AnalysisError):
    """Raised when the PDF has no extractable text after trimming."""

    status_code = 400
    message = "No text content found in PDF"


class ExtractionFailure(AnalysisError):
    """Raised when the PDF binary cannot be parsed."""

    message = "Failed to extract text from PDF"


class UpstreamError(AnalysisError):
    """Raised when the completion endpoint fails (network, auth, rate limit, bad response)."""

    message = "Language model request failed"


class StreamTimeout(AnalysisError):
    """Raised when the upstream stream does not finish within the hard ceiling."""

    message = "Stream timeout"
