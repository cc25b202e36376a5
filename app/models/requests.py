# =============================================================================
# API Request Models
# =============================================================================
#
# POST /api/analyze takes a multipart upload rather than a JSON body, so the
# only request-side schema is the delivery mode selector. FastAPI validates
# the `mode` query parameter against this enum (422 on unknown values).
# =============================================================================

from enum import Enum


class ResponseMode(str, Enum):
    """How the analysis is delivered to the client."""

    STREAM = "stream"      # text/event-stream, one frame per fragment
    BUFFERED = "buffered"  # single JSON body once the LLM has finished
