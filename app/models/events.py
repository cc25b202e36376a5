# =============================================================================
# Stream Events - Wire Format for Streamed Analyses
# =============================================================================
#
# A streamed analysis is a sequence of frames, each one JSON object on a
# `data: ` line followed by a blank line:
#
#   data: {"content":"#"}
#
#   data: {"content":" "}
#
#   ...
#
#   data: {"done":true}
#
# StreamEvent is a tagged union: exactly one of `content` / `done` is set.
# =============================================================================

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

FRAME_PREFIX = "data: "
FRAME_SEPARATOR = "\n\n"


class StreamEvent(BaseModel):
    """One frame of a streamed analysis."""

    content: str | None = None
    done: bool | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _exactly_one_field(self) -> StreamEvent:
        if (self.content is None) == (self.done is None):
            raise ValueError("StreamEvent needs exactly one of 'content' or 'done'")
        if self.done is not None and not self.done:
            raise ValueError("'done' events must carry done=true")
        return self

    @classmethod
    def chunk(cls, text: str) -> StreamEvent:
        return cls(content=text)

    @classmethod
    def finished(cls) -> StreamEvent:
        return cls(done=True)

    @property
    def is_done(self) -> bool:
        return bool(self.done)

    def to_frame(self) -> str:
        """Serialize as a `data: {...}\\n\\n` frame."""
        return f"{FRAME_PREFIX}{self.model_dump_json(exclude_none=True)}{FRAME_SEPARATOR}"
