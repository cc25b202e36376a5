# =============================================================================
# Stream Reader - Client-Side Consumer of Analysis Frames
# =============================================================================
#
# Reassembles a streamed analysis from the lines of a text/event-stream
# body. Used by scripts/analyze_pdf.py and the API tests.
#
# Rules:
#   - only lines starting with "data: " are frames; everything else
#     (blank separators, comments) is ignored
#   - a frame that is not valid JSON, or not a valid StreamEvent, is
#     skipped and counted; it never aborts the stream
#   - content after the done frame is ignored
# =============================================================================

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterable, Callable, Iterable

from pydantic import ValidationError

from app.models.events import FRAME_PREFIX, StreamEvent

logger = logging.getLogger(__name__)


def parse_frame_line(line: str) -> StreamEvent | None:
    """
    Parse one line of the stream.

    Returns:
        The StreamEvent, or None if the line is not a frame.

    Raises:
        ValueError: If the line is a frame but its payload is malformed.
    """
    if not line.startswith(FRAME_PREFIX):
        return None

    payload = line[len(FRAME_PREFIX):].strip()
    try:
        return StreamEvent.model_validate(json.loads(payload))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Malformed stream frame: {payload[:80]!r}") from exc


class StreamAccumulator:
    """
    Accumulates the analysis text of one stream.

    Args:
        on_content: Called with each content piece as it arrives
            (e.g. to print a live "typing" view).
    """

    def __init__(self, on_content: Callable[[str], None] | None = None) -> None:
        self._parts: list[str] = []
        self._on_content = on_content
        self.done = False
        self.skipped_frames = 0

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def feed_line(self, line: str) -> None:
        try:
            event = parse_frame_line(line)
        except ValueError as exc:
            self.skipped_frames += 1
            logger.warning("%s", exc)
            return

        if event is None or self.done:
            return

        if event.is_done:
            self.done = True
            return

        self._parts.append(event.content)
        if self._on_content is not None:
            self._on_content(event.content)

    def feed_lines(self, lines: Iterable[str]) -> StreamAccumulator:
        for line in lines:
            self.feed_line(line)
        return self

    async def afeed_lines(self, lines: AsyncIterable[str]) -> StreamAccumulator:
        async for line in lines:
            self.feed_line(line)
        return self
