# =============================================================================
# Unit Tests - Stream Events and Client-Side Stream Reader
# =============================================================================

import asyncio

import pytest
from pydantic import ValidationError

from app.models.events import StreamEvent
from app.services.stream_reader import StreamAccumulator, parse_frame_line


class TestStreamEvent:
    """Wire format of a single frame."""

    def test_content_frame(self):
        assert StreamEvent.chunk("K").to_frame() == 'data: {"content":"K"}\n\n'

    def test_done_frame(self):
        assert StreamEvent.finished().to_frame() == 'data: {"done":true}\n\n'

    def test_newline_content_is_escaped(self):
        assert StreamEvent.chunk("\n").to_frame() == 'data: {"content":"\\n"}\n\n'

    def test_needs_exactly_one_field(self):
        with pytest.raises(ValidationError):
            StreamEvent()
        with pytest.raises(ValidationError):
            StreamEvent(content="a", done=True)

    def test_done_false_rejected(self):
        with pytest.raises(ValidationError):
            StreamEvent(done=False)


class TestParseFrameLine:
    def test_non_frame_lines_ignored(self):
        assert parse_frame_line("") is None
        assert parse_frame_line(": keep-alive") is None

    def test_content_frame(self):
        assert parse_frame_line('data: {"content": "a"}') == StreamEvent.chunk("a")

    def test_malformed_json_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_frame_line('data: {"content": ')

    def test_unknown_shape_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_frame_line('data: {"status": "ok"}')


class TestStreamAccumulator:
    """Client-side accumulation tolerates bad lines."""

    def test_accumulates_in_order(self):
        frames = "".join(StreamEvent.chunk(c).to_frame() for c in "GCP") + StreamEvent.finished().to_frame()
        acc = StreamAccumulator().feed_lines(frames.splitlines())
        assert acc.text == "GCP"
        assert acc.done

    def test_malformed_lines_skipped_not_fatal(self):
        lines = [
            'data: {"content":"a"}',
            "data: not-json",
            'data: {"content":"b"}',
            'data: {"done":true}',
        ]
        acc = StreamAccumulator().feed_lines(lines)
        assert acc.text == "ab"
        assert acc.skipped_frames == 1
        assert acc.done

    def test_content_after_done_ignored(self):
        lines = ['data: {"content":"a"}', 'data: {"done":true}', 'data: {"content":"z"}']
        acc = StreamAccumulator().feed_lines(lines)
        assert acc.text == "a"

    def test_stream_cut_short_keeps_partial_text(self):
        acc = StreamAccumulator().feed_lines(['data: {"content":"par"}', 'data: {"content":"t"}'])
        assert acc.text == "part"
        assert not acc.done

    def test_on_content_callback(self):
        seen = []
        StreamAccumulator(on_content=seen.append).feed_lines(
            ['data: {"content":"x"}', 'data: {"content":"y"}'],
        )
        assert seen == ["x", "y"]

    def test_async_feed(self):
        async def lines():
            yield 'data: {"content":"ok"}'
            yield 'data: {"done":true}'

        acc = asyncio.run(StreamAccumulator().afeed_lines(lines()))
        assert acc.text == "ok"
        assert acc.done
