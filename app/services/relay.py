# =============================================================================
# Stream Relay - Upstream LLM Fragments → Client Stream Events
# =============================================================================
#
# Consumes the text fragments of a streaming completion and re-emits them
# as StreamEvents, in arrival order:
#
#   "Key F" → {"content":"K"} {"content":"e"} ... {"content":"F"}
#   (upstream finished) → {"done":true}
#
# With per_character=False each upstream fragment becomes one event.
# Either way the concatenated `content` equals the upstream text exactly.
#
# STATE MACHINE:
#   IDLE → STREAMING → COMPLETED   (exactly one trailing done event)
#                    → TIMED_OUT   (StreamTimeout raised, no done event)
#                    → ERRORED     (error re-raised, no done event)
#
# TIMEOUT: a hard wall-clock ceiling on the whole relay, fixed when
# streaming starts. Fragments arriving do NOT extend it. Every wait on the
# upstream is bounded by the time left until the deadline.
#
# CANCELLATION: when the consumer stops iterating (client disconnect, task
# cancelled) the relay stops reading and closes the upstream iterator.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator
from enum import Enum

from app.config import settings
from app.exceptions import StreamTimeout
from app.models.events import StreamEvent

logger = logging.getLogger(__name__)


class RelayState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    ERRORED = "errored"


class StreamRelay:
    """
    Single-use relay from one upstream fragment stream to StreamEvents.

    Usage:
        relay = StreamRelay(provider.stream(...), timeout_seconds=240)
        async for event in relay.events():
            send(event.to_frame())
    """

    def __init__(
        self,
        fragments: AsyncIterable[str],
        timeout_seconds: float | None = None,
        per_character: bool | None = None,
    ) -> None:
        self._fragments = fragments
        self._timeout_seconds = (
            settings.stream_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._per_character = (
            settings.stream_per_character if per_character is None else per_character
        )
        self.state = RelayState.IDLE
        self.characters_sent = 0

    async def events(self) -> AsyncIterator[StreamEvent]:
        """
        Yield content events, then one done event.

        Raises:
            StreamTimeout: If upstream has not finished by the deadline.
            RuntimeError: If the relay has already been started.
            Any error raised by the upstream iterator, unchanged.
        """
        if self.state is not RelayState.IDLE:
            raise RuntimeError(f"StreamRelay already used (state={self.state.value})")

        self.state = RelayState.STREAMING
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._timeout_seconds
        upstream = aiter(self._fragments)

        try:
            while True:
                if loop.time() >= deadline:
                    raise TimeoutError
                try:
                    # No yield inside the timeout block: it only bounds the
                    # upstream read, never the consumer.
                    async with asyncio.timeout_at(deadline):
                        fragment = await anext(upstream)
                except StopAsyncIteration:
                    break

                for piece in self._split(fragment):
                    self.characters_sent += len(piece)
                    yield StreamEvent.chunk(piece)

            self.state = RelayState.COMPLETED
            logger.info("Relay completed: %d characters", self.characters_sent)
            yield StreamEvent.finished()

        except TimeoutError as exc:
            self.state = RelayState.TIMED_OUT
            logger.error(
                "Relay timed out after %.0fs (%d characters sent)",
                self._timeout_seconds, self.characters_sent,
            )
            raise StreamTimeout(
                f"Upstream did not finish within {self._timeout_seconds:g} seconds"
            ) from exc

        except (asyncio.CancelledError, GeneratorExit):
            if self.state is RelayState.STREAMING:
                self.state = RelayState.ERRORED
                logger.warning(
                    "Relay stopped by consumer (%d characters sent)", self.characters_sent,
                )
            raise

        except Exception:
            self.state = RelayState.ERRORED
            logger.exception("Relay failed (%d characters sent)", self.characters_sent)
            raise

        finally:
            await _close_quietly(upstream)

    def _split(self, fragment: str) -> list[str]:
        if not fragment:
            return []
        if self._per_character:
            return list(fragment)
        return [fragment]


def relay(
    fragments: AsyncIterable[str],
    timeout_seconds: float | None = None,
    per_character: bool | None = None,
) -> AsyncIterator[StreamEvent]:
    """Shortcut for StreamRelay(...).events()."""
    return StreamRelay(fragments, timeout_seconds, per_character).events()


async def _close_quietly(upstream: AsyncIterator[str]) -> None:
    """Close the upstream iterator if it supports aclose()."""
    aclose = getattr(upstream, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as exc:
        logger.warning("Failed to close upstream stream: %s", exc)
