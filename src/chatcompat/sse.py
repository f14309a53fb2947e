"""Incremental Server-Sent-Events decoding.

Feeds raw bytes from the network and hands back the payload of each
complete ``data:`` event. A read may end in the middle of an event (or in
the middle of a multi-byte UTF-8 sequence), so the undecoded tail is kept
in a buffer until the next read completes it.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

EVENT_SEPARATOR = "\n\n"
DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


@dataclass
class SSEEvent:
    """The data of one SSE event, or the end-of-stream sentinel."""

    data: str = ""
    done: bool = False


@dataclass
class SSEDecoder:
    """Splits a byte stream into SSE events across arbitrary read boundaries.

    Call ``feed()`` with each chunk as it arrives and ``flush()`` once the
    transport reports end of stream.
    """

    buffer: str = ""
    _decoder: codecs.IncrementalDecoder = field(
        default_factory=lambda: codecs.getincrementaldecoder("utf-8")(),
        repr=False,
    )

    def feed(self, chunk: bytes) -> list[SSEEvent]:
        """Decode *chunk* and return every event it completes."""
        self.buffer += self._decoder.decode(chunk)
        self.buffer = self.buffer.replace("\r\n", "\n")
        *segments, self.buffer = self.buffer.split(EVENT_SEPARATOR)
        return self._parse_segments(segments)

    def flush(self) -> list[SSEEvent]:
        """Return the event left in the buffer when the stream ends."""
        self.buffer += self._decoder.decode(b"", final=True)
        tail, self.buffer = self.buffer.replace("\r\n", "\n"), ""
        return self._parse_segments([tail])

    @staticmethod
    def _parse_segments(segments: list[str]) -> list[SSEEvent]:
        events: list[SSEEvent] = []
        for segment in segments:
            if not segment.strip():
                continue
            if not segment.startswith(DATA_PREFIX):
                # the whole segment is dropped, including any later data: lines
                logger.debug("Ignoring non-data SSE segment: %r", segment[:80])
                continue
            data = segment[len(DATA_PREFIX):]
            if data.strip() == DONE_SENTINEL:
                events.append(SSEEvent(done=True))
                break
            events.append(SSEEvent(data=data))
        return events
