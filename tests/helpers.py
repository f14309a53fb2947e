"""Test helpers: in-memory byte streams and payload builders."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

ENDPOINT = "http://llm.test/v1"
MODEL = "local-model"
API_KEY = "sk-test"


class RecordingStream(httpx.AsyncByteStream):
    """Byte stream that hands out fixed chunks and records when it is closed."""

    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = chunks
        self.reads = 0
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            self.reads += 1
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


def sse_frame(payload: dict[str, Any] | str) -> bytes:
    """Encode one ``data:`` event, JSON-encoding dict payloads."""
    data = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    return f"data: {data}\n\n".encode()


def delta_chunk(content: str | None, finish_reason: str | None = None) -> dict[str, Any]:
    return {
        "choices": [
            {"index": 0, "delta": {"content": content}, "finish_reason": finish_reason}
        ]
    }


def completion_body(content: str = "hi", finish_reason: str = "stop") -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "choices": [
            {"index": 0, "message": {"content": content}, "finish_reason": finish_reason}
        ],
    }

