"""Streaming utilities for the OpenAI-compatible content generator.

Provides StreamCollector to fold a sequence of streamed responses into a
single response carrying the full text, the final finish reason, and any
usage the server reported.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from chatcompat.models import UsageMetadata
from chatcompat.payloads import ChoicePayload, CompletionPayload, PayloadKind
from chatcompat.response import GenerateContentResponse


@dataclass
class StreamCollector:
    """Accumulates streamed GenerateContentResponse views.

    Feed views via ``process()`` or consume a whole stream with
    ``collect()``, then call ``to_response()``. Only the first candidate
    of each view contributes text.
    """

    text_parts: list[str] = field(default_factory=list)
    finish_reason: str | None = None
    usage: UsageMetadata | None = None
    chunks: int = 0

    def process(self, response: GenerateContentResponse) -> None:
        """Process a single streamed response."""
        self.chunks += 1
        candidates = response.candidates
        if candidates:
            self.text_parts.append(response.text or "")
            if candidates[0].finish_reason is not None:
                self.finish_reason = candidates[0].finish_reason
        if response.usage_metadata is not None:
            self.usage = response.usage_metadata

    @property
    def text(self) -> str:
        return "".join(self.text_parts)

    def to_response(self) -> GenerateContentResponse:
        """Assemble the accumulated text into one completion-shaped response."""
        payload = CompletionPayload(
            kind=PayloadKind.COMPLETION,
            choices=[
                ChoicePayload(index=0, content=self.text, finish_reason=self.finish_reason)
            ],
            usage=self.usage,
        )
        return GenerateContentResponse(payload)

    async def collect(
        self, stream: AsyncIterator[GenerateContentResponse]
    ) -> GenerateContentResponse:
        """Consume an entire stream and return the assembled response."""
        async for response in stream:
            self.process(response)
        return self.to_response()
