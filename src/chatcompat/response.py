"""Read-only response view over a chat-completions payload."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from chatcompat.converters import from_chat_message
from chatcompat.models import (
    Candidate,
    ChatMessage,
    ChatRole,
    PromptFeedback,
    UsageMetadata,
)
from chatcompat.payloads import CompletionPayload, parse_completion


class GenerateContentResponse:
    """A content-generation response backed by one server payload.

    Built once per payload (one per non-streaming call, one per stream
    event) and never mutated. Candidates are projected at construction;
    the fields the chat-completions protocol cannot carry (function
    calls, code execution, safety feedback, citations) are empty.
    """

    def __init__(self, payload: CompletionPayload) -> None:
        self._payload = payload
        self._candidates = [
            Candidate(
                index=choice.index,
                content=from_chat_message(
                    ChatMessage(role=ChatRole.ASSISTANT, content=choice.content)
                ),
                finish_reason=choice.finish_reason,
            )
            for choice in payload.choices
        ]

    @classmethod
    def from_dict(cls, data: Any) -> GenerateContentResponse:
        """Validate a RawCompletionPayload dict and wrap it."""
        return cls(parse_completion(data))

    def __repr__(self) -> str:
        return (
            f"GenerateContentResponse(kind={self._payload.kind.value!r}, "
            f"candidates={len(self._candidates)})"
        )

    @property
    def payload(self) -> CompletionPayload:
        return self._payload

    @property
    def raw(self) -> dict[str, Any]:
        """The server payload, with ``delta`` already renamed for stream events."""
        return self._payload.raw

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates)

    @property
    def text(self) -> str | None:
        """Content of the first choice, or None when there are no choices."""
        if not self._payload.choices:
            return None
        return self._payload.choices[0].content

    @property
    def function_calls(self) -> list[Any]:
        return []

    @property
    def executable_code(self) -> str:
        return ""

    @property
    def code_execution_result(self) -> str:
        return ""

    @property
    def prompt_feedback(self) -> PromptFeedback:
        return PromptFeedback()

    @property
    def usage_metadata(self) -> UsageMetadata | None:
        return self._payload.usage

    def __iter__(self) -> Iterator[GenerateContentResponse]:
        # responses double as one-element sequences of themselves
        yield self
