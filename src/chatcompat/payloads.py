"""Validation of raw chat-completions payloads.

Servers return two closely related JSON shapes: a full completion whose
choices carry ``message``, and a streaming chunk whose choices carry a
partial ``delta``. Both are normalized here into one ``CompletionPayload``
so that response views never inspect raw dicts at read time. Anything that
does not fit the expected shape raises ``DecodeError``.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from chatcompat.errors import DecodeError
from chatcompat.models import UsageMetadata


class PayloadKind(str, enum.Enum):
    """Which wire shape a payload was decoded from."""

    COMPLETION = "completion"
    DELTA = "delta"


@dataclass
class ChoicePayload:
    """A single validated choice."""

    index: int
    content: str = ""
    finish_reason: str | None = None


@dataclass
class CompletionPayload:
    """A validated payload, canonical for both wire shapes."""

    kind: PayloadKind
    choices: list[ChoicePayload] = field(default_factory=list)
    usage: UsageMetadata | None = None
    raw: dict[str, Any] = field(default_factory=dict)


def _parse_choice(choice: Any, position: int) -> ChoicePayload:
    if not isinstance(choice, Mapping):
        raise DecodeError(f"choices[{position}] is not an object")

    message = choice.get("message")
    if not isinstance(message, Mapping):
        raise DecodeError(f"choices[{position}].message is missing or not an object")

    content = message.get("content")
    if content is None:
        content = ""
    elif not isinstance(content, str):
        raise DecodeError(f"choices[{position}].message.content is not a string")

    index = choice.get("index", position)
    if not isinstance(index, int):
        raise DecodeError(f"choices[{position}].index is not an integer")

    finish_reason = choice.get("finish_reason")
    if finish_reason is not None and not isinstance(finish_reason, str):
        raise DecodeError(f"choices[{position}].finish_reason is not a string")

    return ChoicePayload(index=index, content=content, finish_reason=finish_reason)


def _usage_count(usage: Mapping[str, Any], key: str) -> int:
    value = usage.get(key)
    if value is None:
        return 0
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"usage.{key} is not an integer")
    return value


def _parse_usage(usage: Any) -> UsageMetadata | None:
    if not isinstance(usage, Mapping):
        return None
    prompt = _usage_count(usage, "prompt_tokens")
    completion = _usage_count(usage, "completion_tokens")
    return UsageMetadata(
        prompt_token_count=prompt,
        candidates_token_count=completion,
        total_token_count=_usage_count(usage, "total_tokens") or prompt + completion,
    )


def parse_completion(
    data: Any, kind: PayloadKind = PayloadKind.COMPLETION
) -> CompletionPayload:
    """Validate a RawCompletionPayload-shaped object.

    Args:
        data: Decoded JSON from the server.
        kind: The wire shape the object originally had.

    Returns:
        The normalized CompletionPayload.

    Raises:
        DecodeError: If ``choices`` or any choice's message is malformed.
    """
    if not isinstance(data, Mapping):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    choices = data.get("choices")
    if not isinstance(choices, list):
        raise DecodeError("Payload has no 'choices' list")
    return CompletionPayload(
        kind=kind,
        choices=[_parse_choice(c, i) for i, c in enumerate(choices)],
        usage=_parse_usage(data.get("usage")),
        raw=dict(data),
    )


def delta_to_message(data: Any) -> dict[str, Any]:
    """Rename each choice's ``delta`` to ``message``.

    Returns a new dict; the input is left untouched so every stream event
    owns its own payload object.
    """
    if not isinstance(data, Mapping):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    choices = data.get("choices")
    if not isinstance(choices, list):
        raise DecodeError("Stream event has no 'choices' list")
    remapped = []
    for choice in choices:
        if not isinstance(choice, Mapping):
            raise DecodeError("Stream event choice is not an object")
        item = {k: v for k, v in choice.items() if k != "delta"}
        item["message"] = choice.get("delta")
        remapped.append(item)
    return {**data, "choices": remapped}


def parse_delta(data: Any) -> CompletionPayload:
    """Validate a RawDeltaPayload, normalizing it to the completion shape."""
    return parse_completion(delta_to_message(data), kind=PayloadKind.DELTA)


def loads(text: str | bytes) -> Any:
    """Decode JSON text, translating failures into DecodeError."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Invalid JSON payload: {exc}") from exc
