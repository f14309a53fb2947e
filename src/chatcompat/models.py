"""Core data models for the OpenAI-compatible content generator.

Two content models meet here: the structured, multi-part ``Content``
list used by the content-generation interface, and the flat
``ChatMessage`` list spoken by ``/chat/completions`` servers. Response
shapes (candidates, prompt feedback, usage) mirror the interface's
read-only surface.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Role(str, enum.Enum):
    """Roles used by the structured content model."""

    USER = "user"
    MODEL = "model"


class ChatRole(str, enum.Enum):
    """Roles used by the chat-completions wire protocol."""

    USER = "user"
    ASSISTANT = "assistant"


# ---------------------------------------------------------------------------
# Structured content
# ---------------------------------------------------------------------------


@dataclass
class Part:
    """A single part of a content entry. Only text parts are carried."""

    text: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Part:
        return cls(text=data.get("text"))


@dataclass
class Content:
    """One entry of a structured conversation: a role and ordered parts."""

    role: str = Role.USER.value
    parts: list[Part] = field(default_factory=list)

    @staticmethod
    def user(text: str) -> Content:
        """Create a user entry with a single text part.

        Args:
            text: The user's message text.

        Returns:
            A Content with role ``"user"`` and one Part.
        """
        return Content(role=Role.USER.value, parts=[Part(text=text)])

    @staticmethod
    def model(text: str) -> Content:
        """Create a model entry with a single text part."""
        return Content(role=Role.MODEL.value, parts=[Part(text=text)])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Content:
        """Build a Content from its plain-dict form.

        Parts may be dicts or Part instances; a missing ``parts`` key
        yields an empty list.
        """
        parts = [
            p if isinstance(p, Part) else Part.from_dict(p)
            for p in (data.get("parts") or [])
        ]
        return cls(role=data.get("role") or Role.USER.value, parts=parts)

    def text(self) -> str:
        """Concatenate the text of all parts, treating missing text as empty."""
        return "".join(part.text or "" for part in self.parts)


# Anything the converter accepts as "contents"
ContentsInput = str | Content | Mapping[str, Any] | Sequence[Content | Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Chat messages
# ---------------------------------------------------------------------------


@dataclass
class ChatMessage:
    """A flat role/text message in the chat-completions format."""

    role: ChatRole
    content: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------


@dataclass
class GenerationConfig:
    """Sampling options forwarded to the server when set."""

    temperature: float | None = None
    max_output_tokens: int | None = None


@dataclass
class GenerateContentParameters:
    """Parameters for ``generate_content`` and ``generate_content_stream``."""

    contents: ContentsInput
    generation_config: GenerationConfig | None = None


@dataclass
class CountTokensParameters:
    contents: ContentsInput


@dataclass
class EmbedContentParameters:
    contents: ContentsInput


# ---------------------------------------------------------------------------
# Response shapes
# ---------------------------------------------------------------------------


@dataclass
class CitationMetadata:
    """Citation sources. The chat-completions protocol never supplies any."""

    citation_sources: list[Any] = field(default_factory=list)


@dataclass
class Candidate:
    """One generated alternative, projected from a server ``choice``."""

    index: int
    content: Content
    finish_reason: str | None = None
    citation_metadata: CitationMetadata = field(default_factory=CitationMetadata)


@dataclass
class PromptFeedback:
    """Prompt-level feedback. Always neutral for this protocol."""

    block_reason: str | None = None
    safety_ratings: list[Any] = field(default_factory=list)


@dataclass
class UsageMetadata:
    """Token usage as reported by the server's ``usage`` object."""

    prompt_token_count: int = 0
    candidates_token_count: int = 0
    total_token_count: int = 0


@dataclass
class CountTokensResponse:
    total_tokens: int = 0


@dataclass
class EmbedContentResponse:
    embeddings: list[Any] = field(default_factory=list)
