"""Conversion between structured contents and chat-completions messages."""

from __future__ import annotations

from collections.abc import Mapping

from chatcompat.models import ChatMessage, ChatRole, Content, ContentsInput, Part, Role


def normalize_contents(contents: ContentsInput) -> list[Content]:
    """Coerce any accepted contents shape into a list of Content.

    A bare string becomes a single user entry with one text part. A single
    Content (or dict) becomes a one-element list. Sequences keep their
    order; dict entries are converted with ``Content.from_dict``.
    """
    if isinstance(contents, str):
        return [Content.user(contents)]
    if isinstance(contents, Content):
        return [contents]
    if isinstance(contents, Mapping):
        return [Content.from_dict(contents)]
    return [c if isinstance(c, Content) else Content.from_dict(c) for c in contents]


def to_chat_role(role: str) -> ChatRole:
    """Map a content role to a chat role: ``model`` is the assistant."""
    return ChatRole.ASSISTANT if role == Role.MODEL.value else ChatRole.USER


def to_chat_messages(contents: ContentsInput) -> list[ChatMessage]:
    """Map structured contents onto the flat chat-message list.

    One message per entry, in input order. Consecutive entries with the
    same role are not merged. Part texts are joined without a separator.
    """
    return [
        ChatMessage(role=to_chat_role(entry.role), content=entry.text())
        for entry in normalize_contents(contents)
    ]


def from_chat_message(message: ChatMessage) -> Content:
    """Map a chat message back to a Content holding a single text part."""
    role = Role.MODEL if message.role == ChatRole.ASSISTANT else Role.USER
    return Content(role=role.value, parts=[Part(text=message.content)])
