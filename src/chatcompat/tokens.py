"""Heuristic token estimation.

There is no tokenizer for arbitrary OpenAI-compatible servers, so token
counts are approximated as one token per four characters of text. The
result is deterministic but will not match the server's own count.
"""

from __future__ import annotations

import math

from chatcompat.converters import normalize_contents
from chatcompat.models import ContentsInput

CHARS_PER_TOKEN = 4


def estimate_tokens(contents: ContentsInput) -> int:
    """Estimate the token count of *contents*.

    All part texts across all entries are concatenated with no separators
    or role markers, and the character length is divided by
    ``CHARS_PER_TOKEN``, rounding up.

    Args:
        contents: A string, a Content, or a sequence of Content entries.

    Returns:
        ``ceil(total_characters / 4)``; ``0`` for empty text.
    """
    text = "".join(entry.text() for entry in normalize_contents(contents))
    return math.ceil(len(text) / CHARS_PER_TOKEN)
