"""Base protocol for content generators."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable
from typing import Protocol, runtime_checkable

from chatcompat.models import (
    CountTokensParameters,
    CountTokensResponse,
    EmbedContentParameters,
    EmbedContentResponse,
    GenerateContentParameters,
)
from chatcompat.response import GenerateContentResponse


@runtime_checkable
class ContentGenerator(Protocol):
    """Protocol that every content generator must satisfy.

    Generators translate between the structured contents model and a
    specific backend's API, returning GenerateContentResponse views.
    """

    async def generate_content(
        self, request: GenerateContentParameters
    ) -> GenerateContentResponse:
        """Send a non-streaming generation request."""
        ...

    async def generate_content_stream(
        self, request: GenerateContentParameters
    ) -> AsyncIterator[GenerateContentResponse]:
        """Open a streaming request and return an iterator of responses."""
        ...

    async def count_tokens(self, request: CountTokensParameters) -> CountTokensResponse:
        """Count (or estimate) the tokens in the request contents."""
        ...

    def embed_content(
        self, request: EmbedContentParameters
    ) -> Awaitable[EmbedContentResponse]:
        """Compute embeddings for the request contents."""
        ...
