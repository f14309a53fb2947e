"""Content generator for OpenAI-compatible chat-completions servers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Awaitable
from types import TracebackType
from typing import Any

import httpx

from chatcompat.config import GeneratorConfig
from chatcompat.converters import to_chat_messages
from chatcompat.errors import (
    MissingBodyError,
    NetworkError,
    TransportError,
    UnsupportedOperationError,
    error_from_status,
)
from chatcompat.models import (
    CountTokensParameters,
    CountTokensResponse,
    EmbedContentParameters,
    EmbedContentResponse,
    GenerateContentParameters,
)
from chatcompat.payloads import loads, parse_completion, parse_delta
from chatcompat.response import GenerateContentResponse
from chatcompat.sse import SSEDecoder, SSEEvent
from chatcompat.tokens import estimate_tokens

logger = logging.getLogger(__name__)

_NO_BODY_STATUSES = (204, 205)


class ResponseStream:
    """Async iterator of streamed responses that owns the HTTP response.

    Iteration delegates to the SSE-decoding generator. ``aclose()`` (or
    leaving an ``async with`` block) releases the response whether or not
    iteration ever started.
    """

    def __init__(
        self,
        response: httpx.Response,
        events: AsyncGenerator[GenerateContentResponse, None],
    ) -> None:
        self._response = response
        self._events = events

    def __aiter__(self) -> ResponseStream:
        return self

    async def __anext__(self) -> GenerateContentResponse:
        return await self._events.__anext__()

    async def aclose(self) -> None:
        try:
            await self._events.aclose()
        finally:
            await self._response.aclose()

    async def __aenter__(self) -> ResponseStream:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class OpenAICompatibleContentGenerator:
    """Content generator that talks to any ``/chat/completions`` server.

    Structured contents are flattened into chat messages on the way out,
    and server payloads are wrapped as GenerateContentResponse views on
    the way back. Streaming responses are decoded from Server-Sent Events
    as they arrive.

    The generator owns its ``httpx.AsyncClient`` unless one is passed in;
    use it as an async context manager or call ``aclose()`` to release an
    owned client.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        client: httpx.AsyncClient | None = None,
        user_tier: str | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        if client is None:
            kwargs: dict[str, Any] = {}
            if config.timeout is not None:
                kwargs["timeout"] = config.timeout
            client = httpx.AsyncClient(**kwargs)
        self._client = client
        self.user_tier = user_tier

    @classmethod
    def from_env(
        cls,
        env_file: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> OpenAICompatibleContentGenerator:
        """Create a generator from ``OPENAI_COMPAT_*`` environment variables."""
        return cls(GeneratorConfig.from_env(env_file), client=client)

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def model(self) -> str:
        return self._config.model

    async def aclose(self) -> None:
        """Close the HTTP client if this generator created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> OpenAICompatibleContentGenerator:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # -----------------------------------------------------------------
    # Request mapping
    # -----------------------------------------------------------------

    def _build_body(
        self, request: GenerateContentParameters, *, stream: bool
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self._config.model,
            "messages": [m.to_dict() for m in to_chat_messages(request.contents)],
        }
        config = request.generation_config
        if config is not None:
            if config.temperature is not None:
                body["temperature"] = config.temperature
            if config.max_output_tokens is not None:
                body["max_tokens"] = config.max_output_tokens
        body["stream"] = stream
        return body

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    def _build_request(
        self, request: GenerateContentParameters, *, stream: bool
    ) -> httpx.Request:
        body = self._build_body(request, stream=stream)
        url = self._config.chat_completions_url
        logger.debug(
            "POST %s model=%s messages=%d stream=%s",
            url,
            body["model"],
            len(body["messages"]),
            stream,
        )
        return self._client.build_request("POST", url, headers=self._headers(), json=body)

    async def _send(self, http_request: httpx.Request, *, stream: bool) -> httpx.Response:
        try:
            return await self._client.send(http_request, stream=stream)
        except httpx.RequestError as exc:
            raise NetworkError(str(exc)) from exc

    @staticmethod
    async def _status_error(response: httpx.Response) -> TransportError:
        """Read the full error body, then build the matching TransportError."""
        try:
            await response.aread()
        finally:
            await response.aclose()
        logger.debug(
            "Server returned %d %s", response.status_code, response.reason_phrase
        )
        return error_from_status(
            response.status_code, response.reason_phrase, response.text
        )

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    async def generate_content(
        self, request: GenerateContentParameters
    ) -> GenerateContentResponse:
        """Send a non-streaming chat-completions request.

        Args:
            request: Contents and optional generation config.

        Returns:
            A response view over the server's completion payload.

        Raises:
            TransportError: The server returned a non-success status.
            NetworkError: The request could not be delivered.
            DecodeError: The body is not a valid completion payload.
        """
        response = await self._send(self._build_request(request, stream=False), stream=False)
        if not response.is_success:
            raise await self._status_error(response)
        return GenerateContentResponse(parse_completion(loads(response.content)))

    async def generate_content_stream(
        self, request: GenerateContentParameters
    ) -> ResponseStream:
        """Open a streaming chat-completions request.

        The HTTP status is checked before this coroutine returns, so status
        failures surface when it is awaited. The returned iterator yields one
        response per SSE event and closes the underlying HTTP response when
        it finishes, fails, or is closed early by the consumer.

        Args:
            request: Contents and optional generation config.

        Returns:
            A ResponseStream of response views, one per stream event. Close
            it (or use it with ``async with``) to release the connection.

        Raises:
            TransportError: The server returned a non-success status.
            NetworkError: The request could not be delivered.
            MissingBodyError: The server succeeded but sent no body.
        """
        response = await self._send(self._build_request(request, stream=True), stream=True)
        if not response.is_success:
            raise await self._status_error(response)
        if (
            response.status_code in _NO_BODY_STATUSES
            or response.headers.get("content-length") == "0"
        ):
            await response.aclose()
            raise MissingBodyError("No response body")
        return ResponseStream(response, self._iter_stream(response))

    async def _iter_stream(
        self, response: httpx.Response
    ) -> AsyncGenerator[GenerateContentResponse, None]:
        decoder = SSEDecoder()
        try:
            async for chunk in response.aiter_bytes():
                for event in decoder.feed(chunk):
                    if event.done:
                        logger.debug("Stream finished with [DONE]")
                        return
                    yield self._event_response(event)
            for event in decoder.flush():
                if event.done:
                    return
                yield self._event_response(event)
            logger.debug("Stream ended without [DONE]")
        except httpx.RequestError as exc:
            raise NetworkError(str(exc)) from exc
        finally:
            await response.aclose()

    @staticmethod
    def _event_response(event: SSEEvent) -> GenerateContentResponse:
        return GenerateContentResponse(parse_delta(loads(event.data)))

    async def count_tokens(self, request: CountTokensParameters) -> CountTokensResponse:
        """Estimate tokens locally; see ``chatcompat.tokens``."""
        return CountTokensResponse(total_tokens=estimate_tokens(request.contents))

    def embed_content(
        self, request: EmbedContentParameters
    ) -> Awaitable[EmbedContentResponse]:
        """Embeddings are not offered; always raises UnsupportedOperationError."""
        raise UnsupportedOperationError("embedContent not supported")
