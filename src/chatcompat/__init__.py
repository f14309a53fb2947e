"""chatcompat - structured content generation over OpenAI-compatible servers."""

from chatcompat.base import ContentGenerator
from chatcompat.config import GeneratorConfig
from chatcompat.converters import normalize_contents, to_chat_messages
from chatcompat.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    InvalidRequestError,
    MissingBodyError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SDKError,
    ServerError,
    TransportError,
    UnsupportedOperationError,
)
from chatcompat.generator import OpenAICompatibleContentGenerator, ResponseStream
from chatcompat.models import (
    Candidate,
    ChatMessage,
    ChatRole,
    CitationMetadata,
    Content,
    CountTokensParameters,
    CountTokensResponse,
    EmbedContentParameters,
    GenerateContentParameters,
    GenerationConfig,
    Part,
    PromptFeedback,
    Role,
    UsageMetadata,
)
from chatcompat.response import GenerateContentResponse
from chatcompat.streaming import StreamCollector
from chatcompat.tokens import estimate_tokens

__all__ = [
    "ContentGenerator",
    "OpenAICompatibleContentGenerator",
    "GeneratorConfig",
    "GenerateContentResponse",
    "ResponseStream",
    "StreamCollector",
    # Conversion
    "normalize_contents",
    "to_chat_messages",
    "estimate_tokens",
    # Errors
    "AccessDeniedError",
    "AuthenticationError",
    "ConfigurationError",
    "DecodeError",
    "InvalidRequestError",
    "MissingBodyError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "SDKError",
    "ServerError",
    "TransportError",
    "UnsupportedOperationError",
    # Models
    "Candidate",
    "ChatMessage",
    "ChatRole",
    "CitationMetadata",
    "Content",
    "CountTokensParameters",
    "CountTokensResponse",
    "EmbedContentParameters",
    "GenerateContentParameters",
    "GenerationConfig",
    "Part",
    "PromptFeedback",
    "Role",
    "UsageMetadata",
]
