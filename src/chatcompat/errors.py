"""Error hierarchy for the OpenAI-compatible content generator.

Every failure surfaces to the caller as one of these types. Nothing in
the adapter retries; each error is terminal for the call that raised it.
"""

from __future__ import annotations


class SDKError(Exception):
    """Base exception for all chatcompat errors."""


class TransportError(SDKError):
    """The server answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code returned by the server.
        status_text: Reason phrase that accompanied the status.
        body: Full response body text, read before raising.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        status_text: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class InvalidRequestError(TransportError):
    """400/422: Malformed request, invalid parameters."""


class AuthenticationError(TransportError):
    """401: Invalid API key or expired token."""


class AccessDeniedError(TransportError):
    """403: Insufficient permissions."""


class NotFoundError(TransportError):
    """404: Model or endpoint not found."""


class RateLimitError(TransportError):
    """429: Rate limit exceeded."""


class ServerError(TransportError):
    """500-599: Server internal error."""


# ---------------------------------------------------------------------------
# Non-status errors
# ---------------------------------------------------------------------------


class NetworkError(SDKError):
    """Network-level failure (connection refused, DNS, transport timeout)."""


class MissingBodyError(SDKError):
    """A streaming call succeeded but the server supplied no readable body."""


class DecodeError(SDKError):
    """A response body or stream event could not be decoded or validated."""


class UnsupportedOperationError(SDKError, NotImplementedError):
    """The operation is not offered by the chat-completions protocol."""


class ConfigurationError(SDKError):
    """Missing or invalid generator settings."""


# ---------------------------------------------------------------------------
# HTTP status code mapping
# ---------------------------------------------------------------------------

_STATUS_TO_ERROR: dict[int, type[TransportError]] = {
    400: InvalidRequestError,
    401: AuthenticationError,
    403: AccessDeniedError,
    404: NotFoundError,
    422: InvalidRequestError,
    429: RateLimitError,
}


def error_from_status(status_code: int, status_text: str, body: str) -> TransportError:
    """Create the appropriate TransportError subclass from an HTTP status.

    Args:
        status_code: HTTP status code from the server response.
        status_text: Reason phrase for the status.
        body: Response body text.

    Returns:
        An instance of the matching TransportError subclass. Any 5xx maps
        to ServerError; other unknown statuses yield a plain TransportError.
    """
    cls = _STATUS_TO_ERROR.get(status_code)
    if cls is None:
        cls = ServerError if 500 <= status_code < 600 else TransportError
    message = (
        "Failed to fetch from OpenAI-compatible endpoint: "
        f"{status_code} {status_text} {body}"
    )
    return cls(message, status_code=status_code, status_text=status_text, body=body)
