"""Generator settings loaded from arguments or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from chatcompat.errors import ConfigurationError

ENV_ENDPOINT = "OPENAI_COMPAT_ENDPOINT"
ENV_MODEL = "OPENAI_COMPAT_MODEL"
ENV_API_KEY = "OPENAI_COMPAT_API_KEY"
ENV_TIMEOUT = "OPENAI_COMPAT_TIMEOUT"


@dataclass
class GeneratorConfig:
    """Connection settings for an OpenAI-compatible server.

    Attributes:
        endpoint: Base URL, e.g. ``http://localhost:11434/v1``. Requests go
            to ``{endpoint}/chat/completions``.
        model: Model name sent in every request body.
        api_key: Bearer token. Local servers often accept any value.
        timeout: HTTP timeout in seconds; None keeps httpx's default.
    """

    endpoint: str
    model: str
    api_key: str = ""
    timeout: float | None = None

    @property
    def chat_completions_url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/chat/completions"

    @classmethod
    def from_env(cls, env_file: str | None = None) -> GeneratorConfig:
        """Create settings from environment variables.

        Environment variables:
            OPENAI_COMPAT_ENDPOINT: Base URL of the server (required)
            OPENAI_COMPAT_MODEL: Model name (required)
            OPENAI_COMPAT_API_KEY: Bearer token
            OPENAI_COMPAT_TIMEOUT: Timeout in seconds

        Args:
            env_file: Optional dotenv file loaded first. Variables already
                set in the environment take precedence.

        Raises:
            ConfigurationError: If the endpoint or model is missing, or the
                timeout is not a number.
        """
        if env_file:
            load_dotenv(env_file)

        endpoint = os.environ.get(ENV_ENDPOINT, "")
        model = os.environ.get(ENV_MODEL, "")
        if not endpoint:
            raise ConfigurationError(f"{ENV_ENDPOINT} environment variable is required")
        if not model:
            raise ConfigurationError(f"{ENV_MODEL} environment variable is required")

        timeout: float | None = None
        timeout_str = os.environ.get(ENV_TIMEOUT)
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be a number, got {timeout_str!r}"
                ) from exc

        return cls(
            endpoint=endpoint,
            model=model,
            api_key=os.environ.get(ENV_API_KEY, ""),
            timeout=timeout,
        )
