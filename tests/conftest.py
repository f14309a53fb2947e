"""Shared fixtures: generators wired to in-memory httpx transports."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from chatcompat.config import GeneratorConfig
from chatcompat.generator import OpenAICompatibleContentGenerator
from helpers import API_KEY, ENDPOINT, MODEL

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def config() -> GeneratorConfig:
    return GeneratorConfig(endpoint=ENDPOINT, model=MODEL, api_key=API_KEY)


@pytest.fixture()
def make_generator(
    config: GeneratorConfig,
) -> Callable[[Handler], OpenAICompatibleContentGenerator]:
    """Return a factory building a generator whose requests go to *handler*."""

    def _make(handler: Handler) -> OpenAICompatibleContentGenerator:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OpenAICompatibleContentGenerator(config, client=client)

    return _make
