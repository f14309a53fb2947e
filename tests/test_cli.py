"""Tests for the chatcompat CLI."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from click.testing import CliRunner

from chatcompat import cli
from chatcompat.config import ENV_ENDPOINT, ENV_MODEL
from chatcompat.generator import OpenAICompatibleContentGenerator
from helpers import RecordingStream, completion_body, delta_chunk, sse_frame

MakeGenerator = Callable[..., OpenAICompatibleContentGenerator]


def _use_generator(
    monkeypatch: pytest.MonkeyPatch, generator: OpenAICompatibleContentGenerator
) -> None:
    monkeypatch.setattr(
        cli.OpenAICompatibleContentGenerator,
        "from_env",
        classmethod(lambda cls, env_file=None: generator),
    )


class TestCountTokens:
    def test_prints_estimate(self) -> None:
        result = CliRunner().invoke(cli.main, ["count-tokens", "abcde"])
        assert result.exit_code == 0
        assert result.output.strip() == "2"


class TestGenerate:
    def test_prints_completion(
        self, monkeypatch: pytest.MonkeyPatch, make_generator: MakeGenerator
    ) -> None:
        generator = make_generator(
            lambda request: httpx.Response(200, json=completion_body("hello there"))
        )
        _use_generator(monkeypatch, generator)

        result = CliRunner().invoke(cli.main, ["generate", "hi"])

        assert result.exit_code == 0, result.output
        assert "hello there" in result.output
        assert "finish_reason: stop" in result.output

    def test_streams_completion(
        self, monkeypatch: pytest.MonkeyPatch, make_generator: MakeGenerator
    ) -> None:
        stream = RecordingStream(
            [
                sse_frame(delta_chunk("Hel")),
                sse_frame(delta_chunk("lo", "stop")),
                sse_frame("[DONE]"),
            ]
        )
        generator = make_generator(lambda request: httpx.Response(200, stream=stream))
        _use_generator(monkeypatch, generator)

        result = CliRunner().invoke(cli.main, ["generate", "hi", "--stream"])

        assert result.exit_code == 0, result.output
        assert "Hello" in result.output
        assert "finish_reason: stop" in result.output
        assert stream.closed

    def test_stream_released_when_output_fails(
        self, monkeypatch: pytest.MonkeyPatch, make_generator: MakeGenerator
    ) -> None:
        stream = RecordingStream(
            [
                sse_frame(delta_chunk("Hel")),
                sse_frame(delta_chunk("lo", "stop")),
                sse_frame("[DONE]"),
            ]
        )
        generator = make_generator(lambda request: httpx.Response(200, stream=stream))
        _use_generator(monkeypatch, generator)

        def broken_print(*args: object, **kwargs: object) -> None:
            raise BrokenPipeError("stdout closed")

        monkeypatch.setattr(cli.console, "print", broken_print)

        result = CliRunner().invoke(cli.main, ["generate", "hi", "--stream"])

        assert isinstance(result.exception, BrokenPipeError)
        assert stream.closed
        assert stream.reads == 1

    def test_server_error_exits_nonzero(
        self, monkeypatch: pytest.MonkeyPatch, make_generator: MakeGenerator
    ) -> None:
        generator = make_generator(lambda request: httpx.Response(500, text="boom"))
        _use_generator(monkeypatch, generator)

        result = CliRunner().invoke(cli.main, ["generate", "hi"])

        assert result.exit_code == 1
        assert "boom" in result.output

    def test_missing_configuration_exits_nonzero(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(ENV_ENDPOINT, raising=False)
        monkeypatch.delenv(ENV_MODEL, raising=False)

        result = CliRunner().invoke(cli.main, ["generate", "hi"])

        assert result.exit_code == 1
        assert ENV_ENDPOINT in result.output
