"""CLI entry point for chatcompat.

Provides ``generate`` and ``count-tokens`` sub-commands using Click and
Rich for output formatting.

Usage::

    chatcompat generate "Why is the sky blue?" --stream --verbose
    chatcompat count-tokens "Why is the sky blue?"

Connection settings come from ``OPENAI_COMPAT_*`` environment variables,
optionally loaded from a dotenv file with ``--env-file``.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from chatcompat.errors import SDKError
from chatcompat.generator import OpenAICompatibleContentGenerator
from chatcompat.models import GenerateContentParameters, GenerationConfig
from chatcompat.streaming import StreamCollector
from chatcompat.tokens import estimate_tokens

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.group()
@click.version_option(package_name="chatcompat")
def main() -> None:
    """chatcompat: talk to OpenAI-compatible servers with structured contents."""


@main.command()
@click.argument("prompt")
@click.option("--stream", "use_stream", is_flag=True, help="Stream the response.")
@click.option("--temperature", type=float, default=None, help="Sampling temperature.")
@click.option("--max-tokens", type=int, default=None, help="Maximum output tokens.")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Dotenv file with OPENAI_COMPAT_* settings.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def generate(
    prompt: str,
    use_stream: bool,
    temperature: float | None,
    max_tokens: int | None,
    env_file: str | None,
    verbose: bool,
) -> None:
    """Send PROMPT to the configured server and print the reply."""
    _setup_logging(verbose)
    request = GenerateContentParameters(
        contents=prompt,
        generation_config=GenerationConfig(
            temperature=temperature, max_output_tokens=max_tokens
        ),
    )
    try:
        finish_reason = asyncio.run(_generate(request, env_file, use_stream))
    except SDKError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        sys.exit(1)
    console.print(f"\n[dim]finish_reason: {finish_reason}[/]")


async def _generate(
    request: GenerateContentParameters, env_file: str | None, use_stream: bool
) -> str | None:
    async with OpenAICompatibleContentGenerator.from_env(env_file) as generator:
        if not use_stream:
            response = await generator.generate_content(request)
            console.print(response.text or "", markup=False, highlight=False)
            candidates = response.candidates
            return candidates[0].finish_reason if candidates else None

        collector = StreamCollector()
        async with await generator.generate_content_stream(request) as stream:
            async for chunk in stream:
                collector.process(chunk)
                console.print(chunk.text or "", end="", markup=False, highlight=False)
        return collector.finish_reason


@main.command("count-tokens")
@click.argument("prompt")
def count_tokens(prompt: str) -> None:
    """Print a heuristic token estimate for PROMPT (about 4 chars per token)."""
    console.print(str(estimate_tokens(prompt)))


if __name__ == "__main__":
    main()
