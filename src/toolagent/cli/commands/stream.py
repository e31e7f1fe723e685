"""toolagent stream -- print a reply chunk by chunk as it arrives."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from toolagent.cli.formatting import format_error, format_stream_chunk
from toolagent.llm.errors import LLMStreamError

if TYPE_CHECKING:
    from rich.console import Console

    from toolagent.llm.protocols import CompletionClient


def run_stream(
    client: CompletionClient,
    console: Console,
    prompt: str,
    *,
    model: str | None = None,
) -> bool:
    """Stream the reply to the console.

    Returns False if the stream ended with an error. Chunks printed before
    the error stay on screen.
    """
    chunks = client.stream(prompt, model=model)
    try:
        for chunk in chunks:
            format_stream_chunk(chunk, console)
    except LLMStreamError as exc:
        console.print()
        format_error(str(exc), console)
        return False
    finally:
        close = getattr(chunks, "close", None)
        if close is not None:
            close()
    console.print()
    return True


@click.command()
@click.argument("prompt")
@click.pass_context
def stream(ctx: click.Context, prompt: str) -> None:
    """Stream the model's reply to PROMPT."""
    from toolagent.cli import _client_session

    with _client_session(ctx) as (client, console):
        if not run_stream(client, console, prompt, model=ctx.obj["model"]):
            raise SystemExit(1)
