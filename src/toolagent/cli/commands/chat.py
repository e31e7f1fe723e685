"""toolagent chat -- send one prompt to a tool-less agent."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from toolagent.agent.config import AgentBuilder
from toolagent.cli.formatting import format_answer

if TYPE_CHECKING:
    from rich.console import Console

    from toolagent.llm.protocols import CompletionClient

DEFAULT_CHAT_PREAMBLE = "你是一个友好的AI助手，请用中文回答问题。"


def run_chat(
    client: CompletionClient,
    console: Console,
    prompt: str,
    *,
    preamble: str = DEFAULT_CHAT_PREAMBLE,
    model: str | None = None,
) -> str:
    agent = AgentBuilder(client, model=model).preamble(preamble).build()
    answer = agent.prompt(prompt)
    format_answer(answer, console)
    return answer


@click.command()
@click.argument("prompt")
@click.option(
    "--preamble",
    default=DEFAULT_CHAT_PREAMBLE,
    help="System instruction for the agent.",
)
@click.pass_context
def chat(ctx: click.Context, prompt: str, preamble: str) -> None:
    """Send PROMPT and print the model's answer."""
    from toolagent.cli import _client_session

    with _client_session(ctx) as (client, console):
        run_chat(client, console, prompt, preamble=preamble, model=ctx.obj["model"])
