"""toolagent reason -- ask a reasoning model and show its chain of thought."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from toolagent.agent.config import AgentBuilder
from toolagent.cli.formatting import format_answer, format_reasoning
from toolagent.llm.config import DEEPSEEK_REASONER
from toolagent.models.conversation import AssistantTurn

if TYPE_CHECKING:
    from rich.console import Console

    from toolagent.agent.models import AgentResult
    from toolagent.llm.protocols import CompletionClient

DEFAULT_REASON_PREAMBLE = "你是一个逻辑推理专家，请仔细分析问题并给出详细的推理过程。"
PUZZLE_PROMPT = (
    "有三个盒子，一个装金子，一个装银子，一个是空的。每个盒子上都有标签，"
    "但所有标签都是错的。如果我从标着'金子'的盒子里拿出一个银子，那么金子在哪个盒子里？"
)


def run_reason(
    client: CompletionClient,
    console: Console,
    prompt: str,
    *,
    preamble: str = DEFAULT_REASON_PREAMBLE,
    model: str | None = None,
) -> AgentResult:
    agent = AgentBuilder(client, model=model or DEEPSEEK_REASONER).preamble(preamble).build()
    result = agent.run(prompt)
    reply = result.conversation.last
    if isinstance(reply, AssistantTurn) and reply.reasoning:
        format_reasoning(reply.reasoning, console)
    format_answer(result.output, console)
    return result


@click.command()
@click.argument("prompt", default=PUZZLE_PROMPT)
@click.option(
    "--preamble",
    default=DEFAULT_REASON_PREAMBLE,
    help="System instruction for the agent.",
)
@click.pass_context
def reason(ctx: click.Context, prompt: str, preamble: str) -> None:
    """Send PROMPT (default: the three-box puzzle) to the reasoning model."""
    from toolagent.cli import _client_session

    with _client_session(ctx) as (client, console):
        run_reason(client, console, prompt, preamble=preamble, model=ctx.obj["model"])
