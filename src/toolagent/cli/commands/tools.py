"""toolagent tools -- prompt an agent equipped with the sample tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from toolagent.agent.config import DEFAULT_MAX_TOOL_ITERATIONS, AgentBuilder
from toolagent.cli.formatting import format_answer, format_run_summary, format_tool_result
from toolagent.tools import Calculator, WeatherLookup

if TYPE_CHECKING:
    from rich.console import Console

    from toolagent.agent.models import AgentResult
    from toolagent.llm.protocols import CompletionClient

DEFAULT_TOOLS_PREAMBLE = "你是一个数学助手，使用提供的工具来执行精确的数学运算。"


def run_tools(
    client: CompletionClient,
    console: Console,
    prompt: str,
    *,
    preamble: str = DEFAULT_TOOLS_PREAMBLE,
    model: str | None = None,
    max_tool_iterations: int = DEFAULT_MAX_TOOL_ITERATIONS,
) -> AgentResult:
    agent = (
        AgentBuilder(client, model=model)
        .preamble(preamble)
        .tool(Calculator())
        .tool(WeatherLookup())
        .max_tool_iterations(max_tool_iterations)
        .on_tool_result(lambda result: format_tool_result(result, console))
        .build()
    )
    result = agent.run(prompt)
    format_answer(result.output, console)
    format_run_summary(result, console)
    return result


@click.command()
@click.argument("prompt")
@click.option(
    "--preamble",
    default=DEFAULT_TOOLS_PREAMBLE,
    help="System instruction for the agent.",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_TOOL_ITERATIONS,
    show_default=True,
    help="Tool-execution rounds allowed before giving up.",
)
@click.pass_context
def tools(ctx: click.Context, prompt: str, preamble: str, max_iterations: int) -> None:
    """Send PROMPT to an agent with the calculator and weather tools."""
    from toolagent.cli import _client_session

    with _client_session(ctx) as (client, console):
        run_tools(
            client,
            console,
            prompt,
            preamble=preamble,
            model=ctx.obj["model"],
            max_tool_iterations=max_iterations,
        )
