"""toolagent demo -- run the chat, tool-calling, reasoning and streaming walkthroughs."""

from __future__ import annotations

import click

from toolagent.cli.commands.chat import run_chat
from toolagent.cli.commands.reason import PUZZLE_PROMPT, run_reason
from toolagent.cli.commands.stream import run_stream
from toolagent.cli.commands.tools import run_tools
from toolagent.cli.formatting import format_heading

CHAT_PROMPT = "请简单介绍一下你自己"
TOOLS_PROMPT = "请计算 (15 + 25) * 2 的结果，然后告诉我北京的天气如何"
STREAM_PROMPT = "请写一首关于人工智能的短诗"


@click.command()
@click.pass_context
def demo(ctx: click.Context) -> None:
    """Run basic chat, tool calling, reasoning and streaming in sequence.

    The reasoning step uses deepseek-reasoner unless --model is given.
    """
    from toolagent.cli import _client_session

    model = ctx.obj["model"]
    with _client_session(ctx) as (client, console):
        format_heading("1. Basic chat", console)
        run_chat(client, console, CHAT_PROMPT, model=model)

        format_heading("2. Tool calling", console)
        run_tools(client, console, TOOLS_PROMPT, model=model)

        format_heading("3. Reasoning model", console)
        run_reason(client, console, PUZZLE_PROMPT, model=model)

        format_heading("4. Streaming", console)
        run_stream(client, console, STREAM_PROMPT, model=model)

        console.print("\n[bold green]All demos finished.[/bold green]")
