"""Rich formatting helpers for the toolagent CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

if TYPE_CHECKING:
    from toolagent.agent.models import AgentResult
    from toolagent.models.conversation import ToolResult


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_error(message: str, console: Console) -> None:
    """Display an error message in red."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_heading(title: str, console: Console) -> None:
    console.print(f"\n[bold cyan]{escape(title)}[/bold cyan]")


def format_tool_result(result: ToolResult, console: Console) -> None:
    """Display one tool invocation as it is fed back to the model."""
    if result.success:
        console.print(
            f"[dim]\\[tool][/dim] [cyan]{escape(result.tool_name)}[/cyan] "
            f"-> {escape(result.output)}"
        )
    else:
        console.print(
            f"[dim]\\[tool][/dim] [cyan]{escape(result.tool_name)}[/cyan] "
            f"[red]failed:[/red] {escape(result.error)}"
        )


def format_answer(text: str, console: Console, *, title: str = "Answer") -> None:
    """Display a final model answer in a panel."""
    console.print(Panel(escape(text) or "[dim](empty)[/dim]", title=title, expand=False))


def format_reasoning(text: str, console: Console) -> None:
    """Display reasoning-model output, dimmed, above the answer."""
    console.print(Panel(f"[dim]{escape(text)}[/dim]", title="Reasoning", expand=False))


def format_run_summary(result: AgentResult, console: Console) -> None:
    console.print(
        f"[dim]{result.iterations} tool iteration(s), "
        f"{result.tool_calls_total} tool call(s)[/dim]"
    )


def format_stream_chunk(chunk: str, console: Console) -> None:
    """Write a streamed chunk without markup interpretation or a newline."""
    console.print(chunk, end="", markup=False, highlight=False, soft_wrap=True)
