"""toolagent CLI -- drive a chat-completion provider from the terminal.

This module is NEVER imported from toolagent/__init__.py.
It is only loaded via the ``toolagent`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import click
from dotenv import load_dotenv

from toolagent.cli.formatting import format_error, get_console

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from toolagent.llm.protocols import CompletionClient


@click.group()
@click.option(
    "--model",
    default=None,
    envvar="TOOLAGENT_MODEL",
    help="Model identifier (defaults to the client's configured model).",
)
@click.option(
    "--env-prefix",
    default="DEEPSEEK",
    show_default=True,
    help="Prefix of the API key / base URL environment variables.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log tool calls and requests.")
@click.pass_context
def cli(ctx: click.Context, model: str | None, env_prefix: str, verbose: bool) -> None:
    """toolagent: prompt a model, let it call tools, stream replies."""
    load_dotenv()
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    ctx.ensure_object(dict)
    ctx.obj["model"] = model
    ctx.obj["env_prefix"] = env_prefix


def _get_client(ctx: click.Context) -> tuple[CompletionClient, bool]:
    """Return (client, owned).

    A client placed in ``ctx.obj["client"]`` by the caller is used as-is
    and not closed; otherwise one is built from the environment.
    """
    injected = ctx.obj.get("client")
    if injected is not None:
        return injected, False

    from toolagent.llm.client import OpenAIClient
    from toolagent.llm.config import ClientConfig

    return OpenAIClient(ClientConfig.from_env(ctx.obj["env_prefix"])), True


@contextmanager
def _client_session(ctx: click.Context) -> Iterator[tuple[CompletionClient, Console]]:
    """Context manager that yields (client, console) and handles cleanup.

    Closes clients it created and formats exceptions as CLI errors.
    """
    console = get_console()
    try:
        client, owned = _get_client(ctx)
        try:
            yield client, console
        finally:
            if owned:
                client.close()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from toolagent.cli.commands.chat import chat  # noqa: E402
from toolagent.cli.commands.demo import demo  # noqa: E402
from toolagent.cli.commands.reason import reason  # noqa: E402
from toolagent.cli.commands.stream import stream  # noqa: E402
from toolagent.cli.commands.tools import tools  # noqa: E402

cli.add_command(chat)
cli.add_command(tools)
cli.add_command(reason)
cli.add_command(stream)
cli.add_command(demo)
