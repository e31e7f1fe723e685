"""ToolRegistry: an agent-scoped, insertion-ordered set of tools.

Provides ``definitions()`` for model requests and ``dispatch()`` which
looks up the tool by name, validates the call's arguments against the
tool's pydantic model, invokes it, and returns a structured ``ToolResult``.
Dispatch never raises for tool-level problems; they come back as failure
results so the model can react.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import ValidationError

from toolagent.exceptions import (
    ArgumentParseError,
    DuplicateToolNameError,
    ToolError,
    UnknownToolError,
)
from toolagent.models.conversation import ToolCall, ToolResult
from toolagent.toolkit.base import Tool
from toolagent.toolkit.models import ToolDefinition

logger = logging.getLogger(__name__)


def _summarize_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


class ToolRegistry:
    """Registry of tools available to an agent.

    Usage::

        registry = ToolRegistry([Calculator()])
        registry.register(WeatherLookup())
        request_tools = registry.definitions()
        result = registry.dispatch(ToolCall(id="c1", name="calculator",
                                            raw_arguments='{"expression": "1+2"}'))
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> ToolRegistry:
        """Register a tool.

        Raises:
            DuplicateToolNameError: If a tool with the same name exists.
        """
        if tool.name in self._tools:
            raise DuplicateToolNameError(tool.name)
        self._tools[tool.name] = tool
        return self

    def get(self, name: str) -> Tool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        """Return tool names in registration order."""
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        """Return a definition for every tool, in registration order."""
        return [tool.definition() for tool in self._tools.values()]

    def dispatch(self, call: ToolCall) -> ToolResult:
        """Execute a tool call and wrap its outcome.

        Args:
            call: The tool call requested by the model.

        Returns:
            ToolResult answering ``call.id``. Unknown tools, malformed
            arguments and tool failures all produce a failure result.
        """
        try:
            tool = self._lookup(call.name)
            args = self._parse_arguments(tool, call.raw_arguments)
        except ToolError as exc:
            logger.info("Tool call %s rejected: %s", call.id, exc)
            return ToolResult.fail(call.id, call.name, str(exc))

        logger.info("Tool call: %s(%s)", call.name, call.arguments_json())
        try:
            output = tool.call(args)
        except ToolError as exc:
            logger.info("Tool %s failed: %s", call.name, exc)
            return ToolResult.fail(call.id, call.name, str(exc))
        except Exception as exc:
            logger.warning("Tool %s raised unexpectedly", call.name, exc_info=True)
            return ToolResult.fail(call.id, call.name, f"{type(exc).__name__}: {exc}")
        return ToolResult.ok(call.id, call.name, str(output))

    def _lookup(self, name: str) -> Tool:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    @staticmethod
    def _parse_arguments(tool: Tool, raw_arguments: Any) -> Any:
        """Decode and validate raw arguments into the tool's argument model."""
        if raw_arguments is None or raw_arguments == "":
            raw_arguments = {}
        if isinstance(raw_arguments, (str, bytes)):
            try:
                raw_arguments = json.loads(raw_arguments)
            except (ValueError, RecursionError) as exc:
                raise ArgumentParseError(tool.name, f"malformed JSON: {exc}") from exc
        try:
            return tool.args_model.model_validate(raw_arguments)
        except ValidationError as exc:
            raise ArgumentParseError(
                tool.name, _summarize_validation_error(exc)
            ) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
