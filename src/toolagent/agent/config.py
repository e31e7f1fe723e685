"""Agent configuration and builder.

AgentConfig is immutable once built. AgentBuilder offers the fluent
construction style::

    agent = (
        client.agent(DEEPSEEK_CHAT)
        .preamble("You are a calculator assistant.")
        .tool(Calculator())
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from toolagent.exceptions import AgentConfigError

if TYPE_CHECKING:
    from toolagent.agent.loop import Agent
    from toolagent.llm.protocols import CompletionClient
    from toolagent.models.conversation import ToolResult
    from toolagent.toolkit.base import Tool

DEFAULT_MAX_TOOL_ITERATIONS = 8


@dataclass(frozen=True)
class AgentConfig:
    """Configuration for an agent.

    Attributes:
        preamble: System instruction prefixed to every conversation.
        tools: Tools the model may call. Names must be unique.
        max_tool_iterations: Tool-execution rounds allowed per prompt
            before the run fails with MaxIterationsExceededError.
        model: Model identifier (None = client default).
        temperature: Sampling temperature (None = provider default).
        max_tokens: Maximum tokens per model reply.
        max_workers: Thread-pool size for concurrent tool calls
            (None = one worker per call).
        on_tool_result: Callback invoked with every ToolResult as it is
            folded into the conversation.
    """

    preamble: str = ""
    tools: tuple[Tool, ...] = ()
    max_tool_iterations: int = DEFAULT_MAX_TOOL_ITERATIONS
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    max_workers: int | None = None
    on_tool_result: Callable[[ToolResult], None] | None = field(
        default=None, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "tools", tuple(self.tools))
        if self.max_tool_iterations < 1:
            raise AgentConfigError(
                f"max_tool_iterations must be at least 1, got {self.max_tool_iterations}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise AgentConfigError(
                f"max_workers must be at least 1, got {self.max_workers}"
            )


class AgentBuilder:
    """Fluent builder producing an Agent bound to a completion client."""

    def __init__(self, client: CompletionClient, model: str | None = None) -> None:
        self._client = client
        self._model = model
        self._preamble = ""
        self._tools: list[Tool] = []
        self._max_tool_iterations = DEFAULT_MAX_TOOL_ITERATIONS
        self._temperature: float | None = None
        self._max_tokens: int | None = None
        self._max_workers: int | None = None
        self._on_tool_result: Callable[[ToolResult], None] | None = None

    def preamble(self, text: str) -> AgentBuilder:
        self._preamble = text
        return self

    def tool(self, tool: Tool) -> AgentBuilder:
        self._tools.append(tool)
        return self

    def tools(self, tools: Iterable[Tool]) -> AgentBuilder:
        self._tools.extend(tools)
        return self

    def max_tool_iterations(self, n: int) -> AgentBuilder:
        self._max_tool_iterations = n
        return self

    def temperature(self, value: float) -> AgentBuilder:
        self._temperature = value
        return self

    def max_tokens(self, n: int) -> AgentBuilder:
        self._max_tokens = n
        return self

    def max_workers(self, n: int) -> AgentBuilder:
        self._max_workers = n
        return self

    def on_tool_result(self, callback: Callable[[ToolResult], None]) -> AgentBuilder:
        self._on_tool_result = callback
        return self

    def config(self) -> AgentConfig:
        """Freeze the current settings into an AgentConfig."""
        return AgentConfig(
            preamble=self._preamble,
            tools=tuple(self._tools),
            max_tool_iterations=self._max_tool_iterations,
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            max_workers=self._max_workers,
            on_tool_result=self._on_tool_result,
        )

    def build(self) -> Agent:
        """Build the agent.

        Raises:
            AgentConfigError: On invalid settings.
            DuplicateToolNameError: If two tools share a name.
        """
        from toolagent.agent.loop import Agent

        return Agent(self._client, self.config())
