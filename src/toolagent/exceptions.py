"""toolagent exception hierarchy.

All toolagent-specific exceptions inherit from ToolAgentError.

Two families matter to the agent loop:

- ``ToolError`` subclasses describe a single failed tool invocation. They
  never escape the loop; the registry turns them into failure ToolResults
  that are shown to the model.
- ``AgentError`` subclasses abort a whole ``Agent.prompt()`` call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolagent.models.conversation import Conversation


class ToolAgentError(Exception):
    """Base exception for all toolagent errors."""


class DuplicateToolNameError(ToolAgentError):
    """Raised when registering a tool whose name is already taken."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool already registered: {tool_name}")


# ---------------------------------------------------------------------------
# Tool-level failures (reported back to the model, not raised to callers)
# ---------------------------------------------------------------------------


class ToolError(ToolAgentError):
    """Base exception for a failed tool invocation."""


class UnknownToolError(ToolError):
    """Raised when a tool call names a tool that is not registered."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ArgumentParseError(ToolError):
    """Raised when tool-call arguments do not match the tool's argument model."""

    def __init__(self, tool_name: str, detail: str) -> None:
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")


class EvaluationError(ToolError):
    """Raised when an arithmetic expression cannot be evaluated."""

    def __init__(self, expression: str, reason: str = "") -> None:
        self.expression = expression
        self.reason = reason
        msg = f"Cannot evaluate expression {expression!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Orchestrator-level failures (abort the prompt call)
# ---------------------------------------------------------------------------


class AgentError(ToolAgentError):
    """Base exception for errors that abort an agent run."""


class AgentConfigError(AgentError):
    """Raised when an agent is built with invalid settings."""


class MaxIterationsExceededError(AgentError):
    """Raised when the model keeps requesting tools past the iteration bound.

    Attributes:
        iterations: Number of tool-execution rounds completed.
        conversation: The conversation as it stood when the bound was hit.
    """

    def __init__(
        self, iterations: int, conversation: Conversation | None = None
    ) -> None:
        self.iterations = iterations
        self.conversation = conversation
        super().__init__(
            f"Agent exceeded max tool iterations ({iterations}) "
            f"without producing a final answer"
        )
