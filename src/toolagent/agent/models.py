"""Agent run state and result models."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from toolagent.models.conversation import AssistantTurn, Conversation


class AgentState(str, enum.Enum):
    """States of a single prompt run.

    ``DONE`` and ``FAILED`` are terminal.
    """

    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AgentState.DONE, AgentState.FAILED)


@dataclass(frozen=True)
class AgentResult:
    """Final result of a successful agent run.

    Attributes:
        output: Text of the final assistant turn.
        state: Always ``AgentState.DONE`` for a returned result.
        iterations: Number of tool-execution rounds performed.
        conversation: Full conversation, ending with the final reply.
    """

    output: str
    state: AgentState
    iterations: int
    conversation: Conversation

    @property
    def tool_calls_total(self) -> int:
        """Number of tool calls the model made during the run."""
        return sum(
            len(turn.tool_calls)
            for turn in self.conversation
            if isinstance(turn, AssistantTurn)
        )
