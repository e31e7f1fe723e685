"""Tool-calling agent: configuration, builder and the turn loop."""

from toolagent.agent.config import DEFAULT_MAX_TOOL_ITERATIONS, AgentBuilder, AgentConfig
from toolagent.agent.loop import Agent
from toolagent.agent.models import AgentResult, AgentState

__all__ = [
    "Agent",
    "AgentBuilder",
    "AgentConfig",
    "AgentResult",
    "AgentState",
    "DEFAULT_MAX_TOOL_ITERATIONS",
]
