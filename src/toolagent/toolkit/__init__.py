"""Agent toolkit: the tool contract, definitions, registry and executor.

Exposes tools as function-calling schemas for LLM agents and dispatches
the calls the model makes back to them.
"""

from toolagent.toolkit.base import BaseTool, Tool, schema_from_model
from toolagent.toolkit.executor import ToolExecutor
from toolagent.toolkit.models import ToolDefinition
from toolagent.toolkit.registry import ToolRegistry

__all__ = [
    "BaseTool",
    "Tool",
    "ToolDefinition",
    "ToolExecutor",
    "ToolRegistry",
    "schema_from_model",
]
