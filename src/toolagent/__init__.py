"""toolagent: a tool-calling agent loop for chat-completion providers.

Register tools, send a prompt, and let the model call them until it has
an answer. Ships an OpenAI-compatible client (DeepSeek by default) and two
sample tools.
"""

from toolagent._version import __version__

# Agent loop
from toolagent.agent import (
    Agent,
    AgentBuilder,
    AgentConfig,
    AgentResult,
    AgentState,
)

# Conversation models
from toolagent.models.conversation import (
    AssistantTurn,
    Conversation,
    ConversationTurn,
    SystemTurn,
    ToolCall,
    ToolResult,
    ToolResultsTurn,
    UserTurn,
)

# Agent toolkit
from toolagent.toolkit import BaseTool, Tool, ToolDefinition, ToolExecutor, ToolRegistry

# Sample tools
from toolagent.tools import Calculator, WeatherLookup, evaluate_expression

# LLM client
from toolagent.llm import (
    DEEPSEEK_CHAT,
    DEEPSEEK_REASONER,
    ClientConfig,
    CompletionClient,
    OpenAIClient,
)

# Exceptions
from toolagent.exceptions import (
    AgentConfigError,
    AgentError,
    ArgumentParseError,
    DuplicateToolNameError,
    EvaluationError,
    MaxIterationsExceededError,
    ToolAgentError,
    ToolError,
    UnknownToolError,
)

__all__ = [
    "__version__",
    # Agent loop
    "Agent",
    "AgentBuilder",
    "AgentConfig",
    "AgentResult",
    "AgentState",
    # Conversation models
    "AssistantTurn",
    "Conversation",
    "ConversationTurn",
    "SystemTurn",
    "ToolCall",
    "ToolResult",
    "ToolResultsTurn",
    "UserTurn",
    # Agent toolkit
    "BaseTool",
    "Tool",
    "ToolDefinition",
    "ToolExecutor",
    "ToolRegistry",
    # Sample tools
    "Calculator",
    "WeatherLookup",
    "evaluate_expression",
    # LLM client
    "ClientConfig",
    "CompletionClient",
    "OpenAIClient",
    "DEEPSEEK_CHAT",
    "DEEPSEEK_REASONER",
    # Exceptions
    "ToolAgentError",
    "DuplicateToolNameError",
    "ToolError",
    "UnknownToolError",
    "ArgumentParseError",
    "EvaluationError",
    "AgentError",
    "AgentConfigError",
    "MaxIterationsExceededError",
]
