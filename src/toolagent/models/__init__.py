"""Conversation models shared by the toolkit, the LLM client and the agent loop."""

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

__all__ = [
    "AssistantTurn",
    "Conversation",
    "ConversationTurn",
    "SystemTurn",
    "ToolCall",
    "ToolResult",
    "ToolResultsTurn",
    "UserTurn",
]
