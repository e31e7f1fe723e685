"""Provider-facing tool schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolDefinition:
    """Schema description of one tool, as sent with every model request.

    Attributes:
        name: Tool name, unique within a registry (e.g. "calculator").
        description: Tells the model what the tool does.
        parameters: JSON Schema object for the tool's arguments:
            ``{"type": "object", "properties": {...}, "required": [...]}``.
    """

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }

    def to_openai(self) -> dict:
        """Wrap as an entry of the chat-completions ``tools`` array."""
        return {"type": "function", "function": self.to_dict()}
