"""Conversation data model for the agent loop.

Provides ToolCall, ToolResult, the four conversation turn types and the
append-only Conversation that the agent loop sends to the model.

Turns render themselves as OpenAI-style chat messages via ``to_messages()``.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Literal, Union


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model.

    Attributes:
        id: Provider-assigned correlation token.
        name: Name of the requested tool.
        raw_arguments: Arguments as sent by the provider. Usually the raw
            JSON string from the wire; may already be a dict.
    """

    id: str
    name: str
    raw_arguments: Any = field(default_factory=dict)

    def arguments_json(self) -> str:
        """Return the arguments as a JSON string for the wire."""
        if isinstance(self.raw_arguments, str):
            return self.raw_arguments
        return json.dumps(self.raw_arguments, ensure_ascii=False)

    def to_openai(self) -> dict:
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": self.arguments_json(),
            },
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of executing one ToolCall.

    Either a success carrying ``output`` or a failure carrying an
    ``error`` summary. Correlated to its call by ``call_id``, never by
    position.
    """

    call_id: str
    tool_name: str
    success: bool
    output: str = ""
    error: str = ""

    @classmethod
    def ok(cls, call_id: str, tool_name: str, output: str) -> ToolResult:
        return cls(call_id=call_id, tool_name=tool_name, success=True, output=output)

    @classmethod
    def fail(cls, call_id: str, tool_name: str, error: str) -> ToolResult:
        return cls(call_id=call_id, tool_name=tool_name, success=False, error=error)

    @property
    def content(self) -> str:
        """Text shown to the model for this result."""
        if self.success:
            return self.output
        return f"Error: {self.error}"


# ---------------------------------------------------------------------------
# Turns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SystemTurn:
    """The agent preamble."""

    text: str
    role: Literal["system"] = field(default="system", init=False)

    def to_messages(self) -> list[dict]:
        return [{"role": "system", "content": self.text}]


@dataclass(frozen=True)
class UserTurn:
    """A user prompt."""

    text: str
    role: Literal["user"] = field(default="user", init=False)

    def to_messages(self) -> list[dict]:
        return [{"role": "user", "content": self.text}]


@dataclass(frozen=True)
class AssistantTurn:
    """A model reply: text plus any tool calls it requested.

    ``reasoning`` holds reasoning-model output (e.g. deepseek-reasoner's
    ``reasoning_content``). It is kept for callers but never sent back to
    the provider.
    """

    text: str = ""
    tool_calls: tuple[ToolCall, ...] = ()
    reasoning: str | None = None
    role: Literal["assistant"] = field(default="assistant", init=False)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    def to_messages(self) -> list[dict]:
        message: dict[str, Any] = {"role": "assistant", "content": self.text}
        if self.tool_calls:
            message["tool_calls"] = [tc.to_openai() for tc in self.tool_calls]
        return [message]


@dataclass(frozen=True)
class ToolResultsTurn:
    """Results for every tool call of the preceding assistant turn.

    Renders as one ``tool`` message per result, each tagged with the
    ``tool_call_id`` it answers.
    """

    results: tuple[ToolResult, ...] = ()
    role: Literal["tool"] = field(default="tool", init=False)

    def to_messages(self) -> list[dict]:
        return [
            {
                "role": "tool",
                "tool_call_id": result.call_id,
                "content": result.content,
            }
            for result in self.results
        ]


ConversationTurn = Union[SystemTurn, UserTurn, AssistantTurn, ToolResultsTurn]


class Conversation:
    """Ordered, append-only sequence of turns for one prompt call."""

    def __init__(self, turns: list[ConversationTurn] | None = None) -> None:
        self._turns: list[ConversationTurn] = list(turns or [])

    @classmethod
    def start(cls, preamble: str, prompt: str) -> Conversation:
        """Create the initial [system, user] conversation.

        An empty preamble produces no system turn.
        """
        turns: list[ConversationTurn] = []
        if preamble:
            turns.append(SystemTurn(preamble))
        turns.append(UserTurn(prompt))
        return cls(turns)

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    @property
    def last(self) -> ConversationTurn | None:
        return self._turns[-1] if self._turns else None

    def to_messages(self) -> list[dict]:
        """Flatten every turn into OpenAI chat messages, in order."""
        messages: list[dict] = []
        for turn in self._turns:
            messages.extend(turn.to_messages())
        return messages

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __repr__(self) -> str:
        roles = ", ".join(turn.role for turn in self._turns)
        return f"Conversation([{roles}])"
