"""Shared test fixtures for toolagent.

Provides an in-memory completion client that replays scripted assistant
turns and records every request it receives, plus small sample tools.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator, Sequence

import pytest
from pydantic import BaseModel, Field

from toolagent.models.conversation import AssistantTurn, Conversation, ToolCall
from toolagent.toolkit.base import BaseTool
from toolagent.toolkit.models import ToolDefinition


class ScriptedClient:
    """A CompletionClient that returns canned assistant turns in sequence.

    Once the script runs out the last turn is repeated. Every request is
    recorded as a dict with ``messages``, ``tools`` and the call options.
    """

    def __init__(
        self,
        turns: Sequence[AssistantTurn] = (),
        *,
        chunks: Sequence[str] = (),
        stream_error: Exception | None = None,
    ) -> None:
        self._turns = list(turns) or [AssistantTurn(text="done")]
        self._chunks = list(chunks)
        self._stream_error = stream_error
        self.requests: list[dict] = []
        self.stream_requests: list[dict] = []

    def complete(
        self,
        conversation: Conversation,
        tool_definitions: Sequence[ToolDefinition] = (),
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> AssistantTurn:
        self.requests.append({
            "messages": conversation.to_messages(),
            "tools": list(tool_definitions),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        idx = min(len(self.requests) - 1, len(self._turns) - 1)
        return self._turns[idx]

    def stream(
        self,
        prompt: str,
        *,
        model: str | None = None,
        preamble: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Iterator[str]:
        self.stream_requests.append({"prompt": prompt, "model": model})
        yield from self._chunks
        if self._stream_error is not None:
            raise self._stream_error


def tool_turn(*calls: tuple[str, str, object], text: str = "") -> AssistantTurn:
    """Assistant turn requesting tools.

    Args:
        calls: (call_id, tool_name, raw_arguments) tuples.
    """
    return AssistantTurn(
        text=text,
        tool_calls=tuple(ToolCall(id=cid, name=name, raw_arguments=args) for cid, name, args in calls),
    )


def final_turn(text: str = "final answer") -> AssistantTurn:
    return AssistantTurn(text=text)


# ---------------------------------------------------------------------------
# Sample tools
# ---------------------------------------------------------------------------


class EchoArgs(BaseModel):
    text: str = Field(description="Text to echo")


class EchoTool(BaseTool):
    name = "echo"
    description = "Echo input"
    args_model = EchoArgs

    def call(self, args: EchoArgs) -> str:
        return f"echoed: {args.text}"


class SleepArgs(BaseModel):
    seconds: float = Field(description="How long to sleep")
    label: str = Field(description="Value to return")


class SleepTool(BaseTool):
    """Sleeps, then returns its label. Tracks peak concurrency."""

    name = "sleep"
    description = "Sleep then return the label"
    args_model = SleepArgs

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active = 0
        self.max_active = 0
        self.finished: list[str] = []

    def call(self, args: SleepArgs) -> str:
        with self._lock:
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        time.sleep(args.seconds)
        with self._lock:
            self._active -= 1
            self.finished.append(args.label)
        return args.label


class BrokenTool(BaseTool):
    name = "broken"
    description = "Always raises"
    args_model = EchoArgs

    def call(self, args: EchoArgs) -> str:
        raise RuntimeError("tool broke")


@pytest.fixture
def echo_tool() -> EchoTool:
    return EchoTool()


@pytest.fixture
def sleep_tool() -> SleepTool:
    return SleepTool()


@pytest.fixture
def no_sleep(monkeypatch):
    """Make tenacity backoff instant."""
    monkeypatch.setattr("time.sleep", lambda seconds: None)
