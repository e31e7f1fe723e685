"""CompletionClient protocol.

Defines the boundary the agent loop talks to. The built-in OpenAIClient
implements it; tests substitute in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol, runtime_checkable

from toolagent.models.conversation import AssistantTurn, Conversation
from toolagent.toolkit.models import ToolDefinition


@runtime_checkable
class CompletionClient(Protocol):
    """Protocol for pluggable completion clients.

    Any object with ``complete()`` and ``stream()`` matching these
    signatures works.
    """

    def complete(
        self,
        conversation: Conversation,
        tool_definitions: Sequence[ToolDefinition] = (),
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> AssistantTurn:
        """Send the conversation and tool definitions, return the reply.

        Transport and provider failures are raised, not returned.
        """
        ...

    def stream(
        self,
        prompt: str,
        *,
        model: str | None = None,
        preamble: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Iterator[str]:
        """Lazily yield text chunks for a single prompt.

        The iterator is finite and not restartable. Errors are raised
        from ``next()``; chunks already yielded stay delivered.
        """
        ...
