"""Core agent loop.

Provides the Agent class that runs a tool-calling loop: send the
conversation and tool definitions to the model, execute any tool calls
it makes, fold the results back into the conversation, and repeat until
the model answers without calling tools or the iteration bound is hit.

Each ``prompt()`` call owns a fresh conversation; nothing carries over
between calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toolagent.agent.config import AgentConfig
from toolagent.agent.models import AgentResult, AgentState
from toolagent.exceptions import MaxIterationsExceededError
from toolagent.models.conversation import Conversation, ToolResultsTurn
from toolagent.toolkit.executor import ToolExecutor
from toolagent.toolkit.registry import ToolRegistry

if TYPE_CHECKING:
    from toolagent.llm.protocols import CompletionClient
    from toolagent.models.conversation import AssistantTurn, ToolResult
    from toolagent.toolkit.models import ToolDefinition

logger = logging.getLogger(__name__)


class Agent:
    """A preamble, a set of tools and a completion client.

    Usage::

        agent = Agent(client, AgentConfig(preamble="...", tools=(Calculator(),)))
        answer = agent.prompt("请计算 123 + 456 的结果")

    Run states: ``AWAITING_MODEL`` -> (tool calls) -> ``EXECUTING_TOOLS``
    -> ``AWAITING_MODEL`` -> ... -> ``DONE``, or ``FAILED``. Transport
    errors from the client propagate unchanged. Tool failures do not
    abort the run; the model sees them as error results.
    """

    def __init__(self, client: CompletionClient, config: AgentConfig | None = None) -> None:
        self._client = client
        self._config = config or AgentConfig()
        self._registry = ToolRegistry(self._config.tools)
        self._executor = ToolExecutor(self._registry, max_workers=self._config.max_workers)
        self._state: AgentState | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> AgentState | None:
        """State of the most recent run (None before the first prompt).

        Shared by every ``prompt()`` call on this agent, so concurrent runs
        overwrite each other's value. Use ``AgentResult.state`` or the
        raised error to learn how a particular run ended.
        """
        return self._state

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def prompt(self, text: str) -> str:
        """Run the loop for one user prompt and return the final answer.

        Raises:
            MaxIterationsExceededError: If the model is still calling tools
                after ``max_tool_iterations`` rounds.
            LLMClientError: (or httpx errors) from the completion client.
        """
        return self.run(text).output

    def run(self, text: str) -> AgentResult:
        """Run the loop for one user prompt.

        1. Start a conversation: [system(preamble), user(text)]
        2. Send conversation + tool definitions to the model
        3. No tool calls: done, return the reply text
        4. Otherwise execute every call concurrently, append one
           tool-results turn, count the round
        5. Fail once the round count reaches ``max_tool_iterations``,
           else go to 2

        Returns:
            AgentResult with the final text and the full conversation.
        """
        conversation = Conversation.start(self._config.preamble, text)
        self._state = AgentState.AWAITING_MODEL
        iterations = 0

        while True:
            try:
                reply = self._call_model(conversation, self._registry.definitions())
            except Exception:
                self._state = AgentState.FAILED
                raise
            conversation.append(reply)

            if not reply.has_tool_calls:
                self._state = AgentState.DONE
                logger.info("Agent finished after %d tool iteration(s)", iterations)
                return AgentResult(
                    output=reply.text,
                    state=self._state,
                    iterations=iterations,
                    conversation=conversation,
                )

            self._state = AgentState.EXECUTING_TOOLS
            results = self._execute_tools(reply)
            conversation.append(ToolResultsTurn(tuple(results)))
            iterations += 1

            if iterations >= self._config.max_tool_iterations:
                self._state = AgentState.FAILED
                logger.warning(
                    "Agent hit max tool iterations (%d)",
                    self._config.max_tool_iterations,
                )
                raise MaxIterationsExceededError(iterations, conversation)
            self._state = AgentState.AWAITING_MODEL

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _call_model(
        self,
        conversation: Conversation,
        definitions: list[ToolDefinition],
    ) -> AssistantTurn:
        return self._client.complete(
            conversation,
            definitions,
            model=self._config.model,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

    def _execute_tools(self, reply: AssistantTurn) -> list[ToolResult]:
        """Dispatch every tool call of ``reply`` and wait for all results."""
        logger.info(
            "Executing %d tool call(s): %s",
            len(reply.tool_calls),
            ", ".join(tc.name for tc in reply.tool_calls),
        )
        results = self._executor.execute_all(reply.tool_calls)
        if self._config.on_tool_result is not None:
            for result in results:
                try:
                    self._config.on_tool_result(result)
                except Exception:
                    logger.debug("on_tool_result callback error", exc_info=True)
        return results
