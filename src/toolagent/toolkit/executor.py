"""ToolExecutor: concurrent fan-out of one turn's tool calls.

Each call in an assistant turn is independent. ``execute_all()`` submits
one task per call to a thread pool, waits for every task, and returns
exactly one ToolResult per call.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from toolagent.models.conversation import ToolCall, ToolResult
    from toolagent.toolkit.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Dispatches a batch of tool calls through a registry.

    Usage::

        executor = ToolExecutor(registry, max_workers=4)
        results = executor.execute_all(turn.tool_calls)
        for result in results:
            print(result.call_id, result.content)
    """

    def __init__(self, registry: ToolRegistry, max_workers: int | None = None) -> None:
        self._registry = registry
        self._max_workers = max_workers

    def execute(self, call: ToolCall) -> ToolResult:
        """Execute a single tool call."""
        return self._registry.dispatch(call)

    def execute_all(self, calls: Sequence[ToolCall]) -> list[ToolResult]:
        """Execute all calls concurrently and wait for every result.

        Results are collected as they complete, then returned in the order
        of ``calls`` so that requests built from them are reproducible.
        Each result carries the ``call_id`` of the call it answers.

        Args:
            calls: Tool calls from one assistant turn.

        Returns:
            One ToolResult per call.
        """
        if not calls:
            return []
        if len(calls) == 1:
            return [self.execute(calls[0])]

        workers = self._max_workers or len(calls)
        results: list[ToolResult | None] = [None] * len(calls)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            future_to_index = {
                pool.submit(self.execute, call): index
                for index, call in enumerate(calls)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                results[index] = future.result()
                logger.debug(
                    "Tool call %s completed (%s)",
                    calls[index].id,
                    "ok" if results[index].success else "failed",
                )
        return [r for r in results if r is not None]
