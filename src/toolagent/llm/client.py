"""Built-in OpenAI-compatible httpx client with tenacity retry.

Provides a sync HTTP client for OpenAI-compatible chat completion APIs
(DeepSeek by default). Implements the CompletionClient protocol: blocking
``complete()`` for the agent loop and lazy ``stream()`` for token streaming.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

import httpx
import tenacity

from toolagent.llm.config import ClientConfig
from toolagent.llm.errors import (
    LLMAuthError,
    LLMRateLimitError,
    LLMResponseError,
    LLMStreamError,
)
from toolagent.models.conversation import AssistantTurn, Conversation, ToolCall

if TYPE_CHECKING:
    from toolagent.agent.config import AgentBuilder
    from toolagent.toolkit.models import ToolDefinition

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_AUTH_ERROR_STATUS_CODES = {401, 403}
_STREAM_DONE = "[DONE]"


def _is_retryable(exc: BaseException) -> bool:
    """Check if an exception is retryable.

    Retryable: 429, 500, 502, 503, 504, connection errors.
    Not retryable: 401, 403, 400, other client errors.
    """
    if isinstance(exc, LLMAuthError):
        return False
    if isinstance(exc, LLMRateLimitError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _RETRYABLE_STATUS_CODES
    return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout))


def _raise_for_status(response: httpx.Response) -> None:
    """Map error statuses onto the LLM error hierarchy.

    The body must already be read (call ``response.read()`` on streams).
    """
    if response.status_code in _AUTH_ERROR_STATUS_CODES:
        raise LLMAuthError(
            f"Authentication failed: HTTP {response.status_code} - "
            f"{response.text}",
            status_code=response.status_code,
        )

    if response.status_code == 429:
        retry_after_raw = response.headers.get("Retry-After")
        retry_after: float | None = None
        if retry_after_raw is not None:
            try:
                retry_after = float(retry_after_raw)
            except (ValueError, TypeError):
                pass
        raise LLMRateLimitError(
            f"Rate limited: HTTP 429 - {response.text}",
            retry_after=retry_after,
        )

    response.raise_for_status()


def _parse_stream_line(line: str) -> str | None:
    """Decode one server-sent-event line.

    Returns the content delta (possibly empty), ``_STREAM_DONE`` at end of
    stream, or None for lines that carry no data.

    Raises:
        LLMStreamError: On an error payload or malformed JSON.
    """
    line = line.strip()
    if not line or line.startswith(":") or not line.startswith("data:"):
        return None
    data = line[len("data:"):].strip()
    if data == _STREAM_DONE:
        return _STREAM_DONE
    try:
        event = json.loads(data)
    except json.JSONDecodeError as exc:
        raise LLMStreamError(f"Malformed stream chunk: {data[:200]}") from exc

    if "error" in event:
        err = event["error"]
        msg = err.get("message", str(err)) if isinstance(err, dict) else str(err)
        raise LLMStreamError(f"Provider stream error: {msg}")

    choices = event.get("choices") or []
    if not choices:
        return ""
    delta = choices[0].get("delta") or {}
    return delta.get("content") or ""


class OpenAIClient:
    """Sync httpx client for OpenAI-compatible chat completions.

    Implements the CompletionClient protocol. Supports retry with
    exponential backoff for transient errors (429, 5xx). Fails immediately
    on authentication errors (401, 403).

    Usage::

        with OpenAIClient(ClientConfig.from_env()) as client:
            agent = client.agent().preamble("Be brief.").build()
            print(agent.prompt("Hello"))
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Connection settings.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``
                in tests).
        """
        self._config = config
        self._client = httpx.Client(
            timeout=config.timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {config.api_key}",
            },
        )

    @classmethod
    def from_env(cls, prefix: str = "DEEPSEEK") -> OpenAIClient:
        """Shortcut for ``OpenAIClient(ClientConfig.from_env(prefix))``."""
        return cls(ClientConfig.from_env(prefix))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def default_model(self) -> str:
        return self._config.default_model

    @property
    def _completions_url(self) -> str:
        return f"{self._config.base_url}/chat/completions"

    # ------------------------------------------------------------------
    # Raw chat
    # ------------------------------------------------------------------

    def chat(
        self,
        messages: list[dict],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send chat completion request with retry.

        Uses tenacity.Retrying programmatically (not as decorator) so that
        max_retries is configurable per-instance.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            model: Model to use. Falls back to the configured default.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional payload parameters forwarded to the API
                (``tools``, ``tool_choice``, ...).

        Returns:
            Full response dict with 'choices', 'usage', 'model', etc.

        Raises:
            LLMAuthError: On 401/403 (no retry).
            LLMRateLimitError: On 429 after all retries exhausted.
            LLMResponseError: On unexpected response format.
            httpx.HTTPStatusError: On other non-retryable HTTP errors.
        """
        retryer = tenacity.Retrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=(
                tenacity.wait_exponential(multiplier=1, min=1, max=30)
                + tenacity.wait_random(0, 2)
            ),
            stop=tenacity.stop_after_attempt(self._config.max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retryer(
            self._do_chat,
            messages,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    def _build_payload(
        self,
        messages: list[dict],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model or self._config.default_model,
            "messages": messages,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        payload.update(kwargs)
        return payload

    def _do_chat(
        self,
        messages: list[dict],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Execute a single chat completion request (no retry)."""
        payload = self._build_payload(
            messages,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )
        logger.debug(
            "POST %s model=%s messages=%d tools=%d",
            self._completions_url,
            payload["model"],
            len(messages),
            len(payload.get("tools", ())),
        )
        response = self._client.post(self._completions_url, json=payload)
        _raise_for_status(response)

        data = response.json()
        if "choices" not in data:
            raise LLMResponseError(
                f"Unexpected response format: missing 'choices' key. "
                f"Response: {data}"
            )
        usage = self.extract_usage(data)
        if usage:
            logger.debug(
                "Usage model=%s prompt=%s completion=%s total=%s",
                data.get("model", payload["model"]),
                usage.get("prompt_tokens"),
                usage.get("completion_tokens"),
                usage.get("total_tokens"),
            )
        return data

    # ------------------------------------------------------------------
    # CompletionClient protocol
    # ------------------------------------------------------------------

    def complete(
        self,
        conversation: Conversation,
        tool_definitions: Sequence[ToolDefinition] = (),
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> AssistantTurn:
        """Send the conversation with tool definitions and parse the reply.

        Args:
            conversation: Full conversation history.
            tool_definitions: Tools the model may call. Omitted from the
                request when empty.
            model: Model override.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.

        Returns:
            The assistant turn from the first choice.
        """
        kwargs: dict[str, Any] = {}
        if tool_definitions:
            kwargs["tools"] = [d.to_openai() for d in tool_definitions]
            kwargs["tool_choice"] = "auto"
        response = self.chat(
            conversation.to_messages(),
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )
        return self.parse_assistant_turn(response)

    def stream(
        self,
        prompt: str,
        *,
        model: str | None = None,
        preamble: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Iterator[str]:
        """Stream the reply to a single prompt as text chunks.

        The request is sent on the first ``next()``. Breaking out of the
        loop (or calling ``close()`` on the iterator) closes the HTTP
        response.

        Raises:
            LLMAuthError, LLMRateLimitError, httpx.HTTPStatusError: If the
                provider rejects the request.
            LLMStreamError: On an error event or malformed chunk.
        """
        messages: list[dict] = []
        if preamble:
            messages.append({"role": "system", "content": preamble})
        messages.append({"role": "user", "content": prompt})
        payload = self._build_payload(
            messages,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            stream=True,
        )
        return self._iter_stream(payload)

    def _iter_stream(self, payload: dict[str, Any]) -> Iterator[str]:
        with self._client.stream("POST", self._completions_url, json=payload) as response:
            if response.status_code >= 400:
                response.read()
                _raise_for_status(response)
            for line in response.iter_lines():
                chunk = _parse_stream_line(line)
                if chunk is None or chunk == "":
                    continue
                if chunk == _STREAM_DONE:
                    return
                yield chunk

    def agent(self, model: str | None = None) -> AgentBuilder:
        """Start building an agent bound to this client.

        Usage::

            agent = client.agent(DEEPSEEK_CHAT).preamble("...").tool(Calculator()).build()
        """
        from toolagent.agent.config import AgentBuilder

        return AgentBuilder(self, model=model)

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> OpenAIClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    @staticmethod
    def extract_content(response: dict) -> str:
        """Extract the assistant's message content from a response dict.

        Raises:
            LLMResponseError: If the response format is unexpected.
        """
        try:
            return response["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise LLMResponseError(
                f"Cannot extract content from response: {exc}. "
                f"Response: {response}"
            ) from exc

    @staticmethod
    def extract_usage(response: dict) -> dict | None:
        """Return the usage dict (prompt/completion/total tokens), if present."""
        return response.get("usage")

    @staticmethod
    def extract_reasoning(response: dict) -> str | None:
        """Extract reasoning text from a response dict.

        Checks, in order: a parsed ``reasoning`` field, ``reasoning_content``
        (deepseek-reasoner, o1/o3), then ``<think>`` tags in the content.
        """
        try:
            message = response["choices"][0]["message"]
        except (KeyError, IndexError, TypeError):
            return None

        reasoning = message.get("reasoning") or message.get("reasoning_content")
        if reasoning:
            return reasoning

        content = message.get("content", "") or ""
        think_match = re.search(r"<think>(.*?)</think>", content, re.DOTALL)
        if think_match:
            return think_match.group(1).strip()
        return None

    @classmethod
    def parse_assistant_turn(cls, response: dict) -> AssistantTurn:
        """Convert the first choice of a response into an AssistantTurn.

        Tool-call arguments are kept as the raw JSON string; the registry
        decodes and validates them.

        Raises:
            LLMResponseError: If the response has no usable message.
        """
        content = cls.extract_content(response)
        message = response["choices"][0]["message"]

        tool_calls: list[ToolCall] = []
        for raw in message.get("tool_calls") or []:
            func = raw.get("function") or {}
            tool_calls.append(
                ToolCall(
                    id=raw.get("id") or f"call_{uuid.uuid4().hex[:8]}",
                    name=func.get("name", ""),
                    raw_arguments=func.get("arguments", "{}"),
                )
            )

        return AssistantTurn(
            text=content,
            tool_calls=tuple(tool_calls),
            reasoning=cls.extract_reasoning(response),
        )
