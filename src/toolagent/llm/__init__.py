"""LLM client infrastructure for toolagent.

Provides an OpenAI-compatible HTTP client, the CompletionClient protocol,
explicit client configuration and the LLM error hierarchy.
"""

from toolagent.llm.client import OpenAIClient
from toolagent.llm.config import (
    DEEPSEEK_BASE_URL,
    DEEPSEEK_CHAT,
    DEEPSEEK_REASONER,
    ClientConfig,
)
from toolagent.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    LLMStreamError,
)
from toolagent.llm.protocols import CompletionClient

__all__ = [
    "OpenAIClient",
    "CompletionClient",
    "ClientConfig",
    "DEEPSEEK_BASE_URL",
    "DEEPSEEK_CHAT",
    "DEEPSEEK_REASONER",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
    "LLMStreamError",
]
