"""Client configuration.

ClientConfig is built once by the caller and handed to the client, either
explicitly or via ``ClientConfig.from_env()``. Nothing in the library reads
the environment behind the caller's back.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from toolagent.llm.errors import LLMConfigError

DEEPSEEK_BASE_URL = "https://api.deepseek.com"
DEEPSEEK_CHAT = "deepseek-chat"
DEEPSEEK_REASONER = "deepseek-reasoner"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for an OpenAI-compatible provider.

    Attributes:
        api_key: Bearer token sent with every request.
        base_url: API root; ``/chat/completions`` is appended.
        default_model: Model used when a call does not name one.
        timeout: Request timeout in seconds.
        max_retries: Maximum attempts for retryable errors (429, 5xx,
            connection failures).
    """

    api_key: str
    base_url: str = DEEPSEEK_BASE_URL
    default_model: str = DEEPSEEK_CHAT
    timeout: float = 120.0
    max_retries: int = 3

    def __post_init__(self) -> None:
        if not self.api_key:
            raise LLMConfigError("ClientConfig requires a non-empty api_key.")
        if self.max_retries < 1:
            raise LLMConfigError(
                f"max_retries must be at least 1, got {self.max_retries}"
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(
        cls,
        prefix: str = "DEEPSEEK",
        *,
        environ: dict[str, str] | None = None,
    ) -> ClientConfig:
        """Build a config from ``{prefix}_API_KEY`` and friends.

        Reads ``{prefix}_API_KEY`` (required), ``{prefix}_BASE_URL``,
        ``{prefix}_MODEL``, ``{prefix}_TIMEOUT`` and ``{prefix}_MAX_RETRIES``.

        Args:
            prefix: Environment variable prefix.
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            LLMConfigError: If the API key is missing or a numeric value
                does not parse.
        """
        env = os.environ if environ is None else environ
        api_key = env.get(f"{prefix}_API_KEY", "")
        if not api_key:
            raise LLMConfigError(
                f"No API key found. Set the {prefix}_API_KEY environment variable."
            )
        try:
            timeout = float(env.get(f"{prefix}_TIMEOUT", "120"))
            max_retries = int(env.get(f"{prefix}_MAX_RETRIES", "3"))
        except ValueError as exc:
            raise LLMConfigError(f"Invalid {prefix} client setting: {exc}") from exc
        return cls(
            api_key=api_key,
            base_url=env.get(f"{prefix}_BASE_URL", DEEPSEEK_BASE_URL),
            default_model=env.get(f"{prefix}_MODEL", DEEPSEEK_CHAT),
            timeout=timeout,
            max_retries=max_retries,
        )
