"""
OpenAI-compatible text generation backend for atomic-commit.

The same client serves OpenAI, OpenRouter and a local Ollama server,
since all three expose the chat completions API; only the base URL and
the API key differ.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import openai

from ..errors import GenerationError
from ..retry import retry_with_backoff
from .interface import TextGenerator

LOG = logging.getLogger(__name__)

# Errors worth another attempt; anything else (bad key, bad request) is final.
RETRYABLE_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class OpenAIGenerator(TextGenerator):
    """
    Text generator backed by the chat completions API.

    Replies are requested in JSON mode. Transient transport errors are
    retried with a fixed delay; the SDK's own retries are disabled so
    the attempt count is ours alone.
    """

    def __init__(
        self,
        model: str,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[Any] = None,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.model = model
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep
        if client is None:
            options: Dict[str, Any] = {"api_key": api_key, "base_url": base_url, "max_retries": 0}
            if timeout is not None:
                options["timeout"] = timeout
            client = openai.OpenAI(**options)
        self._client = client

    def generate(self, transcript: List[Dict[str, str]]) -> str:
        LOG.debug("Requesting completion from %s with %d messages", self.model, len(transcript))

        def _request() -> Any:
            return self._client.chat.completions.create(
                model=self.model,
                messages=transcript,
                response_format={"type": "json_object"},
            )

        try:
            response = retry_with_backoff(
                _request,
                attempts=self.max_attempts,
                delay=self.retry_delay,
                retry_on=RETRYABLE_ERRORS,
                sleep=self._sleep,
            )
        except openai.OpenAIError as exc:
            raise GenerationError(f"failed to generate commit plan: {exc}") from exc

        return self._extract_content(response)

    @staticmethod
    def _extract_content(response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise GenerationError("model returned no choices")

        text = choices[0].message.content
        if not text or not text.strip():
            raise GenerationError("model returned empty content")
        return text
