"""
Selection of the text generation provider for a run.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from ..config import Config
from ..errors import ConfigError
from .interface import TextGenerator
from .openai_client import OpenAIGenerator

OPENAI = "openai"
OPENROUTER = "openrouter"
OLLAMA = "ollama"
ANTHROPIC = "anthropic"

SUPPORTED_PROVIDERS = (OPENAI, OPENROUTER, OLLAMA)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"


def _require_env(name: str, provider: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigError(f"{name} must be set to use the {provider} provider")
    return value


def _ollama_base_url() -> str:
    host = os.getenv("OLLAMA_HOST") or DEFAULT_OLLAMA_HOST
    if not host.startswith(("http://", "https://")):
        host = f"http://{host}"
    return f"{host.rstrip('/')}/v1"


def load_generator(config: Config, client: Optional[Any] = None) -> TextGenerator:
    """
    Build the text generator named by config.provider.

    client replaces the underlying SDK client, which tests use to avoid
    network access.
    """

    provider = config.provider.lower()
    options = {
        "client": client,
        "max_attempts": config.max_attempts,
        "retry_delay": config.retry_delay,
    }

    if provider == OPENAI:
        api_key = None if client is not None else _require_env("OPENAI_API_KEY", provider)
        return OpenAIGenerator(config.model, api_key=api_key, **options)

    if provider == OPENROUTER:
        api_key = None if client is not None else _require_env("OPENROUTER_API_KEY", provider)
        return OpenAIGenerator(
            config.model,
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            **options,
        )

    if provider == OLLAMA:
        # Ollama ignores the key, but the SDK refuses to start without one.
        return OpenAIGenerator(
            config.model,
            api_key="ollama",
            base_url=_ollama_base_url(),
            **options,
        )

    if provider == ANTHROPIC:
        raise ConfigError("the anthropic provider is not implemented")

    raise ConfigError(
        f"unknown provider: {config.provider} (choose from {', '.join(SUPPORTED_PROVIDERS)})"
    )
