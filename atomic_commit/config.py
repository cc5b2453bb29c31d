"""
Configuration model for atomic-commit.

The CLI constructs a Config instance and passes it down into the core
workflow so behavior can be adjusted without relying on global state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import ConfigError
from .prompts import COMMIT_PLAN_PROMPT

PROVIDER_ENV = "ATOMIC_COMMIT_PROVIDER"
MODEL_ENV = "ATOMIC_COMMIT_MODEL"

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class Config:
    """
    Top-level configuration for an atomic-commit run.

    system_prompt is the instruction template sent as the first turn of
    every planning conversation.
    """

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    repo_path: Optional[str] = None
    dry_run: bool = False
    assume_yes: bool = False
    verbosity: int = 0
    command_timeout: Optional[float] = None
    max_attempts: int = 3
    retry_delay: float = 1.0
    system_prompt: str = field(default=COMMIT_PLAN_PROMPT, repr=False)

    def __post_init__(self) -> None:
        if not self.provider:
            raise ConfigError("provider must not be empty")
        if not self.model:
            raise ConfigError("model must not be empty")
        if self.max_attempts < 1:
            raise ConfigError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.retry_delay < 0:
            raise ConfigError(f"retry_delay must not be negative, got {self.retry_delay}")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ConfigError(
                f"command_timeout must be positive when set, got {self.command_timeout}"
            )
        if not self.system_prompt.strip():
            raise ConfigError("system_prompt must not be empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """
        Build a Config from environment defaults, then apply overrides.

        Overrides whose value is None are ignored so CLI flags that were
        not given fall back to the environment.
        """

        values: dict[str, Any] = {
            "provider": os.getenv(PROVIDER_ENV) or DEFAULT_PROVIDER,
            "model": os.getenv(MODEL_ENV) or DEFAULT_MODEL,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
