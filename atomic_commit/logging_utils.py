"""
Logging helpers for atomic-commit.

We only provide simple configuration based on a verbosity level. HTTP
client chatter from the model SDK is kept quiet unless explicitly
asked for.
"""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("openai", "httpx", "httpcore")


def configure_logging(verbosity: int) -> None:
    """
    Configure the root logger based on a verbosity count.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity == 2 -> DEBUG for atomic-commit, WARNING for HTTP clients
    verbosity >= 3 -> DEBUG everywhere
    """

    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    third_party_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
