"""
Fixed-backoff retry for flaky external calls.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

LOG = logging.getLogger(__name__)

T = TypeVar("T")


def retry_with_backoff(
    func: Callable[[], T],
    attempts: int,
    delay: float,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call func until it succeeds, at most `attempts` times.

    Waits `delay` seconds between attempts. Exceptions outside retry_on
    propagate immediately; after the last attempt the final error is
    re-raised.
    """

    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    for attempt in range(1, attempts + 1):
        try:
            return func()
        except retry_on as exc:
            if attempt == attempts:
                raise
            LOG.warning(
                "Attempt %d of %d failed (%s); retrying in %.1fs",
                attempt,
                attempts,
                exc,
                delay,
            )
            sleep(delay)

    raise AssertionError("unreachable")  # pragma: no cover
