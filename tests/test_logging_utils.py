import logging

import pytest

from atomic_commit.logging_utils import configure_logging


@pytest.fixture
def restore_http_loggers():
    names = ("openai", "httpx", "httpcore")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.mark.parametrize(
    "verbosity, expected",
    [
        (0, logging.WARNING),
        (2, logging.WARNING),
        (3, logging.DEBUG),
    ],
)
def test_http_client_loggers_stay_quiet_below_trace_verbosity(
    restore_http_loggers, verbosity, expected
):
    configure_logging(verbosity)
    assert logging.getLogger("openai").level == expected
    assert logging.getLogger("httpx").level == expected
