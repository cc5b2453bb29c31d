"""
User-facing review prompts for atomic-commit.

The negotiator only needs two capabilities from the console: a yes/no
answer and a line of free text. Keeping them behind a small interface
lets tests script the developer's answers.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from .errors import WorkflowCancelled

LOG = logging.getLogger(__name__)

_YES = {"y", "yes"}
_NO = {"n", "no"}


class Prompter(ABC):
    """
    Abstract interface for interactive questions.
    """

    @abstractmethod
    def confirm(self, prompt: str, default: bool) -> bool:
        """
        Ask a yes/no question; an empty answer selects default.
        """

    @abstractmethod
    def read_line(self, prompt: str) -> str:
        """
        Ask for a single line of free text.
        """


class ConsolePrompter(Prompter):
    """
    Prompter reading answers from a text stream, stdin by default.

    With assume_yes every confirmation is accepted without asking, which
    suits non-interactive runs. End of input raises WorkflowCancelled.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        assume_yes: bool = False,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self.assume_yes = assume_yes

    def confirm(self, prompt: str, default: bool) -> bool:
        if self.assume_yes:
            LOG.info("%s yes (assumed)", prompt)
            return True

        suffix = "[Y/n]" if default else "[y/N]"
        while True:
            answer = self._ask(f"{prompt} {suffix} ").strip().lower()
            if not answer:
                return default
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            self._stdout.write("Please answer 'y' or 'n'.\n")

    def read_line(self, prompt: str) -> str:
        return self._ask(prompt).strip()

    def _ask(self, prompt: str) -> str:
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            raise WorkflowCancelled("input closed while waiting for an answer")
        return line.rstrip("\n")
