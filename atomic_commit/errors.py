"""
Custom exception types used across atomic-commit.

Defining explicit error classes makes it easier for the CLI and higher
layers to distinguish between user-facing failures and unexpected bugs,
and to name the workflow phase that failed.
"""

from __future__ import annotations

from typing import Optional

from .domain import ExecutionReport


class AtomicCommitError(Exception):
    """Base class for all atomic-commit specific errors."""


class ConfigError(AtomicCommitError):
    """Raised when the run configuration is invalid or incomplete."""


class GitError(AtomicCommitError):
    """Raised when git operations fail."""


class NotAGitRepositoryError(GitError):
    """Raised when the working directory is not inside a git work tree."""


class SnapshotError(GitError):
    """Raised when pending changes cannot be captured into a snapshot."""


class RestoreError(SnapshotError):
    """
    Raised when captured changes cannot be replayed onto the working tree.

    The developer's uncommitted work is still held by the snapshot when
    this is raised, so it must not be released silently.
    """


class IndexResetError(SnapshotError):
    """
    Raised when captured changes were replayed onto the working tree but
    the index could not be reset afterwards, leaving them staged.
    """


class DiffUnavailableError(GitError):
    """Raised when the diff of an active snapshot cannot be rendered."""


class PlanFormatError(AtomicCommitError):
    """Raised when the text generation backend returns a malformed plan."""


class GenerationError(AtomicCommitError):
    """Raised when the text generation backend fails to produce a response."""


class WorkflowCancelled(AtomicCommitError):
    """
    Raised when the run is cancelled before it completes.

    When the cancellation interrupts plan execution, `report` holds the
    commits created and the failures recorded up to that point.
    """

    def __init__(self, message: str, report: Optional[ExecutionReport] = None) -> None:
        super().__init__(message)
        self.report = report
