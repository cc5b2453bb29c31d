"""
Command execution and git integration for atomic-commit.

Every external program the workflow runs goes through execute(), which
captures output and reports failure as data instead of raising. The
layers above decide what a failed command means for the workflow.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .errors import NotAGitRepositoryError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of a single external command invocation.
    """

    success: bool
    stdout: str
    stderr: str

    @property
    def error_text(self) -> str:
        """
        Return the most useful failure description: stderr, else stdout.
        """

        return self.stderr.strip() or self.stdout.strip()


def execute(
    program: str,
    args: Sequence[str],
    input_text: Optional[str] = None,
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ExecutionResult:
    """
    Run an external program and return its captured result.

    A non-zero exit status, a program that cannot be launched and a
    timeout are all reported as an unsuccessful ExecutionResult.
    """

    cmd = [program, *args]
    LOG.debug("Running command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
            input=input_text,
            timeout=timeout,
            env=dict(env) if env is not None else None,
        )
    except subprocess.TimeoutExpired:
        LOG.debug("Command timed out after %ss: %s", timeout, " ".join(cmd))
        return ExecutionResult(
            success=False,
            stdout="",
            stderr=f"{program} timed out after {timeout} seconds",
        )
    except OSError as exc:
        LOG.debug("Failed to launch %s: %s", program, exc)
        return ExecutionResult(
            success=False,
            stdout="",
            stderr=f"failed to execute {program}: {exc}",
        )

    if completed.returncode != 0:
        LOG.debug("%s exited with %d: %s", program, completed.returncode, completed.stderr)

    return ExecutionResult(
        success=completed.returncode == 0,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


class GitGateway:
    """
    Runs git commands against a single repository directory.

    git runs with the C locale because some of its messages are matched
    verbatim.
    """

    def __init__(self, repo_path: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.repo_path = repo_path
        self.timeout = timeout

    def run(self, args: Sequence[str], input_text: Optional[str] = None) -> ExecutionResult:
        return execute(
            "git",
            args,
            input_text=input_text,
            cwd=self.repo_path,
            timeout=self.timeout,
            env={**os.environ, "LC_ALL": "C"},
        )


def ensure_git_repository(gateway: GitGateway) -> None:
    """
    Raise NotAGitRepositoryError unless the gateway points inside a work tree.
    """

    result = gateway.run(["rev-parse", "--is-inside-work-tree"])
    if not result.success or result.stdout.strip() != "true":
        detail = result.error_text or "git did not report a work tree"
        raise NotAGitRepositoryError(f"not a git repository: {detail}")


def apply_patch(gateway: GitGateway, patch: str, index_only: bool = True) -> ExecutionResult:
    """
    Apply a unified diff patch read from stdin with one path component stripped.

    When index_only is True, the patch is applied to the index without
    touching the working tree.
    """

    args = ["apply"]
    if index_only:
        args.append("--cached")
    args.extend(["-p1", "-"])
    return gateway.run(args, input_text=patch)


def create_commit(gateway: GitGateway, message: str) -> ExecutionResult:
    """
    Commit the current index with the given commit message.
    """

    return gateway.run(["commit", "--message", message])


def reset_index(gateway: GitGateway) -> ExecutionResult:
    """
    Unstage everything, leaving the working tree untouched.
    """

    return gateway.run(["reset", "--quiet"])
