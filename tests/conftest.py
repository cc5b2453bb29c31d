import json
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import pytest

from atomic_commit.ai.interface import TextGenerator
from atomic_commit.git_adapter import ExecutionResult, GitGateway
from atomic_commit.review import Prompter

Handler = Union[ExecutionResult, Callable[[List[str], Optional[str]], ExecutionResult]]


def ok(stdout: str = "") -> ExecutionResult:
    return ExecutionResult(success=True, stdout=stdout, stderr="")


def failed(stderr: str = "", stdout: str = "") -> ExecutionResult:
    return ExecutionResult(success=False, stdout=stdout, stderr=stderr)


class FakeGateway(GitGateway):
    """
    Records every git invocation and answers from a table keyed by the
    first two arguments, e.g. "stash push" or "apply --cached".
    """

    def __init__(self, responses: Optional[Dict[str, Handler]] = None) -> None:
        super().__init__(repo_path=None)
        self.responses: Dict[str, Handler] = dict(responses or {})
        self.calls: List[tuple] = []

    def run(self, args, input_text=None):
        args = list(args)
        self.calls.append((args, input_text))
        handler = self.responses.get(" ".join(args[:2]))
        if callable(handler):
            return handler(args, input_text)
        if handler is not None:
            return handler
        if args[:1] == ["rev-parse"]:
            return ok("true\n")
        return ok()

    def commands(self) -> List[str]:
        return [" ".join(args[:2]) for args, _ in self.calls]

    def count(self, command: str) -> int:
        return self.commands().count(command)


class FakeGenerator(TextGenerator):
    """
    Returns scripted replies in order and keeps a copy of every transcript.
    """

    def __init__(self, replies: List[str]) -> None:
        self.replies = list(replies)
        self.transcripts: List[List[Dict[str, str]]] = []

    def generate(self, transcript):
        self.transcripts.append([dict(message) for message in transcript])
        return self.replies.pop(0)


class ScriptedPrompter(Prompter):
    def __init__(self, confirmations: List[bool], lines: Optional[List[str]] = None) -> None:
        self.confirmations = list(confirmations)
        self.lines = list(lines or [])
        self.asked: List[str] = []

    def confirm(self, prompt, default):
        self.asked.append(prompt)
        return self.confirmations.pop(0)

    def read_line(self, prompt):
        self.asked.append(prompt)
        return self.lines.pop(0)


def plan_json(*actions) -> str:
    """
    Build a commitPlan payload from (file_path, patch, message) tuples.
    """

    return json.dumps(
        {
            "commitPlan": [
                {"filePath": path, "patch": patch, "commitMessage": message}
                for path, patch, message in actions
            ]
        }
    )


def run_git(args, cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        text=True,
        capture_output=True,
        check=True,
    )


def _git_version() -> tuple:
    output = subprocess.run(
        ["git", "--version"], text=True, capture_output=True, check=True
    ).stdout
    numbers = output.split()[2].split(".")
    return tuple(int(part) for part in numbers[:2] if part.isdigit())


def _git_supported() -> bool:
    if shutil.which("git") is None:
        return False
    # `git stash show --include-untracked` needs git 2.32.
    return _git_version() >= (2, 32)


requires_git = pytest.mark.skipif(not _git_supported(), reason="git >= 2.32 is required")


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """
    A repository with one commit containing app.py and README.md.
    """

    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(["init", "--quiet"], cwd=repo)
    run_git(["config", "user.name", "atomic-commit"], cwd=repo)
    run_git(["config", "user.email", "atomic-commit@example.com"], cwd=repo)
    run_git(["config", "commit.gpgsign", "false"], cwd=repo)

    (repo / "app.py").write_text(
        "def greet():\n"
        "    return 'hello'\n"
        "\n"
        "\n"
        "def farewell():\n"
        "    return 'bye'\n"
    )
    (repo / "README.md").write_text("# demo\n")
    run_git(["add", "app.py", "README.md"], cwd=repo)
    run_git(["commit", "--quiet", "-m", "base"], cwd=repo)
    return repo
