"""
Core domain models for atomic-commit.

These dataclasses describe the planning conversation, the commit plan
returned by the language model, and the outcome of applying it. They
intentionally avoid any direct git or AI dependencies so they can be
reused by different parts of the system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str


class Conversation:
    """
    Ordered, append-only sequence of role-tagged messages.

    The workflow owns the conversation for the duration of a run and
    hands the full transcript to the text generation backend on every
    drafting round.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def add(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def to_transcript(self) -> List[Dict[str, str]]:
        """
        Return the conversation as a list of {"role", "content"} dicts.
        """

        return [{"role": m.role.value, "content": m.content} for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)


@dataclass(frozen=True)
class Action:
    """
    One proposed unit of work: a patch to stage and the message to commit it with.

    file_path is informational only; the patch body decides which files
    are touched.
    """

    file_path: str
    patch: str
    commit_message: str

    def normalized_patch(self) -> str:
        """
        Return the patch guaranteed to end with a newline.
        """

        if self.patch.endswith("\n"):
            return self.patch
        return self.patch + "\n"


@dataclass(frozen=True)
class CommitPlan:
    """
    An ordered sequence of actions proposed in one negotiation round.
    """

    actions: List[Action] = field(default_factory=list)

    def commit_messages(self) -> List[str]:
        return [action.commit_message for action in self.actions]

    def __len__(self) -> int:
        return len(self.actions)


@dataclass(frozen=True)
class ActionFailure:
    """
    A per-action error recorded by the plan executor.

    ordinal is the 1-based position of the action within the plan.
    """

    ordinal: int
    stage: Literal["apply", "commit"]
    commit_message: str
    detail: str

    def __str__(self) -> str:
        verb = "apply patch" if self.stage == "apply" else "commit changes"
        return f"failed to {verb} {self.ordinal}: {self.detail}"


@dataclass(frozen=True)
class ActionConfirmation:
    ordinal: int
    commit_message: str


@dataclass
class ExecutionReport:
    """
    Aggregated outcome of applying a plan.

    Failures never roll back earlier confirmations; partial application
    is reported, not undone.
    """

    total: int
    confirmations: List[ActionConfirmation] = field(default_factory=list)
    failures: List[ActionFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.confirmations)

    @property
    def ok(self) -> bool:
        return not self.failures
