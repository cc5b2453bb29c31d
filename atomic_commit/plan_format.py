"""
Parsing and rendering of the JSON commit plan exchanged with the model.

The payload must look like:

    {"commitPlan": [{"filePath": ..., "patch": ..., "commitMessage": ...}]}

Anything else is a contract violation by the backend and raises
PlanFormatError; the parser never guesses or repairs.
"""

from __future__ import annotations

import json
from typing import Any, List

from .domain import Action, CommitPlan
from .errors import PlanFormatError

_FIELDS = (
    ("filePath", "file_path"),
    ("patch", "patch"),
    ("commitMessage", "commit_message"),
)


def parse_commit_plan(text: str) -> CommitPlan:
    """
    Decode a commit plan from the backend's response text.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PlanFormatError(f"failed to unmarshal commit plan: {exc}") from exc

    if not isinstance(payload, dict):
        raise PlanFormatError(
            f"commit plan must be a JSON object, got {type(payload).__name__}"
        )

    entries = payload.get("commitPlan")
    if not isinstance(entries, list):
        raise PlanFormatError("commit plan is missing the 'commitPlan' list")

    actions: List[Action] = []
    for position, entry in enumerate(entries, start=1):
        actions.append(_parse_action(entry, position))

    return CommitPlan(actions=actions)


def _parse_action(entry: Any, position: int) -> Action:
    if not isinstance(entry, dict):
        raise PlanFormatError(f"commit plan entry {position} is not an object")

    values = {}
    for json_key, attr in _FIELDS:
        value = entry.get(json_key)
        if not isinstance(value, str):
            raise PlanFormatError(
                f"commit plan entry {position} has no string '{json_key}'"
            )
        values[attr] = value

    return Action(**values)


def render_plan_summary(plan: CommitPlan) -> List[str]:
    """
    Return the lines shown to the developer when a plan is proposed.

    Only commit messages are listed; patch bodies stay hidden.
    """

    lines = ["Commit Plan:"]
    lines.extend(f"\t{message}" for message in plan.commit_messages())
    return lines
