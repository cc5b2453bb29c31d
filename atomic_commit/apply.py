"""
Application of an accepted commit plan to a git repository.

Each action is staged with `git apply --cached` and committed on its
own. A failing action is recorded and skipped; the remaining actions
still run and earlier commits are never rolled back.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .domain import ActionConfirmation, ActionFailure, CommitPlan, ExecutionReport
from .errors import WorkflowCancelled
from .git_adapter import GitGateway, apply_patch, create_commit, reset_index

LOG = logging.getLogger(__name__)


def apply_plan(
    plan: CommitPlan,
    gateway: GitGateway,
    cancel_event: Optional[threading.Event] = None,
    dry_run: bool = False,
) -> ExecutionReport:
    """
    Apply every action of the plan in order and report what happened.

    In dry-run mode this logs the actions only. Cancellation is checked
    before each action; commits created so far are kept and the report
    gathered until then travels on the WorkflowCancelled error.
    """

    report = ExecutionReport(total=len(plan.actions))

    if dry_run:
        LOG.info("Dry run: would apply %d commits", len(plan.actions))
        for ordinal, action in enumerate(plan.actions, start=1):
            LOG.info("  [%d] %s (%s)", ordinal, action.commit_message, action.file_path)
        return report

    for ordinal, action in enumerate(plan.actions, start=1):
        if cancel_event is not None and cancel_event.is_set():
            raise WorkflowCancelled(
                f"cancelled after {report.succeeded} of {report.total} commits",
                report=report,
            )

        LOG.debug("Staging patch %d for %s", ordinal, action.file_path)
        result = apply_patch(gateway, action.normalized_patch(), index_only=True)
        if not result.success:
            failure = ActionFailure(
                ordinal=ordinal,
                stage="apply",
                commit_message=action.commit_message,
                detail=result.error_text or "no output",
            )
            LOG.error("%s", failure)
            report.failures.append(failure)
            continue

        result = create_commit(gateway, action.commit_message)
        if not result.success:
            failure = ActionFailure(
                ordinal=ordinal,
                stage="commit",
                commit_message=action.commit_message,
                detail=result.error_text or "no output",
            )
            LOG.error("%s", failure)
            report.failures.append(failure)
            # Hunks left staged would otherwise end up in the next commit.
            unstaged = reset_index(gateway)
            if not unstaged.success:
                LOG.error(
                    "Failed to unstage patch %d: %s",
                    ordinal,
                    unstaged.error_text or "no output",
                )
            continue

        LOG.info("Committed %s", action.commit_message)
        report.confirmations.append(
            ActionConfirmation(ordinal=ordinal, commit_message=action.commit_message)
        )

    return report
