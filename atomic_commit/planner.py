"""
High-level orchestration for atomic-commit.

The workflow is responsible for:
  - checking that it runs inside a git work tree,
  - snapshotting the pending changes and replaying them,
  - reading the snapshot diff,
  - negotiating a commit plan with the model and the developer,
  - applying the accepted plan, and
  - dropping the snapshot, whatever happened before.

Each step only starts once the previous one has finished; the working
tree and the index are never touched concurrently.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Literal, Optional, TextIO

from .ai.interface import TextGenerator
from .apply import apply_plan
from .config import Config
from .domain import Conversation, ExecutionReport, Role
from .git_adapter import GitGateway, ensure_git_repository
from .negotiator import PlanNegotiator
from .review import Prompter
from .snapshot import SnapshotManager, extract_diff, is_empty_diff, snapshot_session

LOG = logging.getLogger(__name__)

Status = Literal["nothing-to-commit", "committed", "partial", "dry-run"]


@dataclass
class WorkflowResult:
    status: Status
    report: Optional[ExecutionReport] = None


def run_commit(
    config: Config,
    generator: TextGenerator,
    prompter: Prompter,
    gateway: Optional[GitGateway] = None,
    cancel_event: Optional[threading.Event] = None,
    out: Optional[TextIO] = None,
) -> WorkflowResult:
    """
    Entry point for the main CLI command.

    Snapshot, diff and planning errors abort the run. Failures of
    individual actions are collected in the returned report instead.

    cancel_event is a cooperative signal for callers that drive the run
    from another thread: it is checked before every negotiation step and
    before every action, but a backend request or git command already in
    flight runs to completion. The command-line entry point does not set
    it; there Ctrl+C raises KeyboardInterrupt, which unwinds through the
    snapshot session so the snapshot is still released.
    """

    LOG.info("Starting commit workflow")
    LOG.debug("Config: %s", config)

    gateway = gateway or GitGateway(config.repo_path, timeout=config.command_timeout)
    cancel_event = cancel_event or threading.Event()

    ensure_git_repository(gateway)

    conversation = Conversation()
    conversation.add(Role.SYSTEM, config.system_prompt)

    manager = SnapshotManager(gateway)
    with snapshot_session(manager):
        LOG.info("Getting snapshot diff")
        raw_diff = extract_diff(manager)
        if is_empty_diff(raw_diff):
            LOG.info("No changes to commit")
            return WorkflowResult(status="nothing-to-commit")

        conversation.add(Role.USER, raw_diff)
        negotiator = PlanNegotiator(
            generator,
            prompter,
            conversation,
            cancel_event=cancel_event,
            out=out,
        )
        plan = negotiator.negotiate()
        report = apply_plan(plan, gateway, cancel_event=cancel_event, dry_run=config.dry_run)

    if config.dry_run:
        return WorkflowResult(status="dry-run", report=report)
    return WorkflowResult(status="committed" if report.ok else "partial", report=report)


def print_execution_summary(result: WorkflowResult, out: Optional[TextIO] = None) -> None:
    """
    Print a concise human-readable summary of the run.
    """

    stream = out or sys.stdout
    report = result.report
    if result.status == "nothing-to-commit" or report is None:
        stream.write("Nothing to commit.\n")
        return

    if result.status == "dry-run":
        stream.write(f"Dry run: {report.total} commits planned, none created.\n")
        return

    lines = [f"{report.succeeded} of {report.total} commits created."]
    lines.extend(f"  {failure}" for failure in report.failures)
    stream.write("\n".join(lines) + "\n")
