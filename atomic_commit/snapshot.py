"""
Snapshots of the developer's pending changes.

A snapshot is a git stash entry holding every uncommitted change,
tracked and untracked. Right after capture the same changes are
replayed onto the working tree, so the developer keeps working while
the diff is read from the frozen stash. The stash is dropped when the
run ends.

All operations address the most recent stash entry; only one snapshot
may be active per manager.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, Optional

from .errors import DiffUnavailableError, IndexResetError, RestoreError, SnapshotError
from .git_adapter import GitGateway, reset_index

LOG = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "atomic-commit"
STASH_REF = "stash@{0}"
NO_LOCAL_CHANGES = "No local changes to save"


@dataclass
class Snapshot:
    """
    A named capture of the working tree's uncommitted changes.

    empty is set when git had nothing to stash; no stash entry exists in
    that case. restored records whether the changes were replayed back
    onto the working tree.
    """

    created_at: datetime
    name: str
    active: bool = True
    empty: bool = False
    restored: bool = False


def snapshot_name(created_at: datetime) -> str:
    return f"{SNAPSHOT_PREFIX}-{created_at.strftime('%Y%m%dT%H%M%S')}"


class SnapshotManager:
    """
    Capture, replay, inspect and release a single snapshot.
    """

    def __init__(
        self,
        gateway: GitGateway,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.gateway = gateway
        self._clock = clock or datetime.now
        self.snapshot: Optional[Snapshot] = None

    def capture(self) -> Snapshot:
        """
        Move all pending changes, including untracked files, into a new stash.
        """

        if self.snapshot is not None and self.snapshot.active:
            raise SnapshotError(f"snapshot {self.snapshot.name} is still active")

        created_at = self._clock()
        name = snapshot_name(created_at)
        LOG.info("Stashing changes as %s", name)

        result = self.gateway.run(
            ["stash", "push", "--include-untracked", "--message", name]
        )
        if not result.success:
            detail = result.stderr or result.stdout
            if detail:
                raise SnapshotError(f"failed to stash changes: {detail.strip()}")
            raise SnapshotError("failed to stash changes and received no output")

        snapshot = Snapshot(created_at=created_at, name=name)
        if NO_LOCAL_CHANGES in result.stdout:
            # git created no stash entry; stash@{0} may belong to someone else.
            LOG.info("No local changes to snapshot")
            snapshot.empty = True

        self.snapshot = snapshot
        return snapshot

    def restore(self) -> None:
        """
        Replay the snapshot onto the working tree, keeping the stash entry.

        The index is reset to HEAD afterwards so patches staged later apply
        against the last commit.
        """

        snapshot = self._require_active(RestoreError)
        if snapshot.empty:
            snapshot.restored = True
            return

        result = self.gateway.run(["stash", "apply", STASH_REF])
        if not result.success:
            raise RestoreError(
                f"failed to replay snapshot {snapshot.name}: {result.error_text or 'no output'}"
            )

        # The changes are back on the working tree from here on.
        snapshot.restored = True

        result = reset_index(self.gateway)
        if not result.success:
            raise IndexResetError(
                f"failed to reset the index after replaying {snapshot.name}: "
                f"{result.error_text or 'no output'}"
            )

    def diff(self) -> str:
        """
        Return the unified diff of everything held by the snapshot.
        """

        snapshot = self._require_active(DiffUnavailableError)
        if snapshot.empty:
            return ""

        result = self.gateway.run(
            ["stash", "show", "--include-untracked", "--patch", STASH_REF]
        )
        if not result.success:
            raise DiffUnavailableError(
                f"failed to show snapshot {snapshot.name}: {result.error_text or 'no output'}"
            )
        return result.stdout

    def release(self) -> None:
        """
        Drop the snapshot. Failures are logged, never raised.

        A snapshot whose changes never made it back onto the working tree
        holds the only copy of the developer's work and is kept.
        """

        snapshot = self.snapshot
        if snapshot is None or not snapshot.active:
            return
        snapshot.active = False

        if snapshot.empty:
            return

        if not snapshot.restored:
            LOG.error(
                "Keeping stash entry %s because its changes were not restored; "
                "recover them with 'git stash apply %s'",
                snapshot.name,
                STASH_REF,
            )
            return

        LOG.info("Dropping snapshot %s", snapshot.name)
        result = self.gateway.run(["stash", "drop", STASH_REF])
        if not result.success:
            LOG.error(
                "Failed to delete stash %s: %s",
                snapshot.name,
                result.error_text or "no output",
            )

    def _require_active(self, error_type: type) -> Snapshot:
        if self.snapshot is None or not self.snapshot.active:
            raise error_type("no active snapshot")
        return self.snapshot


@contextmanager
def snapshot_session(manager: SnapshotManager) -> Iterator[Snapshot]:
    """
    Capture and replay pending changes, releasing the snapshot on exit.

    release() runs exactly once, whichever step fails.
    """

    try:
        snapshot = manager.capture()
        manager.restore()
        yield snapshot
    finally:
        manager.release()


def extract_diff(manager: SnapshotManager) -> str:
    """
    Return the diff of the active snapshot.
    """

    raw_diff = manager.diff()
    LOG.debug("Snapshot diff:\n%s", raw_diff)
    return raw_diff


def is_empty_diff(raw_diff: str) -> bool:
    return not raw_diff.strip()
