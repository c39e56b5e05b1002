# quotesync Sync Engine
# One reconciliation cycle: fetch, detect, surface, merge, persist, report

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from quotesync.sync.collaborators import Display, StatusLevel
from quotesync.sync.reconciler import Conflict, detect_conflicts, index_by_id, merge_server_into_local
from quotesync.sync.replica import LocalReplica
from quotesync.sync.session import ConflictSession
from quotesync.sync.state import SyncSessionState
from quotesync.transport.base import RemoteReplica

logger = logging.getLogger(__name__)


class CycleStatus(str, Enum):
    """Outcome of a sync cycle."""

    COMPLETED = "completed"
    FAILED = "failed"
    # Another cycle was running; the trigger was dropped
    DROPPED = "dropped"


@dataclass
class SyncResult:
    """Result of one sync cycle."""

    status: CycleStatus
    fetched: int = 0
    added: int = 0
    updated: int = 0
    total: int = 0
    conflicts: list[Conflict] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the cycle completed."""
        return self.status == CycleStatus.COMPLETED

    @property
    def has_conflicts(self) -> bool:
        """Check if the cycle surfaced conflicts."""
        return len(self.conflicts) > 0


class SyncEngine:
    """
    Synchronization engine.

    Owns the single-flight guard: a cycle requested while another one is
    running is dropped, not queued. Every failure inside a cycle is caught
    at the cycle boundary and reported through the display.
    """

    def __init__(
        self,
        replica: LocalReplica,
        remote: RemoteReplica,
        display: Display,
        *,
        session: ConflictSession | None = None,
        state: SyncSessionState | None = None,
    ):
        """
        Initialize sync engine.

        Args:
            replica: Local replica.
            remote: Remote replica.
            display: Display collaborator.
            session: Optional conflict session (creates new one if not provided).
            state: Optional session state (creates new one if not provided).
        """
        self.replica = replica
        self.remote = remote
        self.display = display
        self.session = session or ConflictSession(replica, remote, display)
        self.state = state or SyncSessionState()

    @property
    def is_syncing(self) -> bool:
        """Check if a cycle is in flight."""
        return self.state.syncing

    async def sync(self, *, report: bool = True) -> SyncResult:
        """
        Run one sync cycle.

        Args:
            report: Update the user-visible status on start and success.
                Failures are always reported.

        Returns:
            SyncResult; status DROPPED if a cycle was already running.
        """
        # Checked before the first await so two triggers cannot both pass
        if self.state.syncing:
            logger.debug("Sync already running, trigger dropped")
            return SyncResult(status=CycleStatus.DROPPED)

        self.state.syncing = True
        try:
            if report:
                self.display.render_status("Syncing...", StatusLevel.INFO)
            result = await self._run_cycle()
        except Exception as e:
            logger.exception("Sync cycle failed")
            self._report(f"Sync failed: {e}", StatusLevel.ERROR)
            return SyncResult(status=CycleStatus.FAILED, error=str(e))
        finally:
            self.state.syncing = False

        # Committed; status failures from here on are logged only
        if report:
            self._report(f"Last sync: {self.state.last_sync_time:%H:%M:%S}", StatusLevel.INFO)
        return result

    async def _run_cycle(self) -> SyncResult:
        server = await self.remote.fetch_remote()
        self.state.last_server_snapshot = server

        # No await from here on: local edits cannot interleave with the merge
        local = self.replica.records
        conflicts = detect_conflicts(local, server)
        previous = (self.session.conflicts, self.session.server_snapshot)
        self.session.replace(conflicts, server)

        merged = merge_server_into_local(local, server)
        try:
            self.replica.commit(merged)
        except Exception:
            # Merge not applied; restore the previous conflict set
            self.session.replace(*previous)
            raise
        self.state.last_sync_time = datetime.now()

        local_map = index_by_id(local)
        added = sum(1 for r in server if r.id not in local_map)
        updated = sum(1 for r in server if r.id in local_map and local_map[r.id] != r)

        logger.info(
            "Sync completed: %d fetched, %d added, %d updated, %d conflicts",
            len(server),
            added,
            updated,
            len(conflicts),
        )
        return SyncResult(
            status=CycleStatus.COMPLETED,
            fetched=len(server),
            added=added,
            updated=updated,
            total=len(merged),
            conflicts=conflicts,
        )

    def _report(self, text: str, level: StatusLevel) -> None:
        try:
            self.display.render_status(text, level)
        except Exception:
            logger.exception("Could not report sync status")

    async def aclose(self) -> None:
        """Release transport resources."""
        await self.remote.aclose()
