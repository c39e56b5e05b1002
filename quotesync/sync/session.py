# quotesync Conflict Session
# Outstanding conflicts of the last cycle and the user overrides on them

import logging
from collections.abc import Sequence

from quotesync.errors import PushFailed
from quotesync.record import Record
from quotesync.sync.collaborators import Display, StatusLevel
from quotesync.sync.reconciler import Conflict
from quotesync.sync.replica import LocalReplica
from quotesync.transport.base import RemoteReplica

logger = logging.getLogger(__name__)


class ConflictSession:
    """
    Conflicts surfaced by the most recent sync cycle.

    The merge has already applied the server version of every conflict;
    the session lets the user confirm that (``accept_server``) or bring
    the pre-merge local version back and push it (``keep_local``).
    State is replaced wholesale on every cycle.
    """

    def __init__(self, replica: LocalReplica, remote: RemoteReplica, display: Display):
        """
        Initialize conflict session.

        Args:
            replica: Local replica to apply resolutions to.
            remote: Remote replica used by ``keep_local``.
            display: Display collaborator.
        """
        self.replica = replica
        self.remote = remote
        self.display = display
        self._conflicts: dict[str, Conflict] = {}
        self._server_snapshot: list[Record] = []

    @property
    def conflicts(self) -> list[Conflict]:
        """Outstanding conflicts in server order."""
        return list(self._conflicts.values())

    @property
    def server_snapshot(self) -> list[Record]:
        """Server replica the conflicts were computed against."""
        return list(self._server_snapshot)

    def __len__(self) -> int:
        return len(self._conflicts)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._conflicts

    def get(self, record_id: str) -> Conflict:
        """
        Get an outstanding conflict.

        Raises:
            KeyError: If no conflict exists for this id.
        """
        try:
            return self._conflicts[record_id]
        except KeyError:
            raise KeyError(f"No conflict for record '{record_id}'") from None

    def replace(self, conflicts: Sequence[Conflict], server_snapshot: Sequence[Record]) -> None:
        """Discard previous conflicts and hold the ones of a new cycle."""
        self._conflicts = {c.id: c for c in conflicts}
        self._server_snapshot = list(server_snapshot)
        self.display.render_conflicts(self.conflicts)

    def accept_server(self, record_id: str) -> Record:
        """
        Resolve a conflict with the server version.

        Never touches the network.

        Returns:
            The record now held locally.
        """
        conflict = self.get(record_id)
        record = self.replica.put(conflict.server)
        self._resolved(record_id)
        self.display.render_status("Accepted server version for that quote.", StatusLevel.INFO)
        return record

    async def keep_local(self, record_id: str) -> bool:
        """
        Resolve a conflict with the local version and push it.

        The pre-merge local version is restored as a new snapshot so it is
        newer than the server copy, then the whole local replica is pushed.
        Failures are reported to the display and leave the conflict open.

        Returns:
            True if the push succeeded.
        """
        conflict = self.get(record_id)
        try:
            self.replica.put(conflict.local.touch(newer_than=conflict.server.last_modified))
            await self.remote.push_local(self.replica.records)
        except (PushFailed, OSError) as e:
            logger.warning("Keep local for %s failed: %s", record_id, e)
            self.display.render_status(f"Could not push to server: {e}", StatusLevel.ERROR)
            return False

        self._resolved(record_id)
        self.display.render_status("Kept local version and pushed to server.", StatusLevel.INFO)
        return True

    def _resolved(self, record_id: str) -> None:
        self._conflicts.pop(record_id, None)
        self.display.render_conflicts(self.conflicts)
