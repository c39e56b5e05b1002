# quotesync Sync State
# In-memory session state of the sync engine

from dataclasses import dataclass, field
from datetime import datetime

from quotesync.record import Record


@dataclass
class SyncSessionState:
    """
    Process-wide sync session state.

    Never persisted; reset only by a restart.
    """

    syncing: bool = False
    last_server_snapshot: list[Record] = field(default_factory=list)
    last_sync_time: datetime | None = None

    @property
    def has_synced(self) -> bool:
        """Check whether at least one cycle completed."""
        return self.last_sync_time is not None
