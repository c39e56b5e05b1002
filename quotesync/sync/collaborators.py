# quotesync Collaborators
# Interfaces the sync core depends on for persistence and display

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from quotesync.record import Record

if TYPE_CHECKING:
    from quotesync.sync.reconciler import Conflict


class StatusLevel(str, Enum):
    """Severity of a status message."""

    INFO = "info"
    ERROR = "error"


@runtime_checkable
class ReplicaStore(Protocol):
    """Durable storage of the local replica."""

    def load(self) -> list[Record]: ...

    def save(self, records: Sequence[Record]) -> None: ...


@runtime_checkable
class Display(Protocol):
    """Presentation of sync state to the user."""

    def render_conflicts(self, conflicts: Sequence["Conflict"]) -> None: ...

    def render_status(self, text: str, level: StatusLevel = StatusLevel.INFO) -> None: ...
