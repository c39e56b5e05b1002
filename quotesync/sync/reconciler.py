# quotesync Reconciler
# Conflict detection and server-wins merge

from collections.abc import Iterable
from dataclasses import dataclass

from quotesync.record import Record, is_conflicting


@dataclass(frozen=True)
class Conflict:
    """Divergence between local and server versions of one record."""

    id: str
    local: Record
    server: Record

    @property
    def server_is_newer(self) -> bool:
        """Check if the server version carries the later timestamp."""
        return self.server.last_modified > self.local.last_modified


def index_by_id(records: Iterable[Record]) -> dict[str, Record]:
    """Index records by id, later entries winning."""
    return {record.id: record for record in records}


def detect_conflicts(local: Iterable[Record], server: Iterable[Record]) -> list[Conflict]:
    """
    Find records that diverged between local and server.

    Only ids present on both sides can conflict; one-sided ids are additions
    and are handled by the merge.

    Args:
        local: Local replica.
        server: Server replica.

    Returns:
        Conflicts in server iteration order.
    """
    local_map = index_by_id(local)
    conflicts: list[Conflict] = []

    for record_id, server_record in index_by_id(server).items():
        local_record = local_map.get(record_id)
        if local_record is not None and is_conflicting(local_record, server_record):
            conflicts.append(Conflict(id=record_id, local=local_record, server=server_record))

    return conflicts


def merge_server_into_local(local: Iterable[Record], server: Iterable[Record]) -> list[Record]:
    """
    Merge server records into the local replica, server wins.

    Every server record overwrites or inserts its id; local-only ids are
    kept. The result is ordered by ascending ``last_modified`` (stable).

    Args:
        local: Local replica.
        server: Server replica.

    Returns:
        Merged replica.
    """
    merged = index_by_id(local)
    for record in server:
        merged[record.id] = record
    return sorted(merged.values(), key=lambda r: r.last_modified)
