# quotesync Local Replica
# Single owner of the locally editable record collection

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from quotesync.record import Record, has_identity, normalize
from quotesync.sync.collaborators import ReplicaStore


class LocalReplica:
    """
    The local record collection and its persistence.

    Created from the store at startup and mutated only through ``commit``,
    ``put`` and ``remove``. Every mutation is saved before it becomes visible.
    """

    def __init__(self, store: ReplicaStore, records: Sequence[Record] | None = None):
        """
        Initialize local replica.

        Args:
            store: Persistence collaborator.
            records: Initial records (already normalized).
        """
        self.store = store
        self._records: list[Record] = list(records or [])

    @classmethod
    def load(cls, store: ReplicaStore) -> "LocalReplica":
        """
        Create a replica from the store, normalizing what it holds.

        Identity assigned to records that lacked it is saved right away.
        """
        raw = store.load()
        replica = cls(store, [normalize(r) for r in raw])
        if not all(has_identity(r) for r in raw):
            replica.commit(replica.records)
        return replica

    @property
    def records(self) -> list[Record]:
        """Snapshot of the current records."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def get(self, record_id: str) -> Record | None:
        """Get a record by id."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(r.category for r in self._records))

    def commit(self, records: Sequence[Record]) -> None:
        """
        Replace the whole collection.

        The new collection is saved first; on failure the in-memory
        state is left as it was.
        """
        new_records = list(records)
        self.store.save(new_records)
        self._records = new_records

    def put(self, record: Record | Mapping[str, Any]) -> Record:
        """
        Insert or replace a record by id.

        Returns:
            The normalized record that was stored.
        """
        return self.put_many([record])[0]

    def put_many(self, records: Sequence[Record | Mapping[str, Any]]) -> list[Record]:
        """
        Insert or replace several records by id with a single save.

        Replaced records keep their position; new ones are appended.

        Returns:
            The normalized records that were stored.
        """
        incoming = [normalize(r) for r in records]
        by_id = {r.id: r for r in self._records}
        for record in incoming:
            by_id[record.id] = record
        self.commit(list(by_id.values()))
        return incoming

    def remove(self, record_id: str) -> Record:
        """
        Remove a record by id.

        Raises:
            KeyError: If no record has this id.
        """
        record = self.get(record_id)
        if record is None:
            raise KeyError(f"Record '{record_id}' not found")
        self.commit([r for r in self._records if r.id != record_id])
        return record
