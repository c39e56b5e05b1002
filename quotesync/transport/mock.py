# quotesync Mock Remote
# Deterministic in-memory stand-in for the remote endpoint

import asyncio
import copy
from typing import Any

from quotesync.record import now_ms
from quotesync.transport.base import RemoteTransport


def default_server_records(reference_ms: int | None = None) -> list[dict[str, Any]]:
    """Seed records of the simulated server, relative to ``reference_ms``."""
    base = reference_ms if reference_ms is not None else now_ms()
    return [
        {"id": "q_server_1", "text": "Server quote 1", "category": "Server", "lastModified": base - 600_000},
        {"id": "q_server_2", "text": "Server quote 2", "category": "Server", "lastModified": base - 300_000},
    ]


class MockRemote(RemoteTransport):
    """
    Simulated remote collection.

    Used when no endpoint is configured or the endpoint is unreachable.
    The store lives for the lifetime of the process only.
    """

    name = "mock"

    def __init__(self, records: list[dict[str, Any]] | None = None, *, latency: float = 0.5):
        """
        Initialize mock remote.

        Args:
            records: Initial store contents (defaults to two seed quotes).
            latency: Simulated latency in seconds for every call.
        """
        self.latency = latency
        self._store: dict[str, dict[str, Any]] = {}
        for record in default_server_records() if records is None else records:
            self._store[record["id"]] = dict(record)

    @property
    def records(self) -> list[dict[str, Any]]:
        """Snapshot of the store."""
        return copy.deepcopy(list(self._store.values()))

    async def fetch(self) -> list[Any]:
        await asyncio.sleep(self.latency)
        return self.records

    async def push(self, records: list[dict[str, Any]]) -> list[Any]:
        await asyncio.sleep(self.latency)
        # Pushed entries replace existing ones with the same id
        for record in records:
            self._store[record["id"]] = dict(record)
        return self.records
