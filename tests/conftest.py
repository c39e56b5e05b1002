# quotesync Test Fixtures
# Pytest fixtures and in-memory collaborators for quotesync tests

import asyncio
import tempfile
from collections.abc import Generator, Sequence
from pathlib import Path
from typing import Any

import pytest
import yaml

from quotesync.errors import TransportUnavailable
from quotesync.record import Record
from quotesync.sync.collaborators import StatusLevel
from quotesync.transport.mock import MockRemote


class MemoryStore:
    """ReplicaStore keeping records in memory."""

    def __init__(self, records: Sequence[Record] = ()):
        self.records = list(records)
        self.saves = 0
        self.fail_save = False

    def load(self) -> list[Record]:
        return list(self.records)

    def save(self, records: Sequence[Record]) -> None:
        if self.fail_save:
            raise OSError("disk full")
        self.records = list(records)
        self.saves += 1


class RecordingDisplay:
    """Display collaborator remembering everything it was asked to show."""

    def __init__(self):
        self.statuses: list[tuple[str, StatusLevel]] = []
        self.conflict_renders: list[list] = []

    def render_conflicts(self, conflicts) -> None:
        self.conflict_renders.append(list(conflicts))

    def render_status(self, text: str, level: StatusLevel = StatusLevel.INFO) -> None:
        self.statuses.append((text, level))

    @property
    def last_status(self) -> tuple[str, StatusLevel] | None:
        return self.statuses[-1] if self.statuses else None

    @property
    def errors(self) -> list[str]:
        return [text for text, level in self.statuses if level == StatusLevel.ERROR]


class SpyTransport(MockRemote):
    """MockRemote without latency that counts calls and can fail or be gated."""

    name = "spy"

    def __init__(self, records: list[dict[str, Any]] | None = None):
        super().__init__(records if records is not None else [], latency=0)
        self.fetch_calls = 0
        self.push_calls = 0
        self.fail_fetch = False
        self.fail_push = False
        self.fetch_payload: Any = None
        self.gate: asyncio.Event | None = None

    async def fetch(self) -> list[Any]:
        self.fetch_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_fetch:
            raise TransportUnavailable("connection refused")
        if self.fetch_payload is not None:
            return self.fetch_payload
        return await super().fetch()

    async def push(self, records: list[dict[str, Any]]) -> list[Any]:
        self.push_calls += 1
        if self.fail_push:
            raise TransportUnavailable("connection refused")
        return await super().push(records)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("QUOTESYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory replica store."""
    return MemoryStore()


@pytest.fixture
def display() -> RecordingDisplay:
    """Recording display collaborator."""
    return RecordingDisplay()


@pytest.fixture
def spy_transport() -> SpyTransport:
    """Empty spy transport."""
    return SpyTransport()


@pytest.fixture
def sample_config(temp_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "remote": {
            "endpoint_url": "",
            "poll_interval_ms": 1000,
            "timeout_seconds": 1.0,
            "use_fallback": True,
            "fallback_latency_ms": 0,
        },
        "storage": {"path": str(temp_dir / "quotes.yaml")},
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
