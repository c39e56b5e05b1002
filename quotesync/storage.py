# quotesync Storage
# YAML file persistence of the local replica

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from quotesync.errors import MalformedRemoteData
from quotesync.record import Record, has_identity, normalize_all
from quotesync.utils.paths import atomic_write, expand_path

logger = logging.getLogger(__name__)

STORE_VERSION = "1.0"

DEFAULT_QUOTES: list[dict[str, Any]] = [
    {"text": "The best way to predict the future is to invent it.", "category": "Motivation"},
    {"text": "Life is 10% what happens to us and 90% how we react to it.", "category": "Life"},
    {"text": "Code is like humor. When you have to explain it, it's bad.", "category": "Programming"},
]


def get_default_store_path() -> Path:
    """Get the default local store path."""
    return Path.home() / ".config" / "quotesync" / "quotes.yaml"


class FileReplicaStore:
    """
    Durable local replica stored as YAML.

    A missing file is seeded with the default quotes; plain JSON arrays
    (e.g. exported files) are accepted on load.
    """

    def __init__(self, path: Path | str | None = None):
        """
        Initialize store.

        Args:
            path: Store file. Defaults to ~/.config/quotesync/quotes.yaml
        """
        self.path = expand_path(path) if path is not None else get_default_store_path()

    @property
    def exists(self) -> bool:
        """Check if the store file exists."""
        return self.path.exists()

    def load(self) -> list[Record]:
        """
        Load records from file.

        A missing file is seeded with the default quotes. Ids and timestamps
        assigned while loading are written back, so they stay stable across
        runs.

        Raises:
            MalformedRemoteData: If the file cannot be parsed as a record list.
        """
        seeded = not self.path.exists()
        raw = [dict(q) for q in DEFAULT_QUOTES] if seeded else self._read()

        records = normalize_all(raw)
        if seeded or not all(has_identity(r) for r in raw):
            logger.info("Persisting assigned record identity to %s", self.path)
            self.save(records)
        return records

    def _read(self) -> Any:
        text = self.path.read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            # Try JSON for exported files
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise MalformedRemoteData(f"Cannot parse {self.path}: {e}") from e

        if data is None:
            return []
        if isinstance(data, dict):
            return data.get("records", [])
        return data

    def save(self, records: Sequence[Record]) -> None:
        """Save records to file."""
        document = {
            "version": STORE_VERSION,
            "records": [record.to_wire() for record in records],
        }
        atomic_write(
            self.path,
            yaml.dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True),
        )

    @property
    def last_shown_path(self) -> Path:
        """File remembering the id of the last randomly shown quote."""
        return self.path.with_name(f"{self.path.stem}.last_shown")

    def read_last_shown(self) -> str | None:
        """Get the id of the last randomly shown quote."""
        if not self.last_shown_path.exists():
            return None
        return self.last_shown_path.read_text(encoding="utf-8").strip() or None

    def write_last_shown(self, record_id: str) -> None:
        """Remember the id of the randomly shown quote."""
        atomic_write(self.last_shown_path, f"{record_id}\n")


def read_json_records(path: Path) -> list[Record]:
    """
    Read a JSON array of records (import format).

    Raises:
        MalformedRemoteData: If the file is not a JSON array of records.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedRemoteData(f"Invalid JSON file: {e}") from e
    return normalize_all(data)


def write_json_records(path: Path, records: Sequence[Record]) -> None:
    """Write records as an indented JSON array (export format)."""
    atomic_write(path, json.dumps([r.to_wire() for r in records], indent=2, ensure_ascii=False) + "\n")
