# quotesync Record Model
# Identity + timestamp contract every synchronized record satisfies

import secrets
import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from quotesync.errors import MalformedRemoteData


def now_ms() -> int:
    """Current time as integer epoch milliseconds."""
    return int(time.time() * 1000)


def generate_id() -> str:
    """Generate a collision-resistant record id."""
    return f"q_{now_ms()}_{secrets.token_hex(4)}"


class Record(BaseModel):
    """
    A single quote snapshot.

    Records are immutable values. Editing a record means creating a new
    snapshot with a newer ``last_modified`` (see ``touch``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1, description="Stable identity within a replica")
    text: str = Field(description="Quote text")
    category: str = Field(description="Quote category")
    last_modified: int = Field(alias="lastModified", description="Revision timestamp (epoch ms)")

    def to_wire(self) -> dict[str, Any]:
        """Convert to the JSON shape used by the remote endpoint and the store."""
        return self.model_dump(by_alias=True)

    def touch(self, newer_than: int = 0, **changes: Any) -> "Record":
        """Return a new snapshot with ``changes`` applied and a fresh timestamp.

        The timestamp is later than both this snapshot and ``newer_than``.
        """
        changes["last_modified"] = max(now_ms(), self.last_modified + 1, newer_than + 1)
        return self.model_copy(update=changes)

    def same_content(self, other: "Record") -> bool:
        """Check value equality on everything but the revision timestamp."""
        return (self.id, self.text, self.category) == (other.id, other.text, other.category)


def has_identity(record: Any) -> bool:
    """Check whether ``normalize`` would keep the given id and timestamp."""
    if isinstance(record, Record):
        return bool(record.last_modified)
    if not isinstance(record, Mapping):
        return True
    stamp = record.get("lastModified", record.get("last_modified"))
    return bool(record.get("id")) and bool(stamp)


def normalize(record: Record | Mapping[str, Any]) -> Record:
    """
    Bring a raw record into canonical form.

    Assigns ``id`` and ``lastModified`` when they are absent or falsy and
    validates the rest. Records that are already canonical are returned as is.

    Args:
        record: A Record or a record-shaped mapping (wire or Python field names).

    Returns:
        Validated Record.

    Raises:
        MalformedRemoteData: If ``record`` is not a mapping.
        pydantic.ValidationError: If required fields are missing or not coercible.
    """
    if isinstance(record, Record):
        if not record.last_modified:
            return record.model_copy(update={"last_modified": now_ms()})
        return record

    if not isinstance(record, Mapping):
        raise MalformedRemoteData(f"Expected a record object, got {type(record).__name__}")

    data = dict(record)
    if "last_modified" in data and "lastModified" not in data:
        data["lastModified"] = data.pop("last_modified")

    if not data.get("id"):
        data["id"] = generate_id()
    if not data.get("lastModified"):
        data["lastModified"] = now_ms()

    return Record.model_validate(data)


def normalize_all(records: Any) -> list[Record]:
    """
    Normalize a record list.

    Raises:
        MalformedRemoteData: If ``records`` is not a list.
    """
    if not isinstance(records, list):
        raise MalformedRemoteData(f"Expected a list of records, got {type(records).__name__}")
    return [normalize(r) for r in records]


def is_conflicting(local: Record, server: Record) -> bool:
    """
    Check whether two versions of the same record conflict.

    Same id, different timestamps and different content. A pair that only
    differs by timestamp is not a conflict.
    """
    return local.id == server.id and local.last_modified != server.last_modified and not local.same_content(server)
