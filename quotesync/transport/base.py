# quotesync Remote Transport
# Transport interface and the normalizing remote replica facade

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from quotesync.errors import MalformedRemoteData, PushFailed, QuoteSyncError
from quotesync.record import Record, normalize_all

logger = logging.getLogger(__name__)


class RemoteTransport(ABC):
    """
    Raw access to the remote collection.

    Implementations exchange plain record-shaped dicts; normalization is
    done once by ``RemoteReplica`` for every tier.
    """

    name: str = "remote"

    @abstractmethod
    async def fetch(self) -> list[Any]:
        """Return the remote collection."""

    @abstractmethod
    async def push(self, records: list[dict[str, Any]]) -> list[Any]:
        """Send the full local collection and return the remote result."""

    async def aclose(self) -> None:
        """Release any held resources."""


class RemoteReplica:
    """
    Remote side of synchronization.

    Wraps a transport and guarantees every record it hands out is normalized.
    """

    def __init__(self, transport: RemoteTransport):
        """
        Initialize remote replica.

        Args:
            transport: Transport (usually a FallbackTransport).
        """
        self.transport = transport

    async def fetch_remote(self) -> list[Record]:
        """
        Fetch and normalize the remote collection.

        Raises:
            MalformedRemoteData: If the payload is not a record list.
            pydantic.ValidationError: If a record cannot be coerced.
        """
        raw = await self.transport.fetch()
        return normalize_all(raw)

    async def push_local(self, records: list[Record]) -> list[Record]:
        """
        Push the full local collection.

        Returns:
            Remote collection after the push (may equal what was sent).

        Raises:
            PushFailed: On any failure, including malformed responses.
        """
        payload = [record.to_wire() for record in records]
        try:
            raw = await self.transport.push(payload)
            return normalize_all(raw)
        except (QuoteSyncError, ValidationError) as e:
            logger.warning("Push of %d records failed: %s", len(payload), e)
            raise PushFailed(str(e)) from e

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self.transport.aclose()
