# quotesync Fallback Transport
# Primary transport with a deterministic fallback tier

import logging
from typing import Any

from quotesync.errors import TransportUnavailable
from quotesync.transport.base import RemoteTransport

logger = logging.getLogger(__name__)


class FallbackTransport(RemoteTransport):
    """
    Try ``primary`` first, degrade to ``fallback`` when it is unavailable.

    Only ``TransportUnavailable`` triggers the fallback; malformed payloads
    from a reachable primary are propagated to the caller.
    """

    name = "fallback"

    def __init__(self, primary: RemoteTransport | None, fallback: RemoteTransport):
        """
        Initialize fallback transport.

        Args:
            primary: Primary transport, or None to always use the fallback.
            fallback: Transport used when the primary is unavailable.
        """
        self.primary = primary
        self.fallback = fallback
        self.last_used: str | None = None

    async def fetch(self) -> list[Any]:
        if self.primary is not None:
            try:
                result = await self.primary.fetch()
                self.last_used = self.primary.name
                return result
            except TransportUnavailable as e:
                logger.warning("Fetch from %s failed, using %s: %s", self.primary.name, self.fallback.name, e)

        self.last_used = self.fallback.name
        return await self.fallback.fetch()

    async def push(self, records: list[dict[str, Any]]) -> list[Any]:
        if self.primary is not None:
            try:
                result = await self.primary.push(records)
                self.last_used = self.primary.name
                return result
            except TransportUnavailable as e:
                logger.warning("Push to %s failed, using %s: %s", self.primary.name, self.fallback.name, e)

        self.last_used = self.fallback.name
        return await self.fallback.push(records)

    async def aclose(self) -> None:
        if self.primary is not None:
            await self.primary.aclose()
        await self.fallback.aclose()
