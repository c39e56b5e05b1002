# quotesync HTTP Transport
# Primary transport talking JSON to a real endpoint

import logging
from typing import Any

import httpx

from quotesync.errors import MalformedRemoteData, TransportUnavailable
from quotesync.transport.base import RemoteTransport

logger = logging.getLogger(__name__)


class HttpTransport(RemoteTransport):
    """
    JSON-over-HTTP transport.

    GET returns the remote collection, POST sends the full local collection.
    Network errors and non-success statuses raise ``TransportUnavailable``.
    """

    name = "http"

    def __init__(
        self,
        endpoint_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize HTTP transport.

        Args:
            endpoint_url: Collection endpoint (e.g. https://example.com/api/quotes).
            timeout: Request timeout in seconds.
            client: Optional preconfigured client (used by tests).
        """
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def fetch(self) -> list[Any]:
        response = await self._request("GET")
        return self._parse(response)

    async def push(self, records: list[dict[str, Any]]) -> list[Any]:
        response = await self._request("POST", json=records)
        return self._parse(response)

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        """Perform a request, translating failures into TransportUnavailable."""
        try:
            response = await self.client.request(
                method,
                self.endpoint_url,
                headers={"Accept": "application/json"},
                **kwargs,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TransportUnavailable(f"Server responded {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise TransportUnavailable(f"{method} {self.endpoint_url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, self.endpoint_url, response.status_code)
        return response

    @staticmethod
    def _parse(response: httpx.Response) -> list[Any]:
        """Decode a JSON array body."""
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedRemoteData(f"Response is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise MalformedRemoteData(f"Expected a JSON array, got {type(data).__name__}")
        return data

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
