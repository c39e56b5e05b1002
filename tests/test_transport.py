# quotesync Transport Tests
# Tests for HTTP transport, mock remote, fallback and the remote replica

import httpx
import pytest
from pydantic import ValidationError

from quotesync.errors import MalformedRemoteData, PushFailed, TransportUnavailable
from quotesync.record import Record
from quotesync.transport import (
    FallbackTransport,
    HttpTransport,
    MockRemote,
    RemoteReplica,
    create_remote,
    default_server_records,
)

URL = "https://quotes.example.test/api/quotes"


def _http(handler) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport(URL, client=client)


def _failing(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class TestHttpTransport:
    """Tests for HttpTransport."""

    @pytest.mark.asyncio
    async def test_fetch_returns_array(self):
        payload = [{"id": "a", "text": "x", "category": "c", "lastModified": 1}]

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert str(request.url) == URL
            return httpx.Response(200, json=payload)

        assert await _http(handler).fetch() == payload

    @pytest.mark.asyncio
    async def test_push_posts_json(self):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            sent.append(request.content)
            return httpx.Response(200, json=[{"id": "a", "text": "x", "category": "c", "lastModified": 1}])

        result = await _http(handler).push([{"id": "a", "text": "x", "category": "c", "lastModified": 1}])

        assert len(result) == 1
        assert b'"lastModified"' in sent[0]

    @pytest.mark.asyncio
    async def test_error_status_is_unavailable(self):
        transport = _http(lambda request: httpx.Response(503))

        with pytest.raises(TransportUnavailable) as exc_info:
            await transport.fetch()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_network_error_is_unavailable(self):
        with pytest.raises(TransportUnavailable):
            await _http(_failing).fetch()

    @pytest.mark.asyncio
    async def test_non_array_is_malformed(self):
        transport = _http(lambda request: httpx.Response(200, json={"quotes": []}))

        with pytest.raises(MalformedRemoteData):
            await transport.fetch()

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(self):
        transport = _http(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(MalformedRemoteData):
            await transport.fetch()


class TestMockRemote:
    """Tests for MockRemote."""

    @pytest.mark.asyncio
    async def test_default_seed(self):
        remote = MockRemote(latency=0)
        records = await remote.fetch()
        assert [r["id"] for r in records] == ["q_server_1", "q_server_2"]

    def test_seed_is_relative_to_reference(self):
        records = default_server_records(reference_ms=1_000_000)
        assert [r["lastModified"] for r in records] == [400_000, 700_000]

    @pytest.mark.asyncio
    async def test_fetch_returns_copies(self):
        remote = MockRemote(latency=0)
        records = await remote.fetch()
        records[0]["text"] = "mutated"
        assert (await remote.fetch())[0]["text"] == "Server quote 1"

    @pytest.mark.asyncio
    async def test_push_replaces_by_id_and_appends(self):
        remote = MockRemote([{"id": "a", "text": "old", "category": "c", "lastModified": 1}], latency=0)

        result = await remote.push(
            [
                {"id": "a", "text": "new", "category": "c", "lastModified": 2},
                {"id": "b", "text": "added", "category": "c", "lastModified": 3},
            ]
        )

        assert [(r["id"], r["text"]) for r in result] == [("a", "new"), ("b", "added")]
        assert remote.records == result


class TestFallbackTransport:
    """Tests for FallbackTransport."""

    @pytest.mark.asyncio
    async def test_primary_used_when_available(self):
        primary = _http(lambda request: httpx.Response(200, json=[]))
        transport = FallbackTransport(primary, MockRemote(latency=0))

        assert await transport.fetch() == []
        assert transport.last_used == "http"

    @pytest.mark.asyncio
    async def test_falls_back_on_unavailable(self):
        fallback = MockRemote([{"id": "m", "text": "mock", "category": "c", "lastModified": 1}], latency=0)
        transport = FallbackTransport(_http(_failing), fallback)

        records = await transport.fetch()

        assert [r["id"] for r in records] == ["m"]
        assert transport.last_used == "mock"

    @pytest.mark.asyncio
    async def test_push_falls_back(self):
        fallback = MockRemote([], latency=0)
        transport = FallbackTransport(_http(lambda request: httpx.Response(500)), fallback)

        await transport.push([{"id": "a", "text": "x", "category": "c", "lastModified": 1}])

        assert [r["id"] for r in fallback.records] == ["a"]

    @pytest.mark.asyncio
    async def test_malformed_primary_not_masked(self):
        transport = FallbackTransport(_http(lambda request: httpx.Response(200, json={})), MockRemote(latency=0))

        with pytest.raises(MalformedRemoteData):
            await transport.fetch()

    @pytest.mark.asyncio
    async def test_no_primary_uses_fallback(self):
        transport = FallbackTransport(None, MockRemote(latency=0))
        assert len(await transport.fetch()) == 2
        assert transport.last_used == "mock"


class TestRemoteReplica:
    """Tests for RemoteReplica."""

    @pytest.mark.asyncio
    async def test_fetch_normalizes_records(self):
        remote = RemoteReplica(_http(lambda request: httpx.Response(200, json=[{"text": "t", "category": "c"}])))

        records = await remote.fetch_remote()

        assert len(records) == 1
        assert isinstance(records[0], Record)
        assert records[0].id
        assert records[0].last_modified > 0

    @pytest.mark.asyncio
    async def test_fetch_rejects_invalid_records(self):
        remote = RemoteReplica(_http(lambda request: httpx.Response(200, json=[{"id": "a", "lastModified": 1}])))

        with pytest.raises(ValidationError):
            await remote.fetch_remote()

    @pytest.mark.asyncio
    async def test_always_failing_transport_degrades_twice(self):
        remote = RemoteReplica(FallbackTransport(_http(_failing), MockRemote(latency=0)))

        first = await remote.fetch_remote()
        second = await remote.fetch_remote()

        assert first == second
        assert [r.id for r in first] == ["q_server_1", "q_server_2"]

    @pytest.mark.asyncio
    async def test_push_returns_normalized(self):
        remote = RemoteReplica(MockRemote([], latency=0))
        record = Record(id="a", text="x", category="c", last_modified=1)

        assert await remote.push_local([record]) == [record]

    @pytest.mark.asyncio
    async def test_push_failure_raises_push_failed(self):
        remote = RemoteReplica(_http(_failing))

        with pytest.raises(PushFailed):
            await remote.push_local([Record(id="a", text="x", category="c", last_modified=1)])

    @pytest.mark.asyncio
    async def test_push_malformed_response_raises_push_failed(self):
        remote = RemoteReplica(_http(lambda request: httpx.Response(200, json={"ok": True})))

        with pytest.raises(PushFailed):
            await remote.push_local([])


class TestCreateRemote:
    """Tests for create_remote."""

    def test_without_endpoint_uses_mock_only(self):
        remote = create_remote(None)
        assert isinstance(remote.transport, FallbackTransport)
        assert remote.transport.primary is None

    def test_with_endpoint_and_fallback(self):
        remote = create_remote(URL, timeout=2.0)
        assert isinstance(remote.transport, FallbackTransport)
        assert isinstance(remote.transport.primary, HttpTransport)
        assert remote.transport.primary.timeout == 2.0

    def test_without_fallback(self):
        remote = create_remote(URL, use_fallback=False)
        assert isinstance(remote.transport, HttpTransport)
