# quotesync Transport Module
# Remote access: HTTP primary, in-memory fallback, normalizing facade

from quotesync.transport.base import RemoteReplica, RemoteTransport
from quotesync.transport.fallback import FallbackTransport
from quotesync.transport.http import HttpTransport
from quotesync.transport.mock import MockRemote, default_server_records

__all__ = [
    "RemoteTransport",
    "RemoteReplica",
    "HttpTransport",
    "MockRemote",
    "FallbackTransport",
    "default_server_records",
    "create_remote",
]


def create_remote(
    endpoint_url: str | None,
    *,
    timeout: float = 10.0,
    use_fallback: bool = True,
    fallback_latency: float = 0.5,
) -> RemoteReplica:
    """
    Build the remote replica from settings.

    Args:
        endpoint_url: Remote endpoint URL, or None for mock only.
        timeout: HTTP timeout in seconds.
        use_fallback: Degrade to the mock remote when the endpoint fails.
        fallback_latency: Simulated latency of the mock remote in seconds.

    Returns:
        RemoteReplica ready for fetch/push.
    """
    primary = HttpTransport(endpoint_url, timeout=timeout) if endpoint_url else None
    if primary is not None and not use_fallback:
        return RemoteReplica(primary)
    return RemoteReplica(FallbackTransport(primary, MockRemote(latency=fallback_latency)))
