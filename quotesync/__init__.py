"""quotesync - local quote collection synchronized with a remote copy.

Periodic and on-demand reconciliation between a local replica and a
remote endpoint: conflict detection by id and timestamp, server-wins
merge, and per-quote manual override.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Record",
    "normalize",
    "Conflict",
    "detect_conflicts",
    "merge_server_into_local",
    "LocalReplica",
    "ConflictSession",
    "SyncEngine",
    "SyncResult",
    "SyncScheduler",
    "RemoteReplica",
    "create_remote",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("Record", "normalize"):
        from quotesync import record

        return getattr(record, name)
    if name in (
        "Conflict",
        "detect_conflicts",
        "merge_server_into_local",
        "LocalReplica",
        "ConflictSession",
        "SyncEngine",
        "SyncResult",
        "SyncScheduler",
    ):
        from quotesync import sync

        return getattr(sync, name)
    if name in ("RemoteReplica", "create_remote"):
        from quotesync import transport

        return getattr(transport, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
