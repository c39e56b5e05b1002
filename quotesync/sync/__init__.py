# quotesync Sync Module
# Reconciliation engine and components

from quotesync.sync.collaborators import Display, ReplicaStore, StatusLevel
from quotesync.sync.engine import CycleStatus, SyncEngine, SyncResult
from quotesync.sync.reconciler import Conflict, detect_conflicts, merge_server_into_local
from quotesync.sync.replica import LocalReplica
from quotesync.sync.scheduler import SchedulerState, SyncScheduler
from quotesync.sync.session import ConflictSession
from quotesync.sync.state import SyncSessionState

__all__ = [
    # Collaborators
    "Display",
    "ReplicaStore",
    "StatusLevel",
    # Reconciler
    "Conflict",
    "detect_conflicts",
    "merge_server_into_local",
    # State
    "LocalReplica",
    "SyncSessionState",
    # Session
    "ConflictSession",
    # Engine
    "SyncEngine",
    "SyncResult",
    "CycleStatus",
    # Scheduler
    "SyncScheduler",
    "SchedulerState",
]
