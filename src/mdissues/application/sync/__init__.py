"""
Sync Module - Reconciliation between the issue tracker and local files.
"""

from .orchestrator import SyncOrchestrator, SyncResult
from .pull import PullReconciler, PullResult
from .push import PushReconciler, PushResult
from .state import TimestampStore

__all__ = [
    "SyncOrchestrator",
    "SyncResult",
    "PullReconciler",
    "PullResult",
    "PushReconciler",
    "PushResult",
    "TimestampStore",
]
