"""
Application Layer - Use cases and orchestration.

This layer contains:
- sync/: Pull and push reconcilers, watermark store, orchestrator
"""

from .sync import (
    SyncOrchestrator,
    SyncResult,
    PullReconciler,
    PushReconciler,
    TimestampStore,
)

__all__ = [
    "SyncOrchestrator",
    "SyncResult",
    "PullReconciler",
    "PushReconciler",
    "TimestampStore",
]
