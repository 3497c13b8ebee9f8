"""
Domain Events - Things that happened during a sync.

Events are immutable records of something that occurred.
The CLI subscribes to them to report per-file progress.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class IssueFileWritten(DomainEvent):
    """Event: A pulled issue was written to its canonical path."""

    issue_number: int = 0
    path: Optional[Path] = None


@dataclass(frozen=True)
class IssueFileRemoved(DomainEvent):
    """Event: A stale representation of an issue was removed."""

    issue_number: int = 0
    path: Optional[Path] = None


@dataclass(frozen=True)
class IssueFileRenamed(DomainEvent):
    """Event: A local file was renamed to its canonical name."""

    issue_number: int = 0
    old_path: Optional[Path] = None
    new_path: Optional[Path] = None


@dataclass(frozen=True)
class IssueCreated(DomainEvent):
    """Event: A local file was realized as a new remote issue."""

    issue_number: int = 0
    title: str = ""
    path: Optional[Path] = None


@dataclass(frozen=True)
class IssueUpdated(DomainEvent):
    """Event: A remote issue's title and body were pushed."""

    issue_number: int = 0
    path: Optional[Path] = None


@dataclass(frozen=True)
class IssueStateChanged(DomainEvent):
    """Event: A remote issue was closed or reopened."""

    issue_number: int = 0
    from_state: str = ""
    to_state: str = ""


@dataclass(frozen=True)
class PushFailed(DomainEvent):
    """Event: Pushing a single file failed; the batch continued."""

    path: Optional[Path] = None
    error: str = ""


@dataclass(frozen=True)
class SyncStarted(DomainEvent):
    """Event: A pull or push started."""

    direction: str = ""  # pull, push
    repository: str = ""


@dataclass(frozen=True)
class SyncCompleted(DomainEvent):
    """Event: A pull or push completed."""

    direction: str = ""
    repository: str = ""
    files_written: int = 0
    issues_created: int = 0
    issues_updated: int = 0
    errors: list = field(default_factory=list)


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    This enables loose coupling between components.
    """

    def __init__(self):
        self._handlers: dict[type, list] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)

        # Call specific handlers
        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Call catch-all handlers
        for handler in self._handlers.get(DomainEvent, []):
            handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
