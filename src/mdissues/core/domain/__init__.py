"""
Domain - Entities, naming rules, and events.
"""

from .entities import ChangeRecord, ChangeStatus, Issue, IssueDocument, IssueState
from .clock import format_timestamp, parse_timestamp, utc_now
from .naming import (
    DEFAULT_EXTENSION,
    canonical_filename,
    find_issue_files,
    legacy_filename,
    parse_issue_number,
    slugify,
)
from .events import (
    DomainEvent,
    EventBus,
    IssueCreated,
    IssueFileRemoved,
    IssueFileRenamed,
    IssueFileWritten,
    IssueStateChanged,
    IssueUpdated,
    PushFailed,
    SyncCompleted,
    SyncStarted,
)

__all__ = [
    "format_timestamp",
    "parse_timestamp",
    "utc_now",
    "ChangeRecord",
    "ChangeStatus",
    "Issue",
    "IssueDocument",
    "IssueState",
    "DEFAULT_EXTENSION",
    "canonical_filename",
    "find_issue_files",
    "legacy_filename",
    "parse_issue_number",
    "slugify",
    "DomainEvent",
    "EventBus",
    "IssueCreated",
    "IssueFileRemoved",
    "IssueFileRenamed",
    "IssueFileWritten",
    "IssueStateChanged",
    "IssueUpdated",
    "PushFailed",
    "SyncCompleted",
    "SyncStarted",
]
