"""
Domain Entities - Issues, local documents, and change records.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class IssueState(Enum):
    """Remote issue state. Also decides which directory holds the file."""

    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["IssueState"]:
        """Parse a state string, returning None for empty or unknown values."""
        if not value:
            return None
        value = value.strip().lower()
        for state in cls:
            if state.value == value:
                return state
        return None

    def __str__(self) -> str:
        return self.value


class ChangeStatus(Enum):
    """Modification class of a local file since the last checkpoint."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass
class Issue:
    """An issue as seen on the remote store."""

    number: int
    title: str
    body: str = ""
    state: IssueState = IssueState.OPEN
    labels: list[str] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.state is IssueState.OPEN


@dataclass
class IssueDocument:
    """
    Typed view of a local issue file.

    Only number, title, state and labels are modeled. Any other metadata
    fields land in ``extra`` for inspection, but survive a rewrite only via
    ``raw_metadata`` (the untouched text between the markers).
    """

    number: Optional[int] = None
    title: str = ""
    state: Optional[IssueState] = None
    labels: list[str] = field(default_factory=list)
    extra: dict[str, str] = field(default_factory=dict)
    body: str = ""
    raw_metadata: str = ""

    @property
    def is_new(self) -> bool:
        """True if the issue has not been created remotely yet."""
        return self.number is None

    @classmethod
    def from_issue(cls, issue: Issue) -> "IssueDocument":
        return cls(
            number=issue.number,
            title=issue.title,
            state=issue.state,
            labels=list(issue.labels),
            body=issue.body or "",
        )


@dataclass(frozen=True)
class ChangeRecord:
    """A (status, path) pair reported by the change detector."""

    status: ChangeStatus
    path: Path

    @property
    def is_deleted(self) -> bool:
        return self.status is ChangeStatus.DELETED
