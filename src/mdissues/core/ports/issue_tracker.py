"""
Issue Tracker Port - Abstract interface for the remote issue store.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..domain.entities import Issue, IssueState
from ..exceptions import MdIssuesError


class IssueTrackerError(MdIssuesError):
    """Base error for issue tracker operations."""

    def __init__(
        self,
        message: str,
        issue_number: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.issue_number = issue_number


class AuthenticationError(IssueTrackerError):
    """Credentials were rejected."""


class NotFoundError(IssueTrackerError):
    """Repository or issue not found."""


class PermissionError(IssueTrackerError):
    """Authenticated, but not allowed to perform the operation."""


class RateLimitError(IssueTrackerError):
    """API rate limit exhausted."""


class IssueTrackerPort(ABC):
    """
    Abstract interface for a numbered issue store.

    Implementations: GitHubAdapter. Tests use mocks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable tracker name."""
        ...

    @abstractmethod
    def test_connection(self) -> bool:
        """Check that the tracker is reachable with the configured credentials."""
        ...

    @abstractmethod
    def list_changed_since(self, since: Optional[datetime]) -> list[Issue]:
        """
        List issues (open and closed) updated since a cutoff.

        Args:
            since: Lower bound, or None for the full history

        Returns:
            Issues in the order the tracker reports them
        """
        ...

    @abstractmethod
    def get_issue_state(self, number: int) -> IssueState:
        ...

    @abstractmethod
    def create_issue(self, title: str, body: str) -> int:
        """Create an issue and return its assigned number."""
        ...

    @abstractmethod
    def edit_issue(self, number: int, title: str, body: str) -> None:
        ...

    @abstractmethod
    def close_issue(self, number: int) -> None:
        ...

    @abstractmethod
    def reopen_issue(self, number: int) -> None:
        ...
