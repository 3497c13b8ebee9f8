"""
Exceptions - Centralized exception hierarchy for md-issues.

Fatal errors (configuration, environment, pull failures) propagate to the CLI
and terminate the command. Per-file push errors are caught at the record
boundary and collected instead of raised.
"""

from pathlib import Path
from typing import Optional


class MdIssuesError(Exception):
    """Base class for all md-issues errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigError(MdIssuesError):
    """Configuration is missing or invalid."""


class FrontmatterError(MdIssuesError):
    """A document is missing a field required for the requested operation."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class SyncError(MdIssuesError):
    """A sync phase failed in a way that aborts the whole command."""

    def __init__(
        self,
        message: str,
        phase: str = "",
        repository: str = "",
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.phase = phase
        self.repository = repository

    def __str__(self) -> str:
        context = " ".join(part for part in (self.phase, self.repository) if part)
        if context:
            return f"[{context}] {self.message}"
        return self.message


class PullError(MdIssuesError):
    """Writing or removing a local file failed during pull."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        issue_number: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path
        self.issue_number = issue_number


__all__ = [
    "MdIssuesError",
    "ConfigError",
    "FrontmatterError",
    "SyncError",
    "PullError",
]
