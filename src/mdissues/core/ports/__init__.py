"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .issue_tracker import (
    IssueTrackerPort,
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
    RateLimitError,
)
from .change_detector import ChangeDetectorPort, ChangeDetectionError
from .config_provider import ConfigProviderPort, AppConfig, TrackerConfig, SyncConfig

__all__ = [
    "IssueTrackerPort",
    "IssueTrackerError",
    "AuthenticationError",
    "NotFoundError",
    "PermissionError",
    "RateLimitError",
    "ChangeDetectorPort",
    "ChangeDetectionError",
    "ConfigProviderPort",
    "AppConfig",
    "TrackerConfig",
    "SyncConfig",
]
