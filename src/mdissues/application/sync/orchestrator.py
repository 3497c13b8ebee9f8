"""
Sync Orchestrator - Coordinates the pull and push flows.

This is the main entry point for sync operations.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...core.domain.clock import utc_now
from ...core.domain.events import EventBus, SyncCompleted, SyncStarted
from ...core.exceptions import PullError, SyncError
from ...core.ports.change_detector import ChangeDetectorPort, ChangeDetectionError
from ...core.ports.config_provider import SyncConfig
from ...core.ports.issue_tracker import IssueTrackerPort, IssueTrackerError
from ...adapters.parsers.frontmatter import FrontmatterCodec
from .pull import PullReconciler
from .push import PushReconciler
from .state import TimestampStore


@dataclass
class SyncResult:
    """Result of a pull or push."""

    direction: str = ""
    success: bool = True

    # Counts
    issues_fetched: int = 0
    files_written: int = 0
    files_removed: int = 0
    files_processed: int = 0
    issues_created: int = 0
    issues_updated: int = 0
    issues_closed: int = 0
    issues_reopened: int = 0
    files_renamed: int = 0

    # Details
    last_sync: Optional[str] = None
    failures: list[tuple[Path, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_failure(self, path: Path, error: str) -> None:
        """Record a per-file failure."""
        self.failures.append((path, error))
        self.success = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)


class SyncOrchestrator:
    """
    Orchestrates synchronization between the issue tracker and local files.

    Pull:
    1. Load the watermark
    2. Fetch issues changed since then
    3. Reconcile them into the directories
    4. Commit the new watermark (only if every file was written)

    Push:
    1. Ask the change detector for changed files
    2. Reconcile each one against the tracker
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        config: SyncConfig,
        change_detector: Optional[ChangeDetectorPort] = None,
        codec: Optional[FrontmatterCodec] = None,
        state_store: Optional[TimestampStore] = None,
        event_bus: Optional[EventBus] = None,
        repository: str = "",
    ):
        """
        Initialize the orchestrator.

        Args:
            tracker: Issue tracker port
            config: Local layout configuration
            change_detector: Change detector port (required for push)
            codec: Frontmatter codec
            state_store: Watermark store (defaults to config.state_file)
            event_bus: Optional event bus
            repository: Repository name used in error context
        """
        self.tracker = tracker
        self.config = config
        self.change_detector = change_detector
        self.codec = codec or FrontmatterCodec()
        self.state_store = state_store or TimestampStore(config.state_file)
        self.event_bus = event_bus or EventBus()
        self.repository = repository
        self.logger = logging.getLogger("SyncOrchestrator")

    # -------------------------------------------------------------------------
    # Main Entry Points
    # -------------------------------------------------------------------------

    def pull(self) -> SyncResult:
        """
        Pull remote changes into local files.

        Raises:
            SyncError: If the tracker cannot be queried, or a file or the
                sync state cannot be written
        """
        result = SyncResult(direction="pull")
        self.event_bus.publish(SyncStarted(direction="pull", repository=self.repository))

        last_sync = self.state_store.load()
        # Captured before fetching so changes made during the fetch are re-pulled
        new_sync_time = utc_now()

        try:
            issues = self.tracker.list_changed_since(last_sync)
        except IssueTrackerError as e:
            raise SyncError(
                f"Could not fetch issues: {e}",
                phase="pull",
                repository=self.repository,
                cause=e,
            )

        result.issues_fetched = len(issues)
        if issues:
            self.logger.info(f"Found {len(issues)} issues to update...")
            reconciler = PullReconciler(self.config, self.codec, self.event_bus)
            try:
                pulled = reconciler.reconcile(issues)
            except PullError as e:
                raise SyncError(
                    str(e),
                    phase="pull",
                    repository=self.repository,
                    cause=e,
                )
            result.files_written = pulled.files_written
            result.files_removed = len(pulled.removed)
        else:
            self.logger.info("No new issues found.")

        try:
            self.state_store.save(new_sync_time)
        except OSError as e:
            raise SyncError(
                f"Could not save sync state to {self.state_store.path}: {e}",
                phase="pull",
                repository=self.repository,
                cause=e,
            )
        result.last_sync = new_sync_time.isoformat()

        self._publish_completed(result)
        return result

    def push(self) -> SyncResult:
        """
        Push local file changes to the tracker.

        Per-file failures are collected in the result, not raised.

        Raises:
            SyncError: If the change detector cannot be run
        """
        if self.change_detector is None:
            raise SyncError("No change detector configured", phase="push")

        result = SyncResult(direction="push")
        self.event_bus.publish(SyncStarted(direction="push", repository=self.repository))

        try:
            self.config.ensure_dirs()
            changes = self.change_detector.list_changes(self.config.tracked_dirs)
        except (ChangeDetectionError, OSError) as e:
            raise SyncError(
                f"Could not list changed files: {e}",
                phase="push",
                repository=self.repository,
                cause=e,
            )

        if not changes:
            self.logger.info("No modified files found. Nothing to push.")

        reconciler = PushReconciler(self.tracker, self.config, self.codec, self.event_bus)
        pushed = reconciler.reconcile(changes)

        result.files_processed = pushed.processed
        result.issues_created = pushed.created
        result.issues_updated = pushed.updated
        result.issues_closed = pushed.closed
        result.issues_reopened = pushed.reopened
        result.files_renamed = pushed.renamed
        for warning in pushed.warnings:
            result.add_warning(warning)
        for path, error in pushed.failures:
            result.add_failure(path, str(error))

        self._publish_completed(result)
        return result

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _publish_completed(self, result: SyncResult) -> None:
        self.event_bus.publish(SyncCompleted(
            direction=result.direction,
            repository=self.repository,
            files_written=result.files_written,
            issues_created=result.issues_created,
            issues_updated=result.issues_updated,
            errors=[f"{path}: {error}" for path, error in result.failures],
        ))
