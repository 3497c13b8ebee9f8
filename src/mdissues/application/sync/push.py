"""
Push Reconciler - Apply locally changed issue files to the remote tracker.

Each change record is handled in isolation: a failure is logged and
collected in the result, and the batch moves on to the next record.
On push the local file is authoritative for title, body and state.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ...core.domain.entities import ChangeRecord, IssueDocument, IssueState
from ...core.domain.events import (
    EventBus,
    IssueCreated,
    IssueFileRenamed,
    IssueStateChanged,
    IssueUpdated,
    PushFailed,
)
from ...core.domain.naming import canonical_filename, find_issue_files, parse_issue_number
from ...core.exceptions import FrontmatterError
from ...core.ports.config_provider import SyncConfig
from ...core.ports.issue_tracker import IssueTrackerPort
from ...adapters.parsers.frontmatter import FrontmatterCodec


@dataclass
class PushResult:
    """Outcome of a push, including per-file failures."""

    processed: int = 0
    created: int = 0
    updated: int = 0
    closed: int = 0
    reopened: int = 0
    renamed: int = 0
    skipped: int = 0
    failures: list[tuple[Path, Exception]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    def add_failure(self, path: Path, error: Exception) -> None:
        self.failures.append((path, error))

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class PushReconciler:
    """
    Creates, updates, closes and reopens remote issues from local files.

    Only files with the tracked extension directly inside the open or
    closed directory are considered; other change records are ignored.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        config: SyncConfig,
        codec: Optional[FrontmatterCodec] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.tracker = tracker
        self.config = config
        self.codec = codec or FrontmatterCodec()
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("PushReconciler")

    # -------------------------------------------------------------------------
    # Main Entry Points
    # -------------------------------------------------------------------------

    def reconcile(self, changes: Iterable[ChangeRecord]) -> PushResult:
        """Apply every tracked change record in order."""
        result = PushResult()

        for record in changes:
            if not self.is_tracked(record.path):
                continue

            result.processed += 1
            self.logger.info(f"Processing {record.path} (status: {record.status.value})")
            try:
                if record.is_deleted:
                    self._handle_deleted(record.path, result)
                else:
                    self._handle_changed(record.path, result)
            except Exception as e:
                self.logger.error(f"Error handling {record.status.value} file {record.path}: {e}")
                result.add_failure(record.path, e)
                self.event_bus.publish(PushFailed(path=record.path, error=str(e)))

        return result

    def is_tracked(self, path: Path) -> bool:
        """True for tracked-extension files directly inside a tracked directory."""
        if path.suffix != self.config.extension:
            return False
        parent = path.parent.resolve()
        return any(parent == d.resolve() for d in self.config.tracked_dirs)

    # -------------------------------------------------------------------------
    # Deletions
    # -------------------------------------------------------------------------

    def _handle_deleted(self, path: Path, result: PushResult) -> None:
        """Close the issue behind a deleted file. Never deletes remotely."""
        number = parse_issue_number(path.name)
        if number is None:
            self.logger.info(f"Skipping deleted file {path} (name is not an issue number)")
            result.skipped += 1
            return

        # A rename or a move between directories shows up as a deletion
        # plus a new file; the surviving file decides the state.
        survivors = self._files_for(number)
        if survivors:
            self.logger.info(
                f"Issue #{number} is still tracked in {survivors[0]}; not closing"
            )
            result.skipped += 1
            return

        state = self.tracker.get_issue_state(number)
        if state is IssueState.OPEN:
            self.logger.info(f"Closing issue #{number}...")
            self.tracker.close_issue(number)
            result.closed += 1
            self.event_bus.publish(IssueStateChanged(
                issue_number=number,
                from_state=IssueState.OPEN.value,
                to_state=IssueState.CLOSED.value,
            ))
        else:
            self.logger.info(f"Issue #{number} is already closed.")

    # -------------------------------------------------------------------------
    # Additions and Modifications
    # -------------------------------------------------------------------------

    def _handle_changed(self, path: Path, result: PushResult) -> None:
        document = self.codec.parse_file(path)
        if document.is_new:
            self._create(path, document, result)
        else:
            self._update(path, document, result)

    def _create(self, path: Path, document: IssueDocument, result: PushResult) -> None:
        if not document.title.strip():
            raise FrontmatterError(
                f"New file {path} is missing a 'title' in its frontmatter", path=path
            )

        self.logger.info(f"Creating new issue with title: {document.title}")
        number = self.tracker.create_issue(document.title, document.body)
        result.created += 1

        self.logger.info(f"Created issue #{number}. Writing number back to {path}...")
        path.write_text(self.codec.inject_number(document, number), encoding="utf-8")
        self.event_bus.publish(IssueCreated(
            issue_number=number, title=document.title, path=path
        ))

        new_path = path.with_name(
            canonical_filename(number, document.title, self.config.extension)
        )
        if new_path != path:
            self._rename(path, new_path, number, result)

    def _update(self, path: Path, document: IssueDocument, result: PushResult) -> None:
        number = document.number
        if not document.title.strip():
            raise FrontmatterError(f"File {path} for issue #{number} has an empty title", path=path)

        # No comparison against the remote copy: the change detector's
        # flag is taken as-is and title/body are always pushed.
        self.logger.info(f"Updating issue #{number}...")
        self.tracker.edit_issue(number, document.title, document.body)
        result.updated += 1
        self.event_bus.publish(IssueUpdated(issue_number=number, path=path))

        new_path = path.with_name(
            canonical_filename(number, document.title, self.config.extension)
        )
        if new_path != path:
            try:
                self._rename(path, new_path, number, result)
            except OSError as e:
                warning = f"Failed to rename {path} to {new_path}: {e}"
                self.logger.warning(warning)
                result.add_warning(warning)

        remote_state = self.tracker.get_issue_state(number)
        local_state = document.state
        if local_state is None or local_state is remote_state:
            return

        if local_state is IssueState.CLOSED:
            self.logger.info(f"Closing issue #{number}...")
            self.tracker.close_issue(number)
            result.closed += 1
        else:
            self.logger.info(f"Reopening issue #{number}...")
            self.tracker.reopen_issue(number)
            result.reopened += 1

        self.event_bus.publish(IssueStateChanged(
            issue_number=number,
            from_state=remote_state.value,
            to_state=local_state.value,
        ))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _rename(self, path: Path, new_path: Path, number: int, result: PushResult) -> None:
        self.logger.info(f"Renaming {path} to {new_path}")
        path.rename(new_path)
        result.renamed += 1
        self.event_bus.publish(IssueFileRenamed(
            issue_number=number, old_path=path, new_path=new_path
        ))

    def _files_for(self, number: int) -> list[Path]:
        files = []
        for directory in self.config.tracked_dirs:
            files.extend(find_issue_files(number, directory, self.config.extension))
        return files
