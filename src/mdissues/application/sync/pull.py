"""
Pull Reconciler - Materialize remote issues as canonically named files.

For each issue the target directory follows the remote state and every
other representation of the same number is purged before the canonical
file is written. Cleanup is recomputed from the directories for every
issue, so issues in a batch may appear in any order.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ...core.domain.entities import Issue
from ...core.domain.events import EventBus, IssueFileRemoved, IssueFileWritten
from ...core.domain.naming import canonical_filename, find_issue_files
from ...core.exceptions import PullError
from ...core.ports.config_provider import SyncConfig
from ...adapters.parsers.frontmatter import FrontmatterCodec


@dataclass
class PullResult:
    """Files touched by a pull."""

    written: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)

    @property
    def files_written(self) -> int:
        return len(self.written)


class PullReconciler:
    """
    Writes pulled issues into the open/closed directories.

    Any filesystem failure raises PullError and stops the batch; the caller
    must then leave the sync watermark untouched.
    """

    def __init__(
        self,
        config: SyncConfig,
        codec: Optional[FrontmatterCodec] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.config = config
        self.codec = codec or FrontmatterCodec()
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("PullReconciler")

    def reconcile(self, issues: Iterable[Issue]) -> PullResult:
        """
        Apply every issue in order.

        Raises:
            PullError: On the first write or removal failure
        """
        result = PullResult()

        try:
            self.config.ensure_dirs()
        except OSError as e:
            raise PullError(f"Could not create issue directories: {e}", cause=e)

        for issue in issues:
            self.apply(issue, result)

        return result

    def apply(self, issue: Issue, result: Optional[PullResult] = None) -> Path:
        """Purge stale files for one issue and write its canonical file."""
        result = result if result is not None else PullResult()
        content = self.codec.render_issue(issue)
        extension = self.config.extension

        if issue.is_open:
            target_dir, old_dir = self.config.open_dir, self.config.closed_dir
        else:
            target_dir, old_dir = self.config.closed_dir, self.config.open_dir

        filename = canonical_filename(issue.number, issue.title, extension)

        # Leaving a directory invalidates every representation in it
        for stale in find_issue_files(issue.number, old_dir, extension):
            self._remove(stale, issue, result)

        # Title changes leave differently slugged files behind
        for stale in find_issue_files(issue.number, target_dir, extension):
            if stale.name != filename:
                self._remove(stale, issue, result)

        path = target_dir / filename
        self.logger.info(f"Writing file: {path}")
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PullError(
                f"Failed to write file {path}: {e}",
                path=path,
                issue_number=issue.number,
                cause=e,
            )

        result.written.append(path)
        self.event_bus.publish(IssueFileWritten(issue_number=issue.number, path=path))
        return path

    def _remove(self, path: Path, issue: Issue, result: PullResult) -> None:
        self.logger.info(f"Removing old file: {path}")
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise PullError(
                f"Failed to remove file {path}: {e}",
                path=path,
                issue_number=issue.number,
                cause=e,
            )

        result.removed.append(path)
        self.event_bus.publish(IssueFileRemoved(issue_number=issue.number, path=path))
