"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import sys
from typing import Optional, TextIO

from ..application.sync import SyncResult
from ..core.domain.events import (
    DomainEvent,
    EventBus,
    IssueCreated,
    IssueFileRemoved,
    IssueFileRenamed,
    IssueFileWritten,
    IssueStateChanged,
    IssueUpdated,
    PushFailed,
)


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"

    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    MAX_LISTED = 5

    def __init__(self, color: bool = True, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self.color = color and self.stream.isatty()

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        """Print text."""
        print(text, file=self.stream)

    def header(self, text: str) -> None:
        """Print a header."""
        width = max(len(text) + 4, 50)
        border = self._c(Symbols.BOX_H * width, Colors.CYAN) if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        """Print a section header."""
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        """Print success message."""
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """Print error message."""
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        """Print warning message."""
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        """Print info message."""
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        """Print a list item."""
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        # Calculate column widths
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        # Print header
        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        # Print rows
        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def attach(self, event_bus: EventBus) -> None:
        """Report per-file progress for events published on the bus."""
        event_bus.subscribe(DomainEvent, self.on_event)

    def on_event(self, event: DomainEvent) -> None:
        if isinstance(event, IssueFileWritten):
            self.item(f"#{event.issue_number} {event.path}", "ok")
        elif isinstance(event, IssueFileRemoved):
            self.item(f"#{event.issue_number} removed {event.path}", "removed")
        elif isinstance(event, IssueCreated):
            self.item(f"#{event.issue_number} created from {event.path}", "ok")
        elif isinstance(event, IssueUpdated):
            self.item(f"#{event.issue_number} updated from {event.path}", "ok")
        elif isinstance(event, IssueFileRenamed):
            self.item(f"#{event.issue_number} {event.old_path} {Symbols.ARROW} {event.new_path}", "renamed")
        elif isinstance(event, IssueStateChanged):
            self.item(f"#{event.issue_number} {event.from_state} {Symbols.ARROW} {event.to_state}", "ok")
        elif isinstance(event, PushFailed):
            self.item(f"{event.path}: {event.error}", "fail")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def sync_result(self, result: SyncResult) -> None:
        """Print sync result summary."""
        self.section(f"{result.direction.capitalize()} Summary")
        self.print()

        if result.direction == "pull":
            stats = [
                ["Issues Fetched", str(result.issues_fetched)],
                ["Files Written", str(result.files_written)],
                ["Stale Files Removed", str(result.files_removed)],
            ]
        else:
            stats = [
                ["Files Processed", str(result.files_processed)],
                ["Issues Created", str(result.issues_created)],
                ["Issues Updated", str(result.issues_updated)],
                ["Issues Closed", str(result.issues_closed)],
                ["Issues Reopened", str(result.issues_reopened)],
                ["Files Renamed", str(result.files_renamed)],
            ]

        self.table(["Metric", "Count"], stats)

        # Warnings
        if result.warnings:
            self.print()
            self.warning(f"{len(result.warnings)} warning(s):")
            for w in result.warnings[:self.MAX_LISTED]:
                self.detail(w)
            if len(result.warnings) > self.MAX_LISTED:
                self.detail(f"... and {len(result.warnings) - self.MAX_LISTED} more")

        # Failures
        if result.failures:
            self.print()
            self.error(f"{len(result.failures)} file(s) failed:")
            for path, error in result.failures[:self.MAX_LISTED]:
                self.detail(f"{path}: {error}")
            if len(result.failures) > self.MAX_LISTED:
                self.detail(f"... and {len(result.failures) - self.MAX_LISTED} more")

        # Final status
        self.print()
        if result.last_sync:
            self.info(f"Sync state updated to {result.last_sync}")
        if result.success:
            self.success(f"{result.direction.capitalize()} complete.")
        else:
            self.warning(f"{result.direction.capitalize()} completed with errors")
