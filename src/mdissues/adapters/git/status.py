"""
Git Change Detector - List changed issue files using ``git status``.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ...core.domain.entities import ChangeRecord, ChangeStatus
from ...core.ports.change_detector import ChangeDetectorPort, ChangeDetectionError


class GitChangeDetector(ChangeDetectorPort):
    """
    ChangeDetectorPort backed by ``git status --porcelain -z``.

    Untracked files count as added. A rename reports only its new path,
    as modified, so the issue it belongs to is not closed.
    """

    def __init__(self, root: Path, git: str = "git"):
        self.root = Path(root)
        self.git = git
        self.logger = logging.getLogger("GitChangeDetector")
        self._toplevel: Optional[Path] = None

    def list_changes(self, paths: Sequence[Path]) -> list[ChangeRecord]:
        toplevel = self.toplevel()
        output = self._run(
            "status", "--porcelain", "-z", "--untracked-files=all",
            "--", *[str(p) for p in paths],
        )
        records = parse_porcelain(output, toplevel)
        self.logger.debug(f"git status reported {len(records)} changed paths")
        return records

    def toplevel(self) -> Path:
        """Root of the working tree; porcelain paths are relative to it."""
        if self._toplevel is None:
            self._toplevel = Path(self._run("rev-parse", "--show-toplevel").strip())
        return self._toplevel

    def remote_url(self, remote: str = "origin") -> str:
        return self._run("remote", "get-url", remote).strip()

    def _run(self, *args: str) -> str:
        command = [self.git, *args]
        try:
            result = subprocess.run(
                command,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ChangeDetectionError(f"Could not run {self.git}: {e}", cause=e)

        if result.returncode != 0:
            raise ChangeDetectionError(
                f"'{' '.join(command)}' failed: {result.stderr.strip()}"
            )
        return result.stdout


def parse_porcelain(output: str, toplevel: Path) -> list[ChangeRecord]:
    """
    Parse ``git status --porcelain -z`` output into change records.

    Each entry is ``XY PATH``; renames and copies are followed by an extra
    NUL-terminated original path.
    """
    records = []
    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue

        xy, path = entry[:2], entry[3:]
        if "R" in xy or "C" in xy:
            # Skip the original path
            i += 1

        records.append(ChangeRecord(status=_status_for(xy), path=toplevel / path))
    return records


def _status_for(xy: str) -> ChangeStatus:
    if xy == "??":
        return ChangeStatus.ADDED
    if "D" in xy:
        return ChangeStatus.DELETED
    if "A" in xy or "C" in xy:
        return ChangeStatus.ADDED
    return ChangeStatus.MODIFIED
