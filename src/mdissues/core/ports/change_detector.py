"""
Change Detector Port - Abstract interface for finding locally changed files.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from ..domain.entities import ChangeRecord
from ..exceptions import MdIssuesError


class ChangeDetectionError(MdIssuesError):
    """The change detection facility could not be invoked."""


class ChangeDetectorPort(ABC):
    """
    Abstract interface for listing changed files under some paths.

    Implementations: GitChangeDetector.
    """

    @abstractmethod
    def list_changes(self, paths: Sequence[Path]) -> list[ChangeRecord]:
        """
        List added, modified and deleted files under ``paths``.

        Args:
            paths: Directories to scope the query to

        Returns:
            Change records with absolute paths

        Raises:
            ChangeDetectionError: If the facility cannot be run
        """
        ...
