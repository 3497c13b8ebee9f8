"""
Git Adapter - Change detection and repository resolution via the git CLI.
"""

from .status import GitChangeDetector, parse_porcelain
from .remote import repository_from_remote

__all__ = ["GitChangeDetector", "parse_porcelain", "repository_from_remote"]
