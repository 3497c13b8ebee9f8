"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Issue Trackers: GitHub
- Change Detection: git status
- Parsers: Frontmatter issue files
- Config: Environment variables
"""

from .github import GitHubAdapter
from .git import GitChangeDetector
from .parsers import FrontmatterCodec
from .config import EnvironmentConfigProvider

__all__ = [
    "GitHubAdapter",
    "GitChangeDetector",
    "FrontmatterCodec",
    "EnvironmentConfigProvider",
]
