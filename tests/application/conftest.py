"""Shared fixtures for application tests."""

from unittest.mock import Mock

import pytest

from mdissues.core.domain.entities import IssueState
from mdissues.core.ports.config_provider import SyncConfig
from mdissues.core.ports.issue_tracker import IssueTrackerPort


@pytest.fixture
def sync_config(tmp_path):
    config = SyncConfig(root=tmp_path)
    config.ensure_dirs()
    return config


@pytest.fixture
def open_dir(sync_config):
    return sync_config.open_dir


@pytest.fixture
def closed_dir(sync_config):
    return sync_config.closed_dir


@pytest.fixture
def tracker():
    tracker = Mock(spec=IssueTrackerPort)
    tracker.get_issue_state.return_value = IssueState.OPEN
    tracker.create_issue.return_value = 101
    tracker.list_changed_since.return_value = []
    return tracker


@pytest.fixture
def snapshot():
    """Relative path -> content for every file under a directory."""

    def take(root):
        return {
            str(p.relative_to(root)): p.read_text()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return take
