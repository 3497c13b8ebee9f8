"""Tests for the sync orchestrator."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from mdissues.application.sync import SyncOrchestrator
from mdissues.core.domain.entities import ChangeRecord, ChangeStatus, Issue, IssueState
from mdissues.core.domain.events import EventBus, SyncCompleted, SyncStarted
from mdissues.core.exceptions import PullError, SyncError
from mdissues.core.ports.change_detector import ChangeDetectionError, ChangeDetectorPort
from mdissues.core.ports.issue_tracker import IssueTrackerError


@pytest.fixture
def detector():
    detector = Mock(spec=ChangeDetectorPort)
    detector.list_changes.return_value = []
    return detector


@pytest.fixture
def orchestrator(tracker, sync_config, detector):
    return SyncOrchestrator(tracker, sync_config, change_detector=detector, repository="octo/repo")


class TestPull:
    """Tests for SyncOrchestrator.pull."""

    def test_first_pull_fetches_full_history(self, orchestrator, tracker):
        orchestrator.pull()

        tracker.list_changed_since.assert_called_once_with(None)

    def test_uses_saved_watermark(self, orchestrator, tracker, sync_config):
        sync_config.state_file.write_text("2024-05-01T10:00:00Z")

        orchestrator.pull()

        tracker.list_changed_since.assert_called_once_with(
            datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        )

    def test_writes_files_and_commits_watermark(self, orchestrator, tracker, sync_config):
        tracker.list_changed_since.return_value = [
            Issue(number=1, title="One"),
            Issue(number=2, title="Two", state=IssueState.CLOSED),
        ]

        result = orchestrator.pull()

        assert result.success
        assert result.issues_fetched == 2
        assert result.files_written == 2
        assert (sync_config.open_dir / "1-one.md").exists()
        assert (sync_config.closed_dir / "2-two.md").exists()
        saved = sync_config.state_file.read_text()
        assert saved.endswith("Z")
        assert result.last_sync is not None

    def test_empty_batch_still_commits_watermark(self, orchestrator, sync_config):
        orchestrator.pull()

        assert sync_config.state_file.exists()

    def test_fetch_failure_raises_sync_error(self, orchestrator, tracker, sync_config):
        tracker.list_changed_since.side_effect = IssueTrackerError("bad credentials")

        with pytest.raises(SyncError) as excinfo:
            orchestrator.pull()

        assert excinfo.value.phase == "pull"
        assert not sync_config.state_file.exists()

    def test_write_failure_keeps_old_watermark(self, orchestrator, tracker, sync_config):
        sync_config.state_file.write_text("2024-05-01T10:00:00Z")
        (sync_config.open_dir / "1-blocked.md").mkdir()
        tracker.list_changed_since.return_value = [Issue(number=1, title="Blocked")]

        with pytest.raises(SyncError) as excinfo:
            orchestrator.pull()

        assert isinstance(excinfo.value.cause, PullError)
        assert str(excinfo.value).startswith("[pull octo/repo] ")
        assert sync_config.state_file.read_text() == "2024-05-01T10:00:00Z"

    def test_corrupt_watermark_fetches_full_history(self, orchestrator, tracker, sync_config):
        sync_config.state_file.write_text("not a timestamp")

        orchestrator.pull()

        tracker.list_changed_since.assert_called_once_with(None)

    def test_unreadable_watermark_fetches_full_history(self, tracker, sync_config):
        # A directory on the state path cannot be read or replaced
        sync_config.state_file.mkdir()
        orchestrator = SyncOrchestrator(tracker, sync_config, repository="octo/repo")

        with pytest.raises(SyncError) as excinfo:
            orchestrator.pull()

        tracker.list_changed_since.assert_called_once_with(None)
        assert excinfo.value.phase == "pull"
        assert isinstance(excinfo.value.cause, OSError)

    def test_publishes_sync_events(self, tracker, sync_config):
        bus = EventBus()
        orchestrator = SyncOrchestrator(tracker, sync_config, event_bus=bus)

        orchestrator.pull()

        assert [type(e) for e in bus.get_history()] == [SyncStarted, SyncCompleted]


class TestPush:
    """Tests for SyncOrchestrator.push."""

    def test_asks_detector_for_tracked_dirs(self, orchestrator, detector, sync_config):
        orchestrator.push()

        detector.list_changes.assert_called_once_with(sync_config.tracked_dirs)

    def test_aggregates_results(self, orchestrator, tracker, detector, sync_config):
        good = sync_config.open_dir / "new.md"
        good.write_text("---\ntitle: New\n---\n")
        bad = sync_config.open_dir / "broken.md"
        bad.write_text("no frontmatter")
        detector.list_changes.return_value = [
            ChangeRecord(ChangeStatus.ADDED, bad),
            ChangeRecord(ChangeStatus.ADDED, good),
        ]

        result = orchestrator.push()

        assert result.files_processed == 2
        assert result.issues_created == 1
        assert result.files_renamed == 1
        assert not result.success
        assert [path for path, _ in result.failures] == [bad]
        assert "title" in result.failures[0][1]

    def test_detector_failure_raises_sync_error(self, orchestrator, detector, tracker):
        detector.list_changes.side_effect = ChangeDetectionError("not a git repository")

        with pytest.raises(SyncError) as excinfo:
            orchestrator.push()

        assert excinfo.value.phase == "push"
        tracker.create_issue.assert_not_called()

    def test_push_without_detector(self, tracker, sync_config):
        orchestrator = SyncOrchestrator(tracker, sync_config)

        with pytest.raises(SyncError):
            orchestrator.push()

    def test_push_does_not_touch_watermark(self, orchestrator, sync_config):
        orchestrator.push()

        assert not sync_config.state_file.exists()
