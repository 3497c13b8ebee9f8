"""Tests for the GitHub adapter and API client."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
import requests

from mdissues.adapters.github import GitHubAdapter, GitHubApiClient
from mdissues.core.domain.entities import IssueState
from mdissues.core.ports.config_provider import TrackerConfig
from mdissues.core.ports.issue_tracker import (
    AuthenticationError,
    IssueTrackerError,
    NotFoundError,
    PermissionError,
    RateLimitError,
)


def make_response(status=200, payload=None, headers=None, links=None):
    response = Mock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400
    response.text = "" if payload is None else "payload"
    response.json.return_value = payload
    response.headers = headers or {}
    response.links = links or {}
    return response


class TestGitHubAdapter:
    """Tests for GitHubAdapter."""

    @pytest.fixture
    def client(self):
        return Mock(spec=GitHubApiClient)

    @pytest.fixture
    def adapter(self, client):
        config = TrackerConfig(token="t", repository="octo/repo")
        return GitHubAdapter(config, client=client)

    def test_list_changed_since_full_history(self, adapter, client):
        client.get_paginated.return_value = [
            {
                "number": 1,
                "title": "First",
                "body": None,
                "state": "open",
                "labels": [{"name": "bug"}, {"name": "ui"}],
            },
            {"number": 2, "title": "A PR", "state": "open", "pull_request": {}},
            {"number": 3, "title": "Done", "body": "b", "state": "closed", "labels": []},
        ]

        issues = adapter.list_changed_since(None)

        client.get_paginated.assert_called_once_with(
            "repos/octo/repo/issues",
            params={"state": "all", "per_page": 100},
        )
        assert [i.number for i in issues] == [1, 3]
        assert issues[0].body == ""
        assert issues[0].labels == ["bug", "ui"]
        assert issues[1].state is IssueState.CLOSED

    def test_list_changed_since_passes_cutoff(self, adapter, client):
        client.get_paginated.return_value = []

        adapter.list_changed_since(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

        _, kwargs = client.get_paginated.call_args
        assert kwargs["params"]["since"] == "2024-01-02T03:04:05Z"

    def test_get_issue_state(self, adapter, client):
        client.get.return_value = {"number": 7, "state": "closed"}

        assert adapter.get_issue_state(7) is IssueState.CLOSED
        client.get.assert_called_once_with("repos/octo/repo/issues/7")

    def test_get_issue_state_unexpected_value(self, adapter, client):
        client.get.return_value = {"state": "weird"}

        with pytest.raises(IssueTrackerError):
            adapter.get_issue_state(7)

    def test_create_issue_returns_number(self, adapter, client):
        client.post.return_value = {"number": 57}

        assert adapter.create_issue("New Idea", "body") == 57
        client.post.assert_called_once_with(
            "repos/octo/repo/issues",
            json={"title": "New Idea", "body": "body"},
        )

    def test_create_issue_without_number_fails(self, adapter, client):
        client.post.return_value = {}

        with pytest.raises(IssueTrackerError):
            adapter.create_issue("New Idea", "body")

    def test_edit_issue(self, adapter, client):
        adapter.edit_issue(4, "Title", "Body")

        client.patch.assert_called_once_with(
            "repos/octo/repo/issues/4",
            json={"title": "Title", "body": "Body"},
        )

    def test_close_and_reopen(self, adapter, client):
        adapter.close_issue(4)
        adapter.reopen_issue(4)

        assert client.patch.call_args_list[0].kwargs == {"json": {"state": "closed"}}
        assert client.patch.call_args_list[1].kwargs == {"json": {"state": "open"}}


class TestGitHubApiClient:
    """Tests for GitHubApiClient."""

    @pytest.fixture
    def client(self):
        client = GitHubApiClient(token="secret", base_url="https://api.example.com/")
        client._session = Mock()
        return client

    def test_headers(self):
        client = GitHubApiClient(token="secret")

        assert client.headers["Authorization"] == "Bearer secret"
        assert client.headers["Accept"] == "application/vnd.github+json"

    def test_get_builds_url(self, client):
        client._session.request.return_value = make_response(payload={"ok": True})

        assert client.get("repos/a/b/issues/1") == {"ok": True}
        args, kwargs = client._session.request.call_args
        assert args == ("GET", "https://api.example.com/repos/a/b/issues/1")
        assert kwargs["timeout"] == 30.0

    def test_get_paginated_follows_next_links(self, client):
        client._session.request.side_effect = [
            make_response(
                payload=[{"number": 1}],
                links={"next": {"url": "https://api.example.com/page2"}},
            ),
            make_response(payload=[{"number": 2}]),
        ]

        items = client.get_paginated("repos/a/b/issues", params={"state": "all"})

        assert items == [{"number": 1}, {"number": 2}]
        first, second = client._session.request.call_args_list
        assert first.kwargs["params"] == {"state": "all"}
        assert second.args[1] == "https://api.example.com/page2"
        assert second.kwargs["params"] is None

    @pytest.mark.parametrize("status,headers,error", [
        (401, {}, AuthenticationError),
        (403, {}, PermissionError),
        (403, {"X-RateLimit-Remaining": "0"}, RateLimitError),
        (404, {}, NotFoundError),
        (429, {}, RateLimitError),
        (500, {}, IssueTrackerError),
    ])
    def test_error_mapping(self, client, status, headers, error):
        client._session.request.return_value = make_response(
            status=status, payload={"message": "x"}, headers=headers
        )

        with pytest.raises(error):
            client.get("repos/a/b/issues/1")

    def test_connection_error(self, client):
        client._session.request.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(IssueTrackerError, match="Connection failed"):
            client.get("user")

    def test_test_connection(self, client):
        client._session.request.return_value = make_response(status=401, payload={})

        assert client.test_connection() is False
