"""
GitHub Adapter - Implements IssueTrackerPort for GitHub Issues.

This is the main entry point for GitHub integration.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from ...core.domain.clock import format_timestamp
from ...core.domain.entities import Issue, IssueState
from ...core.ports.issue_tracker import IssueTrackerPort, IssueTrackerError
from ...core.ports.config_provider import TrackerConfig
from .client import GitHubApiClient


class GitHubAdapter(IssueTrackerPort):
    """
    GitHub implementation of the IssueTrackerPort.

    Translates between domain entities and GitHub's issues API.
    """

    PAGE_SIZE = 100

    def __init__(
        self,
        config: TrackerConfig,
        client: Optional[GitHubApiClient] = None,
    ):
        """
        Initialize the GitHub adapter.

        Args:
            config: Tracker configuration (token, owner/name repository)
            client: Optional preconfigured API client
        """
        self.config = config
        self.repository = config.repository
        self.logger = logging.getLogger("GitHubAdapter")

        self._client = client or GitHubApiClient(
            token=config.token,
            base_url=config.api_url,
            timeout=config.timeout,
        )

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "GitHub"

    def test_connection(self) -> bool:
        return self._client.test_connection()

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def list_changed_since(self, since: Optional[datetime]) -> list[Issue]:
        params: dict[str, Any] = {"state": "all", "per_page": self.PAGE_SIZE}
        if since is not None:
            params["since"] = format_timestamp(since)

        data = self._client.get_paginated(self._issues_endpoint(), params=params)

        issues = []
        for item in data:
            # The issues endpoint also returns pull requests
            if "pull_request" in item:
                continue
            issues.append(self._parse_issue(item))

        self.logger.info(f"Fetched {len(issues)} issues from {self.repository}")
        return issues

    def get_issue_state(self, number: int) -> IssueState:
        data = self._client.get(self._issues_endpoint(number))
        state = IssueState.from_string(data.get("state"))
        if state is None:
            raise IssueTrackerError(
                f"Unexpected state {data.get('state')!r} for issue #{number}",
                issue_number=number,
            )
        return state

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Write Operations
    # -------------------------------------------------------------------------

    def create_issue(self, title: str, body: str) -> int:
        data = self._client.post(
            self._issues_endpoint(),
            json={"title": title, "body": body},
        )
        number = data.get("number")
        if number is None:
            raise IssueTrackerError(f"Create response for '{title}' has no issue number")

        self.logger.info(f"Created issue #{number} in {self.repository}")
        return int(number)

    def edit_issue(self, number: int, title: str, body: str) -> None:
        self._client.patch(
            self._issues_endpoint(number),
            json={"title": title, "body": body},
        )
        self.logger.info(f"Updated issue #{number}")

    def close_issue(self, number: int) -> None:
        self._set_state(number, IssueState.CLOSED)

    def reopen_issue(self, number: int) -> None:
        self._set_state(number, IssueState.OPEN)

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _set_state(self, number: int, state: IssueState) -> None:
        self._client.patch(
            self._issues_endpoint(number),
            json={"state": state.value},
        )
        self.logger.info(f"Set issue #{number} to {state.value}")

    def _issues_endpoint(self, number: Optional[int] = None) -> str:
        endpoint = f"repos/{self.repository}/issues"
        if number is not None:
            endpoint = f"{endpoint}/{number}"
        return endpoint

    def _parse_issue(self, data: dict) -> Issue:
        """Parse a GitHub API issue payload into an Issue."""
        return Issue(
            number=int(data["number"]),
            title=data.get("title") or "",
            body=data.get("body") or "",
            state=IssueState.from_string(data.get("state")) or IssueState.OPEN,
            labels=[
                label["name"] if isinstance(label, dict) else str(label)
                for label in data.get("labels", [])
            ],
        )
