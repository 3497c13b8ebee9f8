"""
GitHub API Client - Low-level HTTP client for the GitHub REST API.

This handles the raw HTTP communication with GitHub.
The GitHubAdapter uses this to implement the IssueTrackerPort.
"""

import logging
from typing import Any, Optional

import requests

from ...core.ports.issue_tracker import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
    RateLimitError,
)


class GitHubApiClient:
    """
    Low-level GitHub REST API client.

    Handles authentication, request/response, pagination and error handling.
    """

    API_VERSION = "2022-11-28"

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token or app token
            base_url: API root (override for GitHub Enterprise)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger("GitHubApiClient")

        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

        self._session = requests.Session()
        self._session.headers.update(self.headers)

        self._current_user: Optional[dict] = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make an authenticated request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PATCH)
            endpoint: API endpoint (e.g., 'repos/owner/name/issues/1')
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON response

        Raises:
            IssueTrackerError: On API errors
        """
        response = self._send(method, self._url(endpoint), **kwargs)
        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs) -> Any:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    def patch(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """PATCH request."""
        return self.request("PATCH", endpoint, json=json, **kwargs)

    def get_paginated(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> list[Any]:
        """
        GET every page of a list endpoint, following ``Link: rel="next"``.
        """
        results: list[Any] = []
        url: Optional[str] = self._url(endpoint)

        while url:
            response = self._send("GET", url, params=params)
            page = self._handle_response(response, endpoint)
            results.extend(page or [])

            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None

        self.logger.debug(f"Fetched {len(results)} items from {endpoint}")
        return results

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        try:
            return self._session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise IssueTrackerError(f"Connection failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise IssueTrackerError(f"Request timed out: {e}", cause=e)

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> Any:
        """Handle API response and errors."""
        if response.ok:
            if response.text:
                return response.json()
            return {}

        # Handle specific error codes
        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check GITHUB_TOKEN."
            )

        if status == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            raise RateLimitError(
                f"Rate limit exceeded for {endpoint}; "
                f"resets at {response.headers.get('X-RateLimit-Reset', 'unknown')}"
            )

        if status == 429:
            raise RateLimitError(f"Rate limit exceeded for {endpoint}")

        if status == 403:
            raise PermissionError(f"Permission denied for {endpoint}")

        if status == 404:
            raise NotFoundError(f"Not found: {endpoint}")

        # Generic error
        raise IssueTrackerError(f"API error {status}: {error_body}")

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_authenticated_user(self) -> dict[str, Any]:
        """Get current authenticated user."""
        if self._current_user is None:
            self._current_user = self.get("user")
        return self._current_user

    def test_connection(self) -> bool:
        """Test if connection is valid."""
        try:
            self.get_authenticated_user()
            return True
        except IssueTrackerError:
            return False
