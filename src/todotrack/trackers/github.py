"""GitHub issue tracker."""
from __future__ import annotations

from typing import Any

import httpx

from todotrack.trackers.base import HttpTracker

DEFAULT_API_URL = "https://api.github.com"


class GitHubTracker(HttpTracker):
    """Issues of one GitHub repository, via the REST API.

    Parameters
    ----------
    owner : str
        Repository owner (user or organisation).
    repo : str
        Repository name.
    token : str
        Personal access token with issue write access.
    base_url : str
        API root; change it for GitHub Enterprise.
    client : httpx.Client | None
        Optional preconfigured client.

    Examples
    --------
    >>> with GitHubTracker("octo", "widgets", token) as tracker:
    ...     closed = tracker.closed_ids()
    """

    name = "github"
    per_page = 100

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        base_url: str = DEFAULT_API_URL,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(
            base_url,
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
            },
            client=client,
        )
        self.owner = owner
        self.repo = repo

    @property
    def _issues_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/issues"

    def closed_ids(self) -> set[int]:
        items = self._paginate(self._issues_path, {"state": "closed"})
        return {self._issue_number(item) for item in items}

    def report(self, title: str, body: str, labels: set[str]) -> int:
        payload: dict[str, Any] = {"title": title}
        if body:
            payload["body"] = body
        if labels:
            payload["labels"] = sorted(labels)
        return self._issue_number(self._request("POST", self._issues_path, json=payload))
