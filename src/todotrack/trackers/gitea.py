"""Gitea issue tracker."""
from __future__ import annotations

from typing import Any

import httpx

from todotrack.core.errors import TrackerError
from todotrack.trackers.base import HttpTracker


class GiteaTracker(HttpTracker):
    """Issues of one Gitea repository, via the ``/api/v1`` REST API.

    Gitea takes label ids rather than names when creating an issue, so the
    repository's labels are fetched once and matched by name. Labels that
    do not exist in the repository are left off the issue.

    Parameters
    ----------
    base_url : str
        API root, e.g. ``https://gitea.example.com/api/v1``.
    owner : str
        Repository owner.
    repo : str
        Repository name.
    token : str
        Access token.
    client : httpx.Client | None
        Optional preconfigured client.
    """

    name = "gitea"
    page_size_param = "limit"

    def __init__(
        self,
        base_url: str,
        owner: str,
        repo: str,
        token: str,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(
            base_url,
            {
                "Accept": "application/json",
                "Authorization": f"token {token}",
            },
            client=client,
        )
        self.owner = owner
        self.repo = repo
        self._labels: dict[str, int] | None = None

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    @property
    def labels(self) -> dict[str, int]:
        """Label name to id mapping, fetched on first use."""
        if self._labels is None:
            self._labels = self._parse_labels(self._paginate(f"{self._repo_path}/labels"))
        return self._labels

    def _parse_labels(self, items: list[Any]) -> dict[str, int]:
        labels: dict[str, int] = {}
        for item in items:
            name = item.get("name") if isinstance(item, dict) else None
            label_id = item.get("id") if isinstance(item, dict) else None
            if not isinstance(name, str) or not isinstance(label_id, int):
                raise TrackerError(f"{self.name}: can't parse labels")
            labels[name] = label_id
        return labels

    def closed_ids(self) -> set[int]:
        items = self._paginate(f"{self._repo_path}/issues", {"state": "closed", "type": "issues"})
        return {self._issue_number(item) for item in items}

    def report(self, title: str, body: str, labels: set[str]) -> int:
        payload: dict[str, Any] = {"title": title, "body": body}
        label_ids = sorted(self.labels[name] for name in labels if name in self.labels)
        if label_ids:
            payload["labels"] = label_ids
        return self._issue_number(
            self._request("POST", f"{self._repo_path}/issues", json=payload)
        )
