"""Issue tracker backends.

Classes
-------
IssueTracker
    Abstract capability: ``closed_ids()`` and ``report(title, body, labels)``.

GitHubTracker
    GitHub REST API backend.

GiteaTracker
    Gitea REST API backend.
"""
from __future__ import annotations

from todotrack.config.settings import TrackerSettings
from todotrack.trackers.base import HttpTracker, IssueTracker, issue_body
from todotrack.trackers.gitea import GiteaTracker
from todotrack.trackers.github import DEFAULT_API_URL, GitHubTracker

__all__ = [
    "GitHubTracker",
    "GiteaTracker",
    "HttpTracker",
    "IssueTracker",
    "create_tracker",
    "issue_body",
]


def create_tracker(settings: TrackerSettings) -> IssueTracker:
    """Build the tracker client described by ``settings``.

    Raises
    ------
    ConfigurationError
        If the access token is not set.
    """
    token = settings.token()
    if settings.kind == "gitea":
        return GiteaTracker(settings.url or "", settings.owner, settings.repo, token)
    return GitHubTracker(settings.owner, settings.repo, token, base_url=settings.url or DEFAULT_API_URL)
