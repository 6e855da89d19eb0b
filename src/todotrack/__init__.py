"""
todotrack - track TODO comments as issues.

Extracts TODO blocks from source comments, files them on an issue tracker,
stamps the issue id back into the comment, and removes the comment once the
issue is closed. Files are treated as plain text; no language is parsed.

Example
-------
>>> from todotrack import Project, TodoManager, create_tracker
>>>
>>> project = Project.load(".")
>>> manager = TodoManager(project)
>>> for found in manager.list_annotations(reported=False):
...     print(found)
>>>
>>> # File new TODOs and stamp their ids
>>> with create_tracker(project.settings.tracker) as tracker:
...     TodoManager(project, tracker).report()

Source forms
------------
Unreported::

    // TODO: Handle timeouts
    // Retry twice before giving up.

Reported::

    // TODO(#42): Handle timeouts
    // Retry twice before giving up.

Classes
-------
Project
    Root directory, settings and file discovery.

Settings
    Resolved configuration.

Annotation
    One TODO block.

TodoManager
    List, report and purge annotations.

IssueTracker
    Issue tracker capability (GitHub and Gitea backends included).

Result, ErrorResult, BatchResult
    Per-file and per-run outcomes.
"""
from __future__ import annotations

from .config import IgnoreMode, RawConfig, Settings, TrackerSettings
from .core import (
    BatchResult,
    ConfigurationError,
    ErrorResult,
    FileAccessError,
    InternalPatternError,
    Result,
    TodoTrackError,
    TrackerError,
)
from .core.project import Project
from .todos import (
    Annotation,
    AnnotationFinder,
    AnnotationParser,
    AnnotationPatterns,
    AnnotationReporter,
    FoundAnnotation,
    TodoManager,
    extract,
    mark,
    remove,
)
from .trackers import GiteaTracker, GitHubTracker, IssueTracker, create_tracker, issue_body

__version__ = "0.1.0"
__all__ = [
    # Entry points
    "Project",
    "TodoManager",
    # Configuration
    "Settings",
    "TrackerSettings",
    "RawConfig",
    "IgnoreMode",
    # Annotations
    "Annotation",
    "AnnotationParser",
    "AnnotationPatterns",
    "AnnotationFinder",
    "AnnotationReporter",
    "FoundAnnotation",
    "extract",
    "mark",
    "remove",
    # Trackers
    "IssueTracker",
    "GitHubTracker",
    "GiteaTracker",
    "create_tracker",
    "issue_body",
    # Results
    "Result",
    "ErrorResult",
    "BatchResult",
    # Errors
    "TodoTrackError",
    "ConfigurationError",
    "FileAccessError",
    "TrackerError",
    "InternalPatternError",
]
