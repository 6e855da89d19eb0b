"""Exception hierarchy.

Per-file operations report their outcome through Result objects. The
exceptions below are reserved for conditions that must stop a run (bad
configuration, tracker failures, pattern defects) and for the per-file IO
failure that the orchestrator turns into an ErrorResult.
"""
from __future__ import annotations

from pathlib import Path


class TodoTrackError(Exception):
    """Base class for all todotrack errors."""


class ConfigurationError(TodoTrackError):
    """Invalid or incomplete configuration. Raised before any file is touched."""


class FileAccessError(TodoTrackError, OSError):
    """A single file could not be read or written.

    Parameters
    ----------
    path : Path
        The file that failed.
    reason : str
        Human-readable cause.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class TrackerError(TodoTrackError):
    """Network, authentication or response parsing failure in an issue tracker."""


class InternalPatternError(TodoTrackError):
    """A generated regular expression failed to compile.

    This always indicates an escaping defect, never bad user input.
    """

    def __init__(self, pattern: str, cause: Exception) -> None:
        super().__init__(f"Generated pattern failed to compile ({cause}): {pattern!r}")
        self.pattern = pattern
        self.cause = cause
