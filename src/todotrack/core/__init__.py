"""
Core module: errors, results, diffs and file IO.

``Project`` lives in :mod:`todotrack.core.project` and is re-exported from
the top-level package; it is not imported here because it depends on the
config package, which itself depends on these errors.
"""
from __future__ import annotations

from .errors import (
    ConfigurationError,
    FileAccessError,
    InternalPatternError,
    TodoTrackError,
    TrackerError,
)
from .results import BatchResult, ErrorResult, Result

__all__ = [
    "Result",
    "ErrorResult",
    "BatchResult",
    "TodoTrackError",
    "ConfigurationError",
    "FileAccessError",
    "TrackerError",
    "InternalPatternError",
]
