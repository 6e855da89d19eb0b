"""Configuration loading and merging.

Classes
-------
RawConfig
    One config source (global ``todo.yml``, local ``.todo.yml`` or
    ``[tool.todotrack]``), with the merge rules between them.

Settings
    Resolved settings for a run: root, keywords and the compiled path filter.

TrackerSettings
    Which issue tracker to talk to.
"""
from __future__ import annotations

from todotrack.config.raw import IgnoreMode, RawConfig
from todotrack.config.settings import Settings, TrackerSettings, create_filter, find_root

__all__ = [
    "IgnoreMode",
    "RawConfig",
    "Settings",
    "TrackerSettings",
    "create_filter",
    "find_root",
]
