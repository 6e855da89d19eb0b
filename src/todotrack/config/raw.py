"""Raw configuration files and how they merge.

Two sources are read: a global ``todo.yml`` in the user's config directory
and a project-local ``.todo.yml`` (or a ``[tool.todotrack]`` table in
``pyproject.toml``). Every key is optional; :meth:`RawConfig.merge` fills in
defaults.

Example ``.todo.yml``::

    ignore_mode: blacklist
    patterns:
      - ^\\.git/
      - ^target/
    keywords: [TODO, FIXME]
    tracker:
      kind: github
      owner: octo
      repo: widgets
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

from todotrack.core.errors import ConfigurationError

# Python 3.11+ has tomllib built-in
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

GLOBAL_CONFIG_NAME = "todo.yml"
LOCAL_CONFIG_NAME = ".todo.yml"
PYPROJECT_TABLE = "todotrack"

DEFAULT_KEYWORDS = ["TODO"]

T = TypeVar("T")


class IgnoreMode(str, Enum):
    """How filter patterns select files."""

    BLACKLIST = "blacklist"
    WHITELIST = "whitelist"

    @classmethod
    def parse(cls, value: Any) -> IgnoreMode:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(
            f"ignore_mode must be 'blacklist' or 'whitelist', got {value!r}"
        )


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"{key} must be a list of strings")
    return list(value)


@dataclass
class RawConfig:
    """One configuration source. ``None`` means "not set here"."""

    ignore_mode: IgnoreMode | None = None
    patterns: list[str] | None = None
    keywords: list[str] | None = None
    tracker: dict[str, Any] | None = field(default=None)

    @classmethod
    def from_dict(cls, data: Any, source: str = "<config>") -> RawConfig:
        """Validate a decoded config mapping.

        Raises
        ------
        ConfigurationError
            On unknown keys or values of the wrong type.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"{source}: expected a mapping at top level")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"{source}: unknown keys {', '.join(unknown)}")

        try:
            tracker = data.get("tracker")
            if tracker is not None and not isinstance(tracker, dict):
                raise ConfigurationError("tracker must be a mapping")
            return cls(
                ignore_mode=(
                    IgnoreMode.parse(data["ignore_mode"])
                    if data.get("ignore_mode") is not None
                    else None
                ),
                patterns=(
                    _string_list(data["patterns"], "patterns")
                    if data.get("patterns") is not None
                    else None
                ),
                keywords=(
                    _string_list(data["keywords"], "keywords")
                    if data.get("keywords") is not None
                    else None
                ),
                tracker=dict(tracker) if tracker is not None else None,
            )
        except ConfigurationError as e:
            raise ConfigurationError(f"{source}: {e}") from e

    @classmethod
    def from_yaml(cls, path: Path) -> RawConfig:
        """Load a YAML config file. A missing file is an empty config."""
        if not path.is_file():
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Can't read {path}: {e}") from e
        return cls.from_dict(data, str(path))

    @classmethod
    def from_pyproject(cls, path: Path) -> RawConfig:
        """Load the ``[tool.todotrack]`` table. Missing file or table is empty."""
        if not path.is_file():
            return cls()
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Can't read {path}: {e}") from e
        table = data.get("tool", {}).get(PYPROJECT_TABLE)
        return cls.from_dict(table, f"{path} [tool.{PYPROJECT_TABLE}]")

    @classmethod
    def global_path(cls) -> Path:
        """``$XDG_CONFIG_HOME/todo.yml``, defaulting to ``~/.config/todo.yml``."""
        base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        return Path(base) / GLOBAL_CONFIG_NAME

    @classmethod
    def local(cls, root: Path) -> RawConfig:
        """Project config: ``.todo.yml`` if present, else ``pyproject.toml``."""
        yaml_path = root / LOCAL_CONFIG_NAME
        if yaml_path.is_file():
            return cls.from_yaml(yaml_path)
        return cls.from_pyproject(root / "pyproject.toml")

    @classmethod
    def merge(cls, global_: RawConfig, local: RawConfig) -> RawConfig:
        """Merge a global and a local config; local wins.

        Patterns are the exception: when both sources list patterns and agree
        on the ignore mode, the local patterns come first followed by the
        global ones. The result has every field set.
        """
        same_mode = True

        def pick_mode(outer: IgnoreMode, inner: IgnoreMode) -> IgnoreMode:
            nonlocal same_mode
            if outer != inner:
                same_mode = False
            return inner

        mode = _merge_opt(global_.ignore_mode, local.ignore_mode, IgnoreMode.BLACKLIST, pick_mode)
        patterns = _merge_opt(
            global_.patterns,
            local.patterns,
            [],
            lambda outer, inner: inner + outer if same_mode else inner,
        )
        keywords = _merge_opt(
            global_.keywords, local.keywords, list(DEFAULT_KEYWORDS), lambda outer, inner: inner
        )
        tracker = _merge_opt(
            global_.tracker, local.tracker, {}, lambda outer, inner: {**outer, **inner}
        )

        return cls(ignore_mode=mode, patterns=patterns, keywords=keywords, tracker=tracker)


def _merge_opt(global_: T | None, local: T | None, default: T, merge_fn: Callable[[T, T], T]) -> T:
    if global_ is None and local is None:
        return default
    if global_ is None:
        return local  # type: ignore[return-value]
    if local is None:
        return global_
    return merge_fn(global_, local)
