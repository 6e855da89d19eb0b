"""Resolved settings for one run."""
from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from todotrack.config.raw import IgnoreMode, RawConfig
from todotrack.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

PathFilter = Callable[[str], bool]

TRACKER_KINDS = ("github", "gitea")
DEFAULT_TOKEN_ENV = "TODOTRACK_TOKEN"


def create_filter(mode: IgnoreMode, patterns: list[str]) -> PathFilter:
    """Build the path predicate for a set of patterns.

    Patterns are regular expressions searched in the POSIX form of a path
    relative to the project root. They are compiled once, here.

    Parameters
    ----------
    mode : IgnoreMode
        ``BLACKLIST`` keeps paths no pattern matches, ``WHITELIST`` keeps
        paths some pattern matches.
    patterns : list[str]
        Regular expressions.

    Raises
    ------
    ConfigurationError
        If a pattern does not compile.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(f"Can't compile pattern {pattern!r}: {e}") from e
    patterns_ = tuple(compiled)

    def matches(path: str) -> bool:
        return any(p.search(path) for p in patterns_)

    if mode is IgnoreMode.WHITELIST:
        return matches
    return lambda path: not matches(path)


def find_root(start: Path | None = None) -> Path:
    """Top-level directory of the git repository containing ``start``.

    Raises
    ------
    ConfigurationError
        If git is missing or ``start`` is not inside a repository.
    """
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=start,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ConfigurationError("Can't find git on the system") from e

    if completed.returncode != 0:
        raise ConfigurationError("Not in a git repository, pass --root explicitly")
    return Path(completed.stdout.strip())


@dataclass(frozen=True)
class TrackerSettings:
    """Where issues are filed.

    Attributes
    ----------
    kind : str
        ``"github"`` or ``"gitea"``.
    owner : str
        Repository owner.
    repo : str
        Repository name.
    url : str | None
        API root; required for Gitea, optional for GitHub.
    token_env : str
        Environment variable holding the access token.
    """

    kind: str
    owner: str
    repo: str
    url: str | None = None
    token_env: str = DEFAULT_TOKEN_ENV

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrackerSettings:
        kind = str(data.get("kind", "github")).lower()
        if kind not in TRACKER_KINDS:
            raise ConfigurationError(
                f"tracker.kind must be one of {', '.join(TRACKER_KINDS)}, got {kind!r}"
            )
        missing = [key for key in ("owner", "repo") if not data.get(key)]
        if kind == "gitea" and not data.get("url"):
            missing.append("url")
        if missing:
            raise ConfigurationError(f"tracker settings missing: {', '.join(missing)}")

        return cls(
            kind=kind,
            owner=str(data["owner"]),
            repo=str(data["repo"]),
            url=str(data["url"]) if data.get("url") else None,
            token_env=str(data.get("token_env") or DEFAULT_TOKEN_ENV),
        )

    def token(self) -> str:
        """Read the access token from the environment."""
        token = os.environ.get(self.token_env)
        if not token:
            raise ConfigurationError(f"Set {self.token_env} to a {self.kind} access token")
        return token


@dataclass
class Settings:
    """Everything a run needs, resolved from the config files.

    Attributes
    ----------
    root : Path
        Project root; file paths are reported relative to it.
    keywords : list[str]
        Trigger words, never empty.
    ignore_mode : IgnoreMode
        How ``patterns`` are applied.
    patterns : list[str]
        Filter patterns.
    tracker_config : dict[str, Any]
        Raw tracker section; validated lazily by :attr:`tracker`.
    """

    root: Path
    keywords: list[str] = field(default_factory=lambda: ["TODO"])
    ignore_mode: IgnoreMode = IgnoreMode.BLACKLIST
    patterns: list[str] = field(default_factory=list)
    tracker_config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.keywords:
            raise ConfigurationError("must provide at least one keyword")
        self.filter: PathFilter = create_filter(self.ignore_mode, self.patterns)

    @classmethod
    def from_raw(cls, root: Path, raw: RawConfig) -> Settings:
        merged = RawConfig.merge(RawConfig(), raw)
        return cls(
            root=root,
            keywords=merged.keywords or [],
            ignore_mode=merged.ignore_mode or IgnoreMode.BLACKLIST,
            patterns=merged.patterns or [],
            tracker_config=merged.tracker or {},
        )

    @classmethod
    def load(cls, root: Path | None = None, global_path: Path | None = None) -> Settings:
        """Load and merge the global and project config files.

        Parameters
        ----------
        root : Path | None
            Project root. Defaults to the enclosing git repository.
        global_path : Path | None
            Global config file. Defaults to :meth:`RawConfig.global_path`.
        """
        root = (root or find_root()).resolve()
        if not root.is_dir():
            raise ConfigurationError(f"Root is not a directory: {root}")

        global_raw = RawConfig.from_yaml(global_path or RawConfig.global_path())
        local_raw = RawConfig.local(root)
        settings = cls.from_raw(root, RawConfig.merge(global_raw, local_raw))
        logger.debug(
            "Loaded settings for %s: keywords=%s mode=%s patterns=%s",
            root,
            settings.keywords,
            settings.ignore_mode.value,
            settings.patterns,
        )
        return settings

    @property
    def tracker(self) -> TrackerSettings:
        """Validated tracker settings.

        Raises
        ------
        ConfigurationError
            If no tracker is configured or the section is incomplete.
        """
        if not self.tracker_config:
            raise ConfigurationError("No tracker configured, add a 'tracker' section")
        return TrackerSettings.from_dict(self.tracker_config)
