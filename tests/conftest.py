"""
Shared pytest fixtures for the todotrack test suite.

This module provides:
- Sample source strings with TODO blocks in several comment styles
- Temporary projects with sample files (normal and dry-run modes)
- A fake issue tracker that records reports and serves closed ids

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content strings
- project_* : Fixtures that provide configured Project instances
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from todotrack.config.settings import Settings
from todotrack.core.errors import TrackerError
from todotrack.core.project import Project
from todotrack.trackers.base import IssueTracker


# =============================================================================
# Fake Tracker
# =============================================================================

class FakeTracker(IssueTracker):
    """In-memory tracker.

    Issue ids are handed out sequentially from ``next_id``. Every report is
    recorded as a ``(title, body, labels)`` tuple. With ``fail_after`` set,
    the report after that many successful ones raises TrackerError.
    """

    name = "fake"

    def __init__(
        self,
        next_id: int = 42,
        closed: set[int] | None = None,
        fail_after: int | None = None,
    ) -> None:
        self.next_id = next_id
        self.closed = set(closed or ())
        self.fail_after = fail_after
        self.reports: list[tuple[str, str, set[str]]] = []
        self.closed_calls = 0

    def closed_ids(self) -> set[int]:
        self.closed_calls += 1
        return set(self.closed)

    def report(self, title: str, body: str, labels: set[str]) -> int:
        if self.fail_after is not None and len(self.reports) >= self.fail_after:
            raise TrackerError("fake: tracker unavailable")
        self.reports.append((title, body, set(labels)))
        issue_id = self.next_id
        self.next_id += 1
        return issue_id


@pytest.fixture
def tracker() -> FakeTracker:
    """A fake tracker handing out ids from 42."""
    return FakeTracker()


@pytest.fixture
def make_tracker() -> type[FakeTracker]:
    """The FakeTracker class, for tests that need closed ids or failures."""
    return FakeTracker


# =============================================================================
# Sample Source Fixtures
# =============================================================================

@pytest.fixture
def sample_c_source() -> str:
    """
    C-style source with ``//`` comments.

    Contains:
    - An unreported block with two continuation lines and a bare leader
    - A reported block (#7)
    - An indented single-line TODO
    """
    return textwrap.dedent("""\
        // TODO: Handle timeouts
        // Retry twice before giving up.
        //
        // Then log.
        int main(void) {
            // TODO(#7): Check the result
            int x = must(run());
            // TODO: Name this better
        }
    """)


@pytest.fixture
def sample_python_source() -> str:
    """
    Python-style source with ``#`` comments and a second keyword.

    Contains:
    - A FIXME block with one continuation line
    - A reported TODO (#3)
    """
    return textwrap.dedent("""\
        import os

        # FIXME: Read from the environment
        # Fall back to the default.
        PATH = "/tmp"

        # TODO(#3): Remove this helper
        def helper():
            return os.getcwd()
    """)


# =============================================================================
# Project Fixtures
# =============================================================================

@pytest.fixture
def tmp_project(tmp_path: Path, sample_c_source: str, sample_python_source: str) -> Path:
    """
    Temporary project tree.

    Structure:
    - src/main.c (C sample)
    - app/config.py (Python sample)
    - target/debug/build.c (contains a TODO, filtered out by ``^target/``)
    - notes.txt (no annotations)
    """
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.c").write_text(sample_c_source)
    (tmp_path / "app").mkdir()
    (tmp_path / "app" / "config.py").write_text(sample_python_source)
    (tmp_path / "target" / "debug").mkdir(parents=True)
    (tmp_path / "target" / "debug" / "build.c").write_text("// TODO: Generated\n")
    (tmp_path / "notes.txt").write_text("Nothing to see here.\n")
    return tmp_path


@pytest.fixture
def project_settings(tmp_project: Path) -> Settings:
    """Settings with TODO and FIXME keywords, ignoring ``target/``."""
    return Settings(root=tmp_project, keywords=["TODO", "FIXME"], patterns=["^target/"])


@pytest.fixture
def project(tmp_project: Path, project_settings: Settings) -> Project:
    """A Project over ``tmp_project``."""
    return Project(tmp_project, project_settings)


@pytest.fixture
def project_dry_run(tmp_project: Path, project_settings: Settings) -> Project:
    """A dry-run Project over ``tmp_project``."""
    return Project(tmp_project, project_settings, dry_run=True)
