"""
Tests for todotrack.todos.finder module.

AnnotationFinder lists annotations across every file of a project.

Coverage targets:
- find_all() with reported/unreported filters
- Keyword and state shortcuts
- Files excluded by the project filter
- Unreadable and non-UTF-8 files skipped
"""
from __future__ import annotations

from pathlib import Path

from todotrack.config.settings import Settings
from todotrack.core.project import Project
from todotrack.todos.annotation import Annotation
from todotrack.todos.finder import AnnotationFinder, FoundAnnotation, wanted


# =============================================================================
# wanted() Tests
# =============================================================================

class TestWanted:
    """Tests for the reporting state filter."""

    def test_wanted(self):
        reported = Annotation(1, "// ", "TODO", "x", issue_id=1)
        unreported = Annotation(1, "// ", "TODO", "x")

        assert wanted(reported) and wanted(unreported)
        assert wanted(reported, reported=False) is False
        assert wanted(unreported, reported=False) is True
        assert wanted(unreported, unreported=False) is False
        assert wanted(reported, unreported=False) is True


# =============================================================================
# AnnotationFinder Tests
# =============================================================================

class TestAnnotationFinder:
    """Tests for finding annotations in a project."""

    def test_find_all(self, project: Project):
        found = AnnotationFinder(project).find_all()

        assert [(f.path.as_posix(), f.annotation.line) for f in found] == [
            ("app/config.py", 3),
            ("app/config.py", 7),
            ("src/main.c", 1),
            ("src/main.c", 6),
            ("src/main.c", 8),
        ]

    def test_filtered_directory_skipped(self, project: Project):
        """
        target/ is excluded by the project patterns.
        """
        found = AnnotationFinder(project).find_all()

        assert all(not f.path.as_posix().startswith("target/") for f in found)

    def test_find_unreported(self, project: Project):
        found = AnnotationFinder(project).find_unreported()

        assert [f.annotation.title for f in found] == [
            "Read from the environment",
            "Handle timeouts",
            "Name this better",
        ]

    def test_find_reported(self, project: Project):
        found = AnnotationFinder(project).find_reported()

        assert [f.annotation.issue_id for f in found] == [3, 7]

    def test_find_none(self, project: Project):
        assert AnnotationFinder(project).find_all(reported=False, unreported=False) == []

    def test_find_by_keyword(self, project: Project):
        found = AnnotationFinder(project).find_by_keyword("FIXME")

        assert len(found) == 1
        assert found[0].annotation.comments == ["Fall back to the default."]

    def test_find_in_file(self, project: Project, tmp_project: Path):
        annotations = AnnotationFinder(project).find_in_file(tmp_project / "src" / "main.c")

        assert len(annotations) == 3

    def test_non_utf8_skipped(self, tmp_path: Path):
        (tmp_path / "blob.bin").write_bytes(b"\xff\xfe// TODO: hidden\n")
        (tmp_path / "ok.c").write_text("// TODO: visible\n")
        project = Project(tmp_path, Settings(root=tmp_path))

        found = AnnotationFinder(project).find_all()

        assert [f.annotation.title for f in found] == ["visible"]

    def test_keywords_from_settings(self, tmp_path: Path):
        (tmp_path / "a.c").write_text("// TODO: one\n// HACK: two\n")
        project = Project(tmp_path, Settings(root=tmp_path, keywords=["HACK"]))

        found = AnnotationFinder(project).find_all()

        assert [f.annotation.keyword for f in found] == ["HACK"]


# =============================================================================
# FoundAnnotation Tests
# =============================================================================

class TestFoundAnnotation:
    """Tests for the listing entry."""

    def test_str(self):
        found = FoundAnnotation(
            Path("src/main.c"), Annotation(6, "    // ", "TODO", "Check the result", issue_id=7)
        )

        assert str(found) == "src/main.c:6: TODO(#7): Check the result"
