"""Render annotation listings."""
from __future__ import annotations

import json
from collections import Counter
from typing import Literal, Sequence

from todotrack.todos.finder import FoundAnnotation

ReportFormat = Literal["text", "markdown", "json"]
REPORT_FORMATS: tuple[ReportFormat, ...] = ("text", "markdown", "json")


class AnnotationReporter:
    """Generate reports from a listing.

    Parameters
    ----------
    found : Sequence[FoundAnnotation]
        Annotations with their project-relative paths.

    Examples
    --------
    >>> reporter = AnnotationReporter(manager.list_annotations())
    >>> print(reporter.to_markdown())
    >>> summary = reporter.summary()
    """

    def __init__(self, found: Sequence[FoundAnnotation]) -> None:
        self._found = list(found)

    def summary(self) -> dict:
        """Summary statistics.

        Returns
        -------
        dict
            - total: Total number of annotations
            - by_keyword: Count by keyword
            - reported: Count carrying an issue id
            - unreported: Count without an issue id
            - files_affected: Number of files with annotations
        """
        by_keyword: Counter[str] = Counter()
        files: set[str] = set()
        reported = 0

        for found in self._found:
            by_keyword[found.annotation.keyword] += 1
            files.add(found.path.as_posix())
            if found.annotation.is_reported:
                reported += 1

        return {
            "total": len(self._found),
            "by_keyword": dict(by_keyword),
            "reported": reported,
            "unreported": len(self._found) - reported,
            "files_affected": len(files),
        }

    def to_text(self) -> str:
        """One ``path:line: KEYWORD(#id): title`` entry per annotation.

        Continuation lines follow, indented by two spaces.
        """
        return "\n".join(str(found) for found in self._found)

    def to_markdown(self) -> str:
        """Generate a markdown report grouped by file."""
        summary = self.summary()

        lines = [
            "# TODO Report",
            "",
            "## Summary",
            "",
            f"- **Total:** {summary['total']}",
            f"- **Files affected:** {summary['files_affected']}",
            f"- **Reported:** {summary['reported']}",
            f"- **Unreported:** {summary['unreported']}",
            "",
            "### By Keyword",
            "",
        ]

        for keyword, count in sorted(summary["by_keyword"].items()):
            lines.append(f"- {keyword}: {count}")

        lines.extend(["", "## Annotations", ""])

        by_file: dict[str, list[FoundAnnotation]] = {}
        for found in self._found:
            by_file.setdefault(found.path.as_posix(), []).append(found)

        for file_path, entries in sorted(by_file.items()):
            lines.append(f"### {file_path}")
            lines.append("")
            for found in sorted(entries, key=lambda f: f.annotation.line):
                a = found.annotation
                issue = f"[#{a.issue_id}] " if a.is_reported else ""
                lines.append(f"- Line {a.line}: {issue}{a.keyword}: {a.title}")
                for comment in a.comments:
                    if comment:
                        lines.append(f"  {comment}")
            lines.append("")

        return "\n".join(lines)

    def to_json(self, indent: int = 2) -> str:
        """Generate a JSON report with a summary and every annotation."""
        data = {
            "summary": self.summary(),
            "annotations": [
                {
                    "file": found.path.as_posix(),
                    "line": found.annotation.line,
                    "keyword": found.annotation.keyword,
                    "title": found.annotation.title,
                    "issue_id": found.annotation.issue_id,
                    "comments": found.annotation.comments,
                }
                for found in self._found
            ],
        }

        return json.dumps(data, indent=indent)

    def render(self, format: ReportFormat = "text") -> str:
        if format == "markdown":
            return self.to_markdown()
        if format == "json":
            return self.to_json()
        return self.to_text()
