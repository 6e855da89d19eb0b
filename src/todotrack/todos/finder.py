"""Annotation finder for listing TODO blocks across a project."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from todotrack.core.errors import FileAccessError
from todotrack.todos.annotation import Annotation
from todotrack.todos.parser import AnnotationParser

if TYPE_CHECKING:
    from todotrack.core.project import Project

logger = logging.getLogger(__name__)


class FoundAnnotation(NamedTuple):
    """An annotation and the file it came from, relative to the project root."""

    path: Path
    annotation: Annotation

    def __str__(self) -> str:
        return f"{self.path.as_posix()}:{self.annotation}"


def wanted(annotation: Annotation, reported: bool = True, unreported: bool = True) -> bool:
    """Filter by reporting state."""
    if annotation.is_reported:
        return reported
    return unreported


class AnnotationFinder:
    """Find annotations in the files of a project.

    Listing never stops on a bad file: files that cannot be read or are not
    UTF-8 are logged and skipped.

    Parameters
    ----------
    project : Project
        The project whose files are searched.

    Examples
    --------
    >>> finder = AnnotationFinder(project)
    >>> for found in finder.find_all(reported=False):
    ...     print(found)
    src/main.c:12: TODO: Handle errors
    """

    def __init__(self, project: Project) -> None:
        self._project = project
        self._parser = AnnotationParser(project.keywords)

    @property
    def parser(self) -> AnnotationParser:
        return self._parser

    def find_in_file(self, path: Path) -> list[Annotation]:
        """Parse one file.

        Raises
        ------
        FileAccessError
            If the file is unreadable or not UTF-8.
        """
        return self._parser.parse(self._project.read_text(path))

    def find_all(self, reported: bool = True, unreported: bool = True) -> list[FoundAnnotation]:
        """Every annotation in the project, file by file, in source order.

        Parameters
        ----------
        reported : bool
            Include annotations that carry an issue id.
        unreported : bool
            Include annotations without an issue id.
        """
        found: list[FoundAnnotation] = []

        for path in self._project.files:
            try:
                annotations = self.find_in_file(path)
            except FileAccessError as e:
                if isinstance(e.__cause__, UnicodeDecodeError):
                    logger.debug("Skipping non-text file %s", path)
                else:
                    logger.warning("Skipping %s", e)
                continue

            relative = self._project.relative(path)
            found.extend(
                FoundAnnotation(relative, a)
                for a in annotations
                if wanted(a, reported, unreported)
            )

        return found

    def find_by_keyword(self, keyword: str) -> list[FoundAnnotation]:
        """Annotations whose keyword is ``keyword``."""
        return [f for f in self.find_all() if f.annotation.keyword == keyword]

    def find_unreported(self) -> list[FoundAnnotation]:
        """Annotations not yet filed as issues."""
        return self.find_all(reported=False)

    def find_reported(self) -> list[FoundAnnotation]:
        """Annotations already stamped with an issue id."""
        return self.find_all(unreported=False)
