"""Annotation lifecycle: list, report and purge across a project."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from todotrack.core.errors import ConfigurationError, FileAccessError, TrackerError
from todotrack.core.results import BatchResult, ErrorResult, Result
from todotrack.todos.annotation import Annotation
from todotrack.todos.finder import AnnotationFinder, FoundAnnotation
from todotrack.todos.mutator import mark, remove

if TYPE_CHECKING:
    from todotrack.core.project import Project
    from todotrack.trackers.base import IssueTracker

logger = logging.getLogger(__name__)

Selector = Callable[[Annotation], bool]
Mutation = Callable[[str, list[Annotation]], str]


class TodoManager:
    """Report new annotations and purge closed ones.

    Files are handled one at a time: read, parse, mutate, write. A file that
    cannot be read or written yields an ErrorResult in the returned
    BatchResult and the run moves on. A :class:`TrackerError` stops the run.

    Parameters
    ----------
    project : Project
        The project to work on. ``project.dry_run`` turns every write into a
        preview and keeps :meth:`report` from filing issues.
    tracker : IssueTracker | None
        Required by :meth:`report` and :meth:`purge`.

    Examples
    --------
    >>> manager = TodoManager(project, tracker)
    >>> result = manager.report()
    >>> print(result.diff)
    >>> manager.purge()
    """

    def __init__(self, project: Project, tracker: IssueTracker | None = None) -> None:
        self._project = project
        self._tracker = tracker
        self._finder = AnnotationFinder(project)

    @property
    def tracker(self) -> IssueTracker:
        if self._tracker is None:
            raise ConfigurationError("This operation needs an issue tracker")
        return self._tracker

    def files(self) -> list[Path]:
        """Files in the working set, relative to the project root."""
        return [self._project.relative(p) for p in self._project.files]

    def list_annotations(
        self, reported: bool = True, unreported: bool = True
    ) -> list[FoundAnnotation]:
        """List annotations filtered by reporting state."""
        return self._finder.find_all(reported=reported, unreported=unreported)

    def _load(self, path: Path, operation: str) -> str | ErrorResult:
        try:
            return self._project.read_text(path)
        except FileAccessError as e:
            logger.warning("Skipping %s", e)
            return ErrorResult(
                message=f"Failed to read {self._project.relative(path)}: {e.reason}",
                exception=e,
                operation=operation,
                path=path,
            )

    def rewrite(self, path: Path, select: Selector, mutation: Mutation, operation: str) -> Result:
        """Apply ``mutation`` to the annotations ``select`` accepts and persist.

        Parameters
        ----------
        path : Path
            File to rewrite.
        select : Selector
            Predicate choosing the annotations handed to ``mutation``.
        mutation : Mutation
            ``(text, annotations) -> new_text``; returning ``text`` itself
            means nothing changed.
        operation : str
            Description used in messages.

        Returns
        -------
        Result
            The new text in ``data`` and a diff when the file changed; a
            "no changes" Result otherwise; an ErrorResult on IO failure.
        """
        original = self._load(path, operation)
        if isinstance(original, ErrorResult):
            return original

        chosen = [a for a in self._finder.parser.parse(original) if select(a)]
        if not chosen:
            return Result(
                success=True,
                message=f"Nothing to {operation} in {self._project.relative(path)}",
            )

        new_text = mutation(original, chosen)
        return self._project.write_text(path, original, new_text, operation)

    def report_file(self, path: Path) -> Result:
        """File every unreported annotation in ``path`` and stamp the ids.

        If the tracker fails part way, the annotations that did get an id are
        still stamped into the file before the error propagates, so the file
        never loses track of an issue that exists.

        Raises
        ------
        TrackerError
            If the tracker fails.
        """
        operation = "stamp issue ids"
        original = self._load(path, operation)
        if isinstance(original, ErrorResult):
            return original

        relative = self._project.relative(path)
        new = [a for a in self._finder.parser.parse(original) if not a.is_reported]
        if not new:
            return Result(success=True, message=f"Nothing to report in {relative}")

        if self._project.dry_run:
            titles = ", ".join(repr(a.title) for a in new)
            return Result(
                success=True,
                message=f"[DRY RUN] Would report {len(new)} annotation(s) in {relative}: {titles}",
                data=new,
            )

        try:
            self.tracker.report_annotations(new)
        except TrackerError:
            done = [a for a in new if a.is_reported]
            if done:
                logger.warning(
                    "Tracker failed, stamping the %d issue(s) already filed in %s",
                    len(done),
                    relative,
                )
                self._project.write_text(path, original, mark(original, done), operation)
            raise

        stamped = mark(original, new)
        if stamped is original:
            logger.warning(
                "Filed %d issue(s) for %s but found no header to stamp; they will be filed again",
                len(new),
                relative,
            )
        return self._project.write_text(path, original, stamped, operation)

    def report(self) -> BatchResult:
        """Report new annotations in every file.

        Raises
        ------
        TrackerError
            If the tracker fails; files handled before the failure keep
            their changes.
        """
        results = BatchResult()
        for path in self._project.files:
            results.append(self.report_file(path))
        return results

    def purge_file(self, path: Path, closed: set[int]) -> Result:
        """Remove annotations in ``path`` whose issue id is in ``closed``."""
        return self.rewrite(
            path,
            lambda a: a.issue_id is not None and a.issue_id in closed,
            remove,
            "remove closed annotations",
        )

    def purge(self) -> BatchResult:
        """Remove annotations whose issues are closed, in every file.

        The closed ids are fetched once, before any file is touched.

        Raises
        ------
        TrackerError
            If the closed issues cannot be fetched.
        """
        closed = set(self.tracker.closed_ids())
        logger.info("%d closed issue(s) on the tracker", len(closed))

        results = BatchResult()
        if not closed:
            return results
        for path in self._project.files:
            results.append(self.purge_file(path, closed))
        return results
