"""Project - the set of files a run works on."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from todotrack.config.settings import Settings
from todotrack.core.diff import generate_diff
from todotrack.core.errors import FileAccessError
from todotrack.core.files import atomic_write, read_source
from todotrack.core.results import ErrorResult, Result

logger = logging.getLogger(__name__)


class Project:
    """
    Root directory, settings and file discovery for one run.

    Parameters
    ----------
    root : str | Path
        Project root directory.
    settings : Settings | None
        Resolved settings. Defaults to built-in defaults (keyword ``TODO``,
        no filter patterns).
    dry_run : bool, optional
        If True, writes report what they would do without touching files.

    Attributes
    ----------
    files : list[Path]
        Files under root accepted by the settings filter, sorted.

    Examples
    --------
    >>> project = Project.load("src/", dry_run=True)
    >>> for path in project.files:
    ...     print(project.relative(path))
    """

    def __init__(
        self,
        root: str | Path,
        settings: Settings | None = None,
        dry_run: bool = False,
    ) -> None:
        self.root = Path(root).resolve()
        self.settings = settings or Settings(root=self.root)
        self.dry_run = dry_run
        self._files: list[Path] | None = None

    @classmethod
    def load(
        cls,
        root: str | Path | None = None,
        dry_run: bool = False,
        global_path: Path | None = None,
    ) -> Project:
        """Create a project with settings read from the config files."""
        settings = Settings.load(Path(root) if root is not None else None, global_path)
        return cls(settings.root, settings, dry_run=dry_run)

    @property
    def keywords(self) -> list[str]:
        return self.settings.keywords

    def __repr__(self) -> str:
        return f"Project({self.root}, dry_run={self.dry_run})"

    @property
    def files(self) -> list[Path]:
        """
        Files in the working set.

        Lazily computed on first access.
        """
        if self._files is None:
            self._files = self._discover_files()
        return self._files

    def _discover_files(self) -> list[Path]:
        """Walk the root, pruning directories the filter rejects.

        Directories are tested with a trailing slash (``target/``) so a
        pattern like ``^target/`` prunes the whole tree.
        """
        accept = self.settings.filter
        found: list[Path] = []

        for dirpath, dirnames, filenames in os.walk(self.root):
            base = Path(dirpath)
            dirnames[:] = sorted(
                d for d in dirnames if accept(self.relative(base / d).as_posix() + "/")
            )
            for name in sorted(filenames):
                path = base / name
                if accept(self.relative(path).as_posix()):
                    found.append(path)

        return found

    def relative(self, path: Path) -> Path:
        """Path relative to root; paths outside root are returned unchanged."""
        try:
            return path.relative_to(self.root)
        except ValueError:
            return path

    def read_text(self, path: Path) -> str:
        """Read a source file.

        Raises
        ------
        FileAccessError
            If the file is unreadable or not UTF-8.
        """
        return read_source(path)

    def write_text(self, path: Path, original: str, new_content: str, operation: str) -> Result:
        """Write new file content, with diff generation, dry-run aware.

        Parameters
        ----------
        path : Path
            Path to the file.
        original : str
            Content the rewrite started from.
        new_content : str
            New file content.
        operation : str
            Description of the operation (for messages).

        Returns
        -------
        Result
            Result with the new text in ``data`` and the diff attached, or
            an ErrorResult if the write failed.
        """
        relative = self.relative(path)
        if new_content == original:
            return Result(success=True, message=f"No changes needed in {relative}")

        diff = generate_diff(original, new_content, relative)

        if self.dry_run:
            return Result(
                success=True,
                message=f"[DRY RUN] Would {operation} in {relative}",
                files_changed=[path],
                data=new_content,
                diff=diff,
                diffs={path: diff},
            )

        try:
            atomic_write(path, new_content)
        except FileAccessError as e:
            logger.warning("Write failed: %s", e)
            return ErrorResult(
                message=f"Write failed: {e}",
                exception=e,
                operation=operation,
                path=path,
            )

        logger.info("Rewrote %s (%s)", relative, operation)
        return Result(
            success=True,
            message=f"Completed {operation} in {relative}",
            files_changed=[path],
            data=new_content,
            diff=diff,
            diffs={path: diff},
        )
