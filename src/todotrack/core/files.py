"""File IO helpers.

Source files are read and written as raw UTF-8 bytes, never through
universal-newline translation, so ``\\r\\n`` line endings survive a rewrite
byte for byte. A UTF-8 byte order mark is hidden from the decoded text and
written back when the file is replaced.
"""
from __future__ import annotations

import codecs
import contextlib
import os
import tempfile
from pathlib import Path

from todotrack.core.errors import FileAccessError

__all__ = [
    "atomic_write",
    "read_source",
]


def read_source(path: Path) -> str:
    """Read a whole source file as UTF-8 text.

    Raises
    ------
    FileAccessError
        If the file cannot be read or is not valid UTF-8.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileAccessError(path, "not valid UTF-8 text") from e


def _has_bom(path: Path) -> bool:
    try:
        with open(path, "rb") as handle:
            return handle.read(len(codecs.BOM_UTF8)) == codecs.BOM_UTF8
    except OSError:
        return False


def atomic_write(path: Path, text: str) -> None:
    """Atomically replace ``path`` with ``text``, keeping an existing BOM.

    The write strategy is:
    1. create temp file in the same directory,
    2. write + flush + fsync file data,
    3. replace target via ``os.replace``.

    Raises
    ------
    FileAccessError
        If any step fails. The original file is left untouched.
    """
    target = Path(path)
    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.",
            suffix=".tmp",
            dir=str(target.parent),
        )
    except OSError as e:
        raise FileAccessError(target, e.strerror or str(e)) from e

    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            if _has_bom(target):
                handle.write(codecs.BOM_UTF8)
            handle.write(text.encode("utf-8"))
            handle.flush()
            os.fsync(handle.fileno())
        with contextlib.suppress(OSError):
            os.chmod(temp_path, target.stat().st_mode & 0o7777)
        os.replace(temp_path, target)
    except OSError as e:
        with contextlib.suppress(OSError):
            temp_path.unlink(missing_ok=True)
        raise FileAccessError(target, e.strerror or str(e)) from e
