"""Unified diffs of source rewrites.

Dry runs print these so a user can see which annotation headers would be
stamped or which blocks removed before anything is written.
"""
from __future__ import annotations

import difflib
from pathlib import Path


def _diff_lines(text: str) -> list[str]:
    # Split at "\n" only, like the annotation parser; every line gets a
    # terminator so a missing final newline still diffs cleanly
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line + "\n" for line in lines]


def generate_diff(original: str, modified: str, path: Path, context_lines: int = 3) -> str:
    """Diff two versions of ``path``; empty when they are equal.

    Examples
    --------
    >>> print(generate_diff("// TODO: x\\n", "// TODO(#1): x\\n", Path("a.c")))
    --- a/a.c
    +++ b/a.c
    @@ -1 +1 @@
    -// TODO: x
    +// TODO(#1): x
    """
    if original == modified:
        return ""
    return "".join(
        difflib.unified_diff(
            _diff_lines(original),
            _diff_lines(modified),
            fromfile=f"a/{path.as_posix()}",
            tofile=f"b/{path.as_posix()}",
            n=context_lines,
        )
    )


def combine_diffs(diffs: dict[Path, str]) -> str:
    """Join per-file diffs in path order, skipping empty ones."""
    return "\n".join(diffs[p] for p in sorted(diffs, key=str) if diffs[p])
