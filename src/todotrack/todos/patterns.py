"""Regular expressions matching the exact source form of an annotation.

Every fragment taken from an annotation goes through ``re.escape``; the only
non-literal parts of a generated pattern are the line anchors and the line
separator, which accepts both ``\\n`` and ``\\r\\n``. A last line closed by a
bare ``\\r`` ends the text like a ``\\r\\n`` would. Generated patterns are
meant to be compiled with ``re.MULTILINE`` (see :func:`alternation`).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from todotrack.core.errors import InternalPatternError
from todotrack.todos.annotation import Annotation

# Matches nothing, used for an empty alternation
NEVER_MATCH = r"(?!)"

SEPARATOR = r"\r?\n"
LINE_END = r"(?=\r?\n|\r?\Z)"
BLOCK_END = r"(?:\r?\n|\r?\Z)"


def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern[str]:
    """Compile a generated pattern.

    Raises
    ------
    InternalPatternError
        If the pattern does not compile.
    """
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InternalPatternError(pattern, e) from e


def unreported_literal(annotation: Annotation) -> str:
    """Escaped header text without an issue marker."""
    return re.escape(annotation.header(reported=False))


def reported_literal(annotation: Annotation) -> str:
    """Escaped header text with the ``(#id)`` marker."""
    return re.escape(annotation.header(reported=True))


def unreported_pattern(annotation: Annotation) -> str:
    """A whole-line match of the unreported header.

    The line anchors keep ``// TODO: Fix`` from matching the start of
    ``// TODO: Fix later`` or the tail of another header.
    """
    return f"^{unreported_literal(annotation)}{LINE_END}"


def continuation_literal(annotation: Annotation, comment: str) -> str:
    """Escaped source form of one continuation line."""
    if comment:
        return re.escape(annotation.prefix + comment)
    return re.escape(annotation.leader) + r"[ \t]*"


def block_pattern(annotation: Annotation) -> str:
    """Match a whole reported block and the line separator that ends it.

    Raises
    ------
    ValueError
        If the annotation has no issue id.
    """
    if annotation.issue_id is None:
        raise ValueError(f"Annotation on line {annotation.line} has no issue id")

    parts = [f"^{reported_literal(annotation)}"]
    for comment in annotation.comments:
        parts.append(SEPARATOR + continuation_literal(annotation, comment))
    parts.append(BLOCK_END)
    return "".join(parts)


def alternation(patterns: Sequence[str], flags: int = re.MULTILINE) -> re.Pattern[str]:
    """Compile many patterns into one.

    Alternative ``i`` is wrapped in the named group ``p{i}`` so callers can
    tell which pattern produced a match via ``match.lastgroup``.
    """
    if not patterns:
        return compile_pattern(NEVER_MATCH, flags)
    joined = "|".join(f"(?P<p{i}>{p})" for i, p in enumerate(patterns))
    return compile_pattern(joined, flags)


@dataclass(frozen=True)
class AnnotationPatterns:
    """All textual forms of one annotation.

    Attributes
    ----------
    unreported : str
        Escaped header without issue marker.
    reported : str | None
        Escaped header with issue marker, None when unreported.
    replacement : str | None
        Raw reported header text used when stamping, None when unreported.
    block : str | None
        Pattern for the full reported block, None when unreported.
    """

    unreported: str
    reported: str | None
    replacement: str | None
    block: str | None

    @classmethod
    def build(cls, annotation: Annotation) -> AnnotationPatterns:
        if annotation.issue_id is None:
            return cls(unreported_literal(annotation), None, None, None)
        return cls(
            unreported=unreported_literal(annotation),
            reported=reported_literal(annotation),
            replacement=annotation.header(reported=True),
            block=block_pattern(annotation),
        )
