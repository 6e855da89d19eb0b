"""Stamp and strip annotations in source text.

Both operations are pure: they return new text and never touch the input.
When nothing qualifies or nothing matches, the very same ``text`` object is
returned, so ``new is text`` tells a caller there is nothing to write.
"""
from __future__ import annotations

import bisect
import re
from typing import Iterable

from todotrack.todos.annotation import Annotation
from todotrack.todos.patterns import alternation, block_pattern, unreported_pattern


def _line_starts(text: str) -> list[int]:
    starts = [0]
    starts.extend(m.end() for m in re.finditer("\n", text))
    return starts


def mark(text: str, annotations: Iterable[Annotation]) -> str:
    """Replace unreported headers with their reported form.

    Only annotations carrying an ``issue_id`` qualify. A match is attributed
    to the annotation recorded on the same line; a header that moved falls
    back to the first unused annotation with the same text. Identical
    headers on different lines therefore each get their own id.

    Parameters
    ----------
    text : str
        Source text the annotations were extracted from.
    annotations : Iterable[Annotation]
        Candidates; unreported ones are ignored.

    Returns
    -------
    str
        The rewritten text, or ``text`` itself if nothing was replaced.

    Examples
    --------
    >>> todo = Annotation(1, "// ", "TODO", "Something", issue_id=42)
    >>> mark("// TODO: Something\\n", [todo])
    '// TODO(#42): Something\\n'
    """
    reported = [a for a in annotations if a.issue_id is not None]
    if not reported:
        return text

    # One alternative per distinct header; duplicates share it
    literals: dict[str, list[Annotation]] = {}
    for annotation in reported:
        literals.setdefault(annotation.header(reported=False), []).append(annotation)

    headers = list(literals)
    regex = alternation([unreported_pattern(literals[h][0]) for h in headers])
    matches = list(regex.finditer(text))
    if not matches:
        return text

    starts = _line_starts(text)
    used: set[int] = set()
    chosen: dict[int, Annotation] = {}

    def candidates(match: re.Match[str]) -> list[Annotation]:
        return literals[headers[int(match.lastgroup[1:])]]

    # Annotations still on their recorded line claim their match first
    for i, match in enumerate(matches):
        line = bisect.bisect_right(starts, match.start())
        for annotation in candidates(match):
            if annotation.line == line and id(annotation) not in used:
                chosen[i] = annotation
                used.add(id(annotation))
                break

    for i, match in enumerate(matches):
        if i in chosen:
            continue
        for annotation in candidates(match):
            if id(annotation) not in used:
                chosen[i] = annotation
                used.add(id(annotation))
                break

    if not chosen:
        return text

    pieces: list[str] = []
    position = 0
    for i, match in enumerate(matches):
        if i not in chosen:
            continue
        pieces.append(text[position:match.start()])
        pieces.append(chosen[i].header(reported=True))
        position = match.end()
    pieces.append(text[position:])
    return "".join(pieces)


def remove(text: str, annotations: Iterable[Annotation]) -> str:
    """Delete reported blocks, continuation lines included.

    Each block's trailing line separator is removed with it, so the line
    that followed the block moves up without leaving a blank line behind.
    Unreported annotations are ignored.

    Returns
    -------
    str
        The rewritten text, or ``text`` itself if nothing was removed.

    Examples
    --------
    >>> todo = Annotation(1, "// ", "TODO", "Something", issue_id=42)
    >>> remove("// TODO(#42): Something\\n\\nSomething Else", [todo])
    '\\nSomething Else'
    """
    reported = [a for a in annotations if a.issue_id is not None]
    # Longest first, a shorter block with the same header also matches the
    # top of a longer one
    reported.sort(key=lambda a: len(a.comments), reverse=True)
    patterns = list(dict.fromkeys(block_pattern(a) for a in reported))
    if not patterns:
        return text

    new_text, count = alternation(patterns).subn("", text)
    if count == 0:
        return text
    return new_text
