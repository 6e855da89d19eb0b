"""TODO block parser for extracting annotations from plain source text."""
from __future__ import annotations

import re
from typing import Iterable, Iterator

from todotrack.core.errors import ConfigurationError
from todotrack.todos.annotation import Annotation
from todotrack.todos.patterns import compile_pattern


def split_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` without their terminators.

    Lines end at ``\\n``; a single ``\\r`` closing a line is dropped, on the
    last line too. A trailing newline does not produce an extra empty line.
    """
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


class AnnotationParser:
    """Parse TODO blocks out of source text.

    A block starts at a header line::

        <prefix><KEYWORD>[(#<id>)]: <title>

    and continues over the following lines that start with the same prefix.
    A line carrying only the comment leader (``//`` for a ``"// "`` prefix)
    is kept as an empty comment. Any other line ends the block.

    Parameters
    ----------
    keywords : Iterable[str]
        Trigger words. Must not be empty.

    Raises
    ------
    ConfigurationError
        If no keyword is given.

    Examples
    --------
    >>> parser = AnnotationParser(["TODO", "FIXME"])
    >>> [a.title for a in parser.parse("// TODO: One\\n# FIXME(#3): Two\\n")]
    ['One', 'Two']
    """

    def __init__(self, keywords: Iterable[str]) -> None:
        unique = list(dict.fromkeys(k for k in keywords if k))
        if not unique:
            raise ConfigurationError("must provide at least one keyword")

        # Longest first so a keyword never shadows a longer one it prefixes
        self.keywords: tuple[str, ...] = tuple(sorted(unique, key=len, reverse=True))
        alternation = "|".join(re.escape(k) for k in self.keywords)
        self.pattern = compile_pattern(
            r"(?P<prefix>.*)"
            rf"(?P<keyword>{alternation})"
            r"(?:\(#(?P<issue_id>[0-9]+)\))?"
            r": (?P<title>.+)"
        )

    def parse_line(self, line: str, line_number: int = 0) -> Annotation | None:
        """Parse a single line as a block header.

        Parameters
        ----------
        line : str
            The line, without its terminator.
        line_number : int
            1-based line number to record on the annotation.

        Returns
        -------
        Annotation | None
            A new annotation with no comments, or None if the line is not a
            header.
        """
        match = self.pattern.fullmatch(line)
        if not match:
            return None

        issue_id = match.group("issue_id")
        return Annotation(
            line=line_number,
            prefix=match.group("prefix"),
            keyword=match.group("keyword"),
            title=match.group("title"),
            issue_id=int(issue_id) if issue_id is not None else None,
        )

    def parse(self, text: str) -> list[Annotation]:
        """Parse every TODO block in ``text``, in source order."""
        annotations: list[Annotation] = []
        current: _Block | None = None

        for line_number, line in enumerate(split_lines(text), 1):
            header = self.parse_line(line, line_number)
            if header is not None:
                if current is not None:
                    annotations.append(current.annotation)
                current = _Block(header)
            elif current is not None and not current.feed(line):
                annotations.append(current.annotation)
                current = None

        if current is not None:
            annotations.append(current.annotation)

        return annotations


class _Block:
    """An open annotation collecting its continuation lines."""

    def __init__(self, annotation: Annotation) -> None:
        self.annotation = annotation
        leader = annotation.leader
        if leader:
            self._comment = compile_pattern(rf"{re.escape(annotation.prefix)}(?P<comment>.+)")
            self._bare = compile_pattern(rf"{re.escape(leader)}[ \t]*")
        else:
            # Bare indentation is not a comment leader; nothing continues it
            self._comment = None
            self._bare = None

    def feed(self, line: str) -> bool:
        """Append ``line`` as a comment if it continues the block."""
        if self._comment is None or self._bare is None:
            return False

        match = self._comment.fullmatch(line)
        if match:
            self.annotation.comments.append(match.group("comment"))
            return True

        if self._bare.fullmatch(line):
            self.annotation.comments.append("")
            return True

        return False


def extract(keywords: Iterable[str], text: str) -> list[Annotation]:
    """Extract all annotations from ``text``.

    Shorthand for ``AnnotationParser(keywords).parse(text)``.
    """
    return AnnotationParser(keywords).parse(text)
