"""Annotation record for one TODO-style comment block."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Annotation:
    """A TODO block extracted from source text.

    Parameters
    ----------
    line : int
        1-based line number of the header line.
    prefix : str
        Literal text before the keyword, e.g. ``"// "`` or ``"    # "``.
    keyword : str
        The trigger word that matched, e.g. ``"TODO"``.
    title : str
        Text after ``": "`` on the header line.
    issue_id : int | None
        Tracker issue number, None while the annotation is unreported.
    comments : list[str]
        Continuation lines in source order. An empty string stands for a
        bare comment leader line (``"//"``) inside the block.

    Examples
    --------
    >>> todo = Annotation(3, "# ", "FIXME", "Handle EOF", comments=["Soon."])
    >>> todo.header()
    '# FIXME: Handle EOF'
    >>> print(todo)
    3: FIXME: Handle EOF
      Soon.
    """

    line: int
    prefix: str
    keyword: str
    title: str
    issue_id: int | None = None
    comments: list[str] = field(default_factory=list)

    @property
    def is_reported(self) -> bool:
        """True once the annotation carries a tracker issue id."""
        return self.issue_id is not None

    @property
    def leader(self) -> str:
        """The prefix without trailing whitespace (``"// "`` -> ``"//"``)."""
        return self.prefix.rstrip()

    @property
    def marker(self) -> str:
        """The ``(#id)`` issue marker, or an empty string when unreported."""
        if self.issue_id is None:
            return ""
        return f"(#{self.issue_id})"

    def header(self, reported: bool | None = None) -> str:
        """Rebuild the header line exactly as it appears in source.

        Parameters
        ----------
        reported : bool | None
            Force the unreported (False) or reported (True) form. Defaults
            to the annotation's current state.
        """
        if reported is None:
            reported = self.is_reported
        if reported and self.issue_id is None:
            raise ValueError(f"Annotation on line {self.line} has no issue id")
        marker = self.marker if reported else ""
        return f"{self.prefix}{self.keyword}{marker}: {self.title}"

    def source_lines(self) -> list[str]:
        """Header plus continuation lines as they appear in source."""
        lines = [self.header()]
        for comment in self.comments:
            lines.append(self.prefix + comment if comment else self.leader)
        return lines

    def __str__(self) -> str:
        text = f"{self.line}: {self.keyword}{self.marker}: {self.title}"
        if self.comments:
            text += "\n  " + "\n  ".join(self.comments)
        return text
