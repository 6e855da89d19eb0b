"""
Tests for todotrack.todos.mutator module.

mark() stamps issue ids into unreported headers; remove() deletes reported
blocks. Both are pure text rewrites.

Coverage targets:
- Stamping and removing the documented examples
- Untouched text is returned as the same object
- Whole-line matching and duplicate headers
- CRLF line endings and regex metacharacters
- Extract, mark, extract, remove round trip
"""
from __future__ import annotations

from todotrack.todos.annotation import Annotation
from todotrack.todos.mutator import mark, remove
from todotrack.todos.parser import extract


# =============================================================================
# mark() Tests
# =============================================================================

class TestMark:
    """Tests for stamping issue ids."""

    def test_mark_block(self):
        """
        Only the header changes; continuation lines and the rest stay.
        """
        text = "// TODO: Something\n// More\n\nSomething Else"
        [todo] = extract(["TODO"], text)
        todo.issue_id = 42

        assert mark(text, [todo]) == "// TODO(#42): Something\n// More\n\nSomething Else"

    def test_unreported_annotations_ignored(self):
        text = "// TODO: Something\n"
        annotations = extract(["TODO"], text)

        assert mark(text, annotations) is text

    def test_no_match_returns_same_text(self):
        text = "nothing here\n"
        todo = Annotation(1, "// ", "TODO", "Something", issue_id=1)

        assert mark(text, [todo]) is text

    def test_mark_is_idempotent(self):
        text = "// TODO: Something\n"
        [todo] = extract(["TODO"], text)
        todo.issue_id = 42

        once = mark(text, [todo])

        assert mark(once, [todo]) is once

    def test_whole_line_only(self):
        """
        ``// TODO: Fix`` must not stamp ``// TODO: Fix later``.
        """
        text = "// TODO: Fix later\n// TODO: Fix\n"
        later, fix = extract(["TODO"], text)
        fix.issue_id = 2

        assert mark(text, [later, fix]) == "// TODO: Fix later\n// TODO(#2): Fix\n"

    def test_duplicate_headers_get_own_ids(self):
        text = "// TODO: Same\n\n// TODO: Same\n"
        first, second = extract(["TODO"], text)
        first.issue_id = 1
        second.issue_id = 2

        assert mark(text, [first, second]) == "// TODO(#1): Same\n\n// TODO(#2): Same\n"

    def test_duplicate_headers_only_one_reported(self):
        text = "// TODO: Same\n\n// TODO: Same\n"
        first, second = extract(["TODO"], text)
        second.issue_id = 2

        assert mark(text, [first, second]) == "// TODO: Same\n\n// TODO(#2): Same\n"

    def test_moved_header_still_marked(self):
        """
        A header no longer on its recorded line is stamped by its text.
        """
        todo = Annotation(1, "// ", "TODO", "Moved", issue_id=8)

        assert mark("\n\n// TODO: Moved\n", [todo]) == "\n\n// TODO(#8): Moved\n"

    def test_crlf_preserved(self):
        text = "// TODO: x\r\n// y\r\nz\r\n"
        [todo] = extract(["TODO"], text)
        todo.issue_id = 5

        assert mark(text, [todo]) == "// TODO(#5): x\r\n// y\r\nz\r\n"

    def test_trailing_cr_at_end_of_text(self):
        text = "x\r\n// TODO: Something\r"
        [todo] = extract(["TODO"], text)
        todo.issue_id = 42

        assert mark(text, [todo]) == "x\r\n// TODO(#42): Something\r"

    def test_metacharacters(self):
        text = "# TODO: fix (a+b)*[c] $d \\1 \\g<0>\n"
        [todo] = extract(["TODO"], text)
        todo.issue_id = 9

        assert mark(text, [todo]) == "# TODO(#9): fix (a+b)*[c] $d \\1 \\g<0>\n"

    def test_mark_many_keywords(self, sample_python_source: str):
        annotations = extract(["TODO", "FIXME"], sample_python_source)
        annotations[0].issue_id = 11

        new = mark(sample_python_source, annotations)

        assert "# FIXME(#11): Read from the environment\n" in new
        assert "# TODO(#3): Remove this helper\n" in new


# =============================================================================
# remove() Tests
# =============================================================================

class TestRemove:
    """Tests for deleting reported blocks."""

    def test_remove_block(self):
        """
        The block and its line separator go; the blank line after it stays.
        """
        text = "// TODO(#42): Something\n\nSomething Else"
        [todo] = extract(["TODO"], text)

        assert remove(text, [todo]) == "\nSomething Else"

    def test_remove_with_continuation(self):
        text = "a\n// TODO(#1): x\n// more\n//\n// end\nb\n"
        [todo] = extract(["TODO"], text)

        assert todo.comments == ["more", "", "end"]
        assert remove(text, [todo]) == "a\nb\n"

    def test_remove_at_end_of_text(self):
        text = "a\n// TODO(#1): x"
        [todo] = extract(["TODO"], text)

        assert remove(text, [todo]) == "a\n"

    def test_remove_crlf(self):
        text = "// TODO(#1): x\r\n// y\r\nz\r\n"
        [todo] = extract(["TODO"], text)

        assert remove(text, [todo]) == "z\r\n"

    def test_remove_trailing_cr_at_end_of_text(self):
        text = "x\r\n// TODO(#1): y\r\n// more\r"
        [todo] = extract(["TODO"], text)

        assert remove(text, [todo]) == "x\r\n"

    def test_longer_block_with_same_header(self):
        """
        A shorter block earlier in the file must not claim the top of a
        longer block with the same header.
        """
        text = "// TODO(#1): x\n// a\ncode\n// TODO(#1): x\n// a\n// b\nend\n"
        annotations = extract(["TODO"], text)

        assert [a.comments for a in annotations] == [["a"], ["a", "b"]]
        assert remove(text, annotations) == "code\nend\n"

    def test_unreported_ignored(self):
        text = "// TODO: x\n"
        annotations = extract(["TODO"], text)

        assert remove(text, annotations) is text

    def test_edited_block_left_alone(self):
        todo = Annotation(1, "// ", "TODO", "x", issue_id=1, comments=["more"])
        text = "// TODO(#1): x\n// changed\n"

        assert remove(text, [todo]) is text

    def test_remove_selected_only(self):
        text = "// TODO(#1): one\ncode\n// TODO(#2): two\n"
        one, two = extract(["TODO"], text)

        assert remove(text, [two]) == "// TODO(#1): one\ncode\n"

    def test_remove_indented(self, sample_c_source: str):
        annotations = extract(["TODO"], sample_c_source)
        reported = [a for a in annotations if a.is_reported]

        new = remove(sample_c_source, reported)

        assert "Check the result" not in new
        assert "    int x = must(run());\n" in new
        assert "// TODO: Handle timeouts\n" in new


# =============================================================================
# Round Trip Tests
# =============================================================================

class TestRoundTrip:
    """Tests for the full extract, mark, remove lifecycle."""

    def test_lifecycle(self, sample_c_source: str):
        annotations = extract(["TODO"], sample_c_source)
        for issue_id, todo in enumerate(annotations, 100):
            if not todo.is_reported:
                todo.issue_id = issue_id

        marked = mark(sample_c_source, annotations)
        reparsed = extract(["TODO"], marked)

        assert [(a.line, a.issue_id, a.comments) for a in reparsed] == [
            (a.line, a.issue_id, a.comments) for a in annotations
        ]

        cleaned = remove(marked, reparsed)

        assert extract(["TODO"], cleaned) == []
        assert cleaned == "int main(void) {\n    int x = must(run());\n}\n"
