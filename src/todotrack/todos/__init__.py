"""TODO annotation lifecycle.

This package extracts TODO blocks from plain source text, stamps them with
issue ids once reported, and strips them when their issue closes.

Classes
-------
Annotation
    One TODO block: header fields plus continuation lines.

AnnotationParser
    Extract annotations from text.

AnnotationPatterns
    Escaped regular expressions for an annotation's source forms.

AnnotationFinder
    Find annotations across the files of a project.

TodoManager
    List, report and purge annotations.

AnnotationReporter
    Render listings as text, Markdown or JSON.

Functions
---------
extract
    ``extract(keywords, text)`` shorthand for the parser.

mark, remove
    Pure text rewrites used by the manager.

Examples
--------
>>> from todotrack.todos import extract, mark
>>> text = "// TODO: Something\\n// More\\n"
>>> [todo] = extract(["TODO"], text)
>>> todo.issue_id = 42
>>> mark(text, [todo])
'// TODO(#42): Something\\n// More\\n'
"""

from todotrack.todos.annotation import Annotation
from todotrack.todos.finder import AnnotationFinder, FoundAnnotation
from todotrack.todos.manager import TodoManager
from todotrack.todos.mutator import mark, remove
from todotrack.todos.parser import AnnotationParser, extract
from todotrack.todos.patterns import AnnotationPatterns
from todotrack.todos.reporter import AnnotationReporter

__all__ = [
    "Annotation",
    "AnnotationParser",
    "AnnotationPatterns",
    "AnnotationFinder",
    "FoundAnnotation",
    "TodoManager",
    "AnnotationReporter",
    "extract",
    "mark",
    "remove",
]
