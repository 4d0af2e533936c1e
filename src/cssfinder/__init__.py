"""Unique CSS selector generation for document nodes."""

from typing import Any

from .document import Document, LxmlDocument
from .errors import (
    FinderError,
    InvalidInputError,
    NoMatchError,
    QueryError,
    SearchTimeoutError,
    SelectorNotFoundError,
)
from .escaping import css_escape
from .finder import find
from .models import FinderOptions, Knot, NodeInfo
from .render import selector
from .selector_rules import DEFAULT_PREDICATES, attr, class_name, id_name, tag_name, word_like

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PREDICATES",
    "Document",
    "FinderError",
    "FinderOptions",
    "InvalidInputError",
    "Knot",
    "LxmlDocument",
    "NoMatchError",
    "NodeInfo",
    "PlaywrightDocument",
    "QueryError",
    "SearchTimeoutError",
    "SelectorNotFoundError",
    "attr",
    "class_name",
    "css_escape",
    "find",
    "id_name",
    "selector",
    "tag_name",
    "word_like",
]


def __getattr__(name: str) -> Any:
    # Playwright is only imported once a browser document is asked for.
    if name == "PlaywrightDocument":
        from .browser_document import PlaywrightDocument

        return PlaywrightDocument
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
