from __future__ import annotations

from typing import Any

from .document import Document
from .models import (
    ATTR_PENALTY,
    CLASS_PENALTY,
    ID_PENALTY,
    NTH_CHILD_PENALTY,
    NTH_OF_TYPE_PENALTY,
    TAG_PENALTY,
    FinderOptions,
    Knot,
)


def nth_child(tag: str, index: int) -> str:
    if tag == "html":
        return "html"
    return f"{tag}:nth-child({index})"


def nth_of_type(tag: str, index: int) -> str:
    if tag == "html":
        return "html"
    return f"{tag}:nth-of-type({index})"


def tie(node: Any, document: Document, options: FinderOptions) -> list[Knot]:
    """Collect every admissible selector fragment for one node, cheapest kinds first."""
    info = document.describe(node)
    level: list[Knot] = []

    if info.id and options.id_name(info.id):
        level.append(Knot("#" + document.escape(info.id), ID_PENALTY))

    for name in info.classes:
        if options.class_name(name):
            level.append(Knot("." + document.escape(name), CLASS_PENALTY))

    for name, value in info.attributes:
        if name == "class":
            continue
        if options.attr(name, value):
            level.append(Knot(f'[{document.escape(name)}="{document.escape(value)}"]', ATTR_PENALTY))

    tag = document.escape(info.tag)
    if options.tag_name(info.tag):
        level.append(Knot(tag, TAG_PENALTY))
        if info.index_of_type is not None:
            level.append(Knot(nth_of_type(tag, info.index_of_type), NTH_OF_TYPE_PENALTY))

    if info.index is not None:
        level.append(Knot(nth_child(tag, info.index), NTH_CHILD_PENALTY))

    return level
