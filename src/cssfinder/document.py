from __future__ import annotations

from typing import Any, Protocol, Sequence

from lxml import etree, html
from lxml.cssselect import CSSSelector, SelectorError

from .errors import InvalidInputError, QueryError
from .escaping import css_escape
from .models import NodeInfo


class Document(Protocol):
    """Query capability the finder needs from a host document."""

    def query_all(self, scope: Any, selector: str) -> Sequence[Any]: ...

    def describe(self, node: Any) -> NodeInfo: ...

    def parent(self, node: Any) -> Any | None: ...

    def is_element(self, node: Any) -> bool: ...

    def same_node(self, left: Any, right: Any) -> bool: ...

    def escape(self, token: str) -> str: ...

    def resolve_scope(self, root: Any | None) -> Any: ...

    def is_scope(self, node: Any, scope: Any) -> bool: ...

    def release(self) -> None: ...


def normalize_classes(raw: Sequence[str] | str | None) -> list[str]:
    if not raw:
        return []
    if isinstance(raw, str):
        items = raw.split()
    else:
        items = [item for item in raw if isinstance(item, str)]

    seen: set[str] = set()
    normalized: list[str] = []
    for item in items:
        clean = item.strip()
        if not clean or clean in seen:
            continue
        seen.add(clean)
        normalized.append(clean)
    return normalized


class LxmlDocument:
    """Document backed by an lxml tree, queried through cssselect."""

    def __init__(self, source: etree._ElementTree | etree._Element) -> None:
        if isinstance(source, etree._ElementTree):
            self.tree = source
        else:
            self.tree = source.getroottree()
        self.root = self.tree.getroot()

    @classmethod
    def from_element(cls, element: Any) -> LxmlDocument:
        if not isinstance(element, etree._Element):
            raise InvalidInputError(f"Expected an lxml element, got {type(element).__name__}.")
        return cls(element.getroottree())

    @classmethod
    def from_string(cls, markup: str | bytes) -> LxmlDocument:
        return cls(html.document_fromstring(markup).getroottree())

    @property
    def body(self) -> etree._Element | None:
        return next(self.root.iter("body"), None)

    def resolve_scope(self, root: Any | None) -> Any:
        if root is None or root is self.tree or root is self.body:
            return self.tree
        return root

    def is_scope(self, node: Any, scope: Any) -> bool:
        return node is scope

    def release(self) -> None:
        return None

    def query_all(self, scope: Any, selector: str) -> list[etree._Element]:
        matches = self._compile(selector)(self.root)
        if scope is self.tree:
            return matches
        return [match for match in matches if _is_descendant(match, scope)]

    def describe(self, node: etree._Element) -> NodeInfo:
        tag = self.tag_name(node)
        attributes = tuple((str(name), str(value)) for name, value in node.items() if name != "class")
        return NodeInfo(
            tag=tag,
            id=node.get("id"),
            classes=tuple(normalize_classes(node.get("class"))),
            attributes=attributes,
            index=self._index_of(node),
            index_of_type=self._index_of(node, tag),
        )

    def parent(self, node: etree._Element) -> etree._Element | None:
        return node.getparent()

    def is_element(self, node: Any) -> bool:
        return isinstance(node, etree._Element) and isinstance(node.tag, str)

    def same_node(self, left: Any, right: Any) -> bool:
        return left is right

    def escape(self, token: str) -> str:
        return css_escape(token)

    @staticmethod
    def tag_name(node: etree._Element) -> str:
        tag = node.tag
        if tag.startswith("{"):
            tag = tag.split("}", 1)[1]
        return tag.lower()

    def _index_of(self, node: etree._Element, tag: str | None = None) -> int | None:
        parent = node.getparent()
        if parent is None:
            # A parentless lxml element is the document element.
            return 1
        index = 0
        for child in parent:
            if not isinstance(child.tag, str):
                continue
            if tag is None or self.tag_name(child) == tag:
                index += 1
            if child is node:
                return index
        return None

    def _compile(self, selector: str) -> CSSSelector:
        try:
            return CSSSelector(selector, translator="html")
        except SelectorError as exc:
            raise QueryError(selector, str(exc)) from exc


def _is_descendant(node: etree._Element, ancestor: etree._Element) -> bool:
    return any(parent is ancestor for parent in node.iterancestors())
