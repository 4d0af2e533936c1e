from __future__ import annotations

from typing import Any

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from .errors import QueryError
from .escaping import css_escape
from .models import NodeInfo

DESCRIBE_SCRIPT = """
(el) => {
  const indexOf = (tagName) => {
    const parent = el.parentNode;
    if (!parent || !parent.firstChild) {
      return null;
    }
    let index = 0;
    for (let child = parent.firstChild; child; child = child.nextSibling) {
      if (
        child.nodeType === Node.ELEMENT_NODE &&
        (tagName === null || child.tagName.toLowerCase() === tagName)
      ) {
        index += 1;
      }
      if (child === el) {
        break;
      }
    }
    return index;
  };

  const tag = el.tagName.toLowerCase();
  const attributes = [];
  for (const attr of Array.from(el.attributes || [])) {
    if (attr.name !== 'class') {
      attributes.push([attr.name, attr.value]);
    }
  }
  return {
    tag,
    id: el.getAttribute('id'),
    classes: Array.from(el.classList || []),
    attributes,
    index: indexOf(null),
    index_of_type: indexOf(tag),
  };
}
"""

IS_ELEMENT_SCRIPT = "(node) => node.nodeType === Node.ELEMENT_NODE"
PARENT_SCRIPT = "(el) => el.parentElement"
SAME_NODE_SCRIPT = "(el, other) => el === other"
IS_BODY_SCRIPT = "(el) => el === el.ownerDocument.body"


class PlaywrightDocument:
    """Live browser page queried through Playwright's sync API."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self._walked: list[ElementHandle] = []

    def resolve_scope(self, root: Any | None) -> Any:
        if root is None or root is self.page:
            return self.page
        if root.evaluate(IS_BODY_SCRIPT):
            return self.page
        return root

    def is_scope(self, node: Any, scope: Any) -> bool:
        if scope is self.page:
            return False
        return self.same_node(node, scope)

    def query_all(self, scope: Any, selector: str) -> list[ElementHandle]:
        try:
            return scope.query_selector_all(selector)
        except PlaywrightError as exc:
            raise QueryError(selector, exc.message) from exc

    def describe(self, node: ElementHandle) -> NodeInfo:
        payload = node.evaluate(DESCRIBE_SCRIPT)
        return NodeInfo(
            tag=str(payload.get("tag") or ""),
            id=payload.get("id"),
            classes=tuple(str(item) for item in payload.get("classes") or []),
            attributes=tuple((str(name), str(value)) for name, value in payload.get("attributes") or []),
            index=payload.get("index"),
            index_of_type=payload.get("index_of_type"),
        )

    def parent(self, node: ElementHandle) -> ElementHandle | None:
        handle = node.evaluate_handle(PARENT_SCRIPT)
        element = handle.as_element()
        if element is None:
            handle.dispose()
            return None
        self._walked.append(element)
        return element

    def release(self) -> None:
        """Dispose the parent handles opened by ancestor walks."""
        while self._walked:
            self._walked.pop().dispose()

    def is_element(self, node: Any) -> bool:
        if not hasattr(node, "evaluate"):
            return False
        return bool(node.evaluate(IS_ELEMENT_SCRIPT))

    def same_node(self, left: Any, right: Any) -> bool:
        if left is right:
            return True
        return bool(left.evaluate(SAME_NODE_SCRIPT, right))

    def escape(self, token: str) -> str:
        return css_escape(token)
