from __future__ import annotations

from typing import Any, Sequence

from .document import Document
from .errors import NoMatchError
from .models import Path
from .render import selector


def unique(path: Path, targets: Sequence[Any], document: Document, scope: Any) -> bool:
    """Return True when the rendered path selects exactly ``targets`` within ``scope``."""
    css = selector(path)
    found = document.query_all(scope, css)
    if not found:
        raise NoMatchError(css)
    if len(found) != len(targets):
        return False
    return all(any(document.same_node(target, match) for match in found) for target in targets)
