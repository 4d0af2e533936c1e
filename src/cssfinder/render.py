from __future__ import annotations

from .models import Path


def selector(path: Path) -> str:
    """Render a path, target first, into a selector string.

    Consecutive ancestor levels are joined with the child combinator; a gap
    left by a removed level becomes a descendant combinator.
    """
    node = path[0]
    query = node.name
    for knot in path[1:]:
        level = knot.level or 0
        if node.level == level - 1:
            query = f"{knot.name} > {query}"
        else:
            query = f"{knot.name} {query}"
        node = knot
    return query
