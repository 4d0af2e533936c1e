from __future__ import annotations

from typing import Any, Iterator, Sequence

from .document import Document
from .models import Budget, FinderOptions, Path, penalty
from .oracle import unique
from .render import selector


def optimize(
    path: Path,
    targets: Sequence[Any],
    document: Document,
    scope: Any,
    options: FinderOptions,
    budget: Budget,
    visited: set[str] | None = None,
) -> Iterator[Path]:
    """Yield every shorter path obtained by dropping interior fragments.

    The target's own fragment is never dropped. Each removal that keeps the
    selector unique is yielded and optimized further. Running out of time
    ends the walk quietly.
    """
    if visited is None:
        visited = set()
    if len(path) <= 2 or len(path) <= options.optimized_min_length:
        return
    for index in range(1, len(path) - 1):
        if budget.timed_out():
            return
        shorter = path[:index] + path[index + 1 :]
        key = selector(shorter)
        if key in visited:
            continue
        visited.add(key)
        if unique(shorter, targets, document, scope):
            yield shorter
            yield from optimize(shorter, targets, document, scope, options, budget, visited)


def permutations(
    path: Path,
    targets: Sequence[Any],
    document: Document,
    scope: Any,
    *,
    maximum_length: int,
    maximum_score: float,
    budget: Budget,
) -> Iterator[Path]:
    """Yield reductions of ``path`` that beat ``maximum_score`` and stay unique."""
    if budget.timed_out():
        return
    if len(path) > maximum_length:
        for index in range(1, len(path) - 1):
            shorter = path[:index] + path[index + 1 :]
            yield from permutations(
                shorter,
                targets,
                document,
                scope,
                maximum_length=maximum_length,
                maximum_score=maximum_score,
                budget=budget,
            )
    if penalty(path) < maximum_score and unique(path, targets, document, scope):
        yield path
