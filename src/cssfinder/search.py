from __future__ import annotations

import logging
import math
from itertools import product
from typing import Any, Iterator, Sequence

from .document import Document
from .fragments import nth_of_type, tie
from .models import Budget, FinderOptions, Knot, Path, SearchResult, SearchStatus, by_penalty
from .oracle import unique

logger = logging.getLogger("cssfinder.search")


def combinations(stack: Sequence[Sequence[Knot]]) -> Iterator[Path]:
    for combination in product(*stack):
        yield list(combination)


def search(
    targets: Sequence[Any],
    document: Document,
    scope: Any,
    options: FinderOptions,
    budget: Budget,
) -> Iterator[Path]:
    """Yield candidate paths for ``targets[0]``, shallow and cheap ones first.

    Each ancestor level adds its fragments to the stack and every
    combination of one fragment per level becomes a candidate. Nothing is
    yielded until ``seed_min_length`` levels exist; from then on each new
    level's batch is sorted by penalty and yielded before walking further up.
    """
    stack: list[list[Knot]] = []
    pending: list[Path] = []
    current = targets[0]
    depth = 0
    while current is not None and not document.is_scope(current, scope):
        level = tie(current, document, options)
        for knot in level:
            knot.level = depth
        stack.append(level)
        current = document.parent(current)
        depth += 1

        for candidate in combinations(stack):
            if budget.timed_out():
                logger.debug("Search interrupted at depth %s after %.1fms", depth, budget.elapsed_ms())
                budget.interrupted = True
                return
            pending.append(candidate)

        if depth >= options.seed_min_length:
            pending.sort(key=by_penalty)
            yield from pending
            pending = []

    pending.sort(key=by_penalty)
    yield from pending


def run_search(
    targets: Sequence[Any],
    document: Document,
    scope: Any,
    options: FinderOptions,
    budget: Budget,
) -> SearchResult:
    result = SearchResult(status=SearchStatus.EXHAUSTED)
    for candidate in search(targets, document, scope, options, budget):
        if budget.exceeded():
            result.status = SearchStatus.BUDGET_EXCEEDED
            break
        budget.checks += 1
        if unique(candidate, targets, document, scope):
            result.paths.append(candidate)
            if len(targets) == 1:
                result.status = SearchStatus.FOUND
                break
    else:
        if result.paths:
            result.status = SearchStatus.FOUND
        elif budget.interrupted:
            result.status = SearchStatus.BUDGET_EXCEEDED

    result.checks = budget.checks
    logger.debug(
        "Search finished: status=%s found=%s checks=%s elapsed=%.1fms",
        result.status.value,
        len(result.paths),
        result.checks,
        budget.elapsed_ms(),
    )
    return result


def fallback(targets: Sequence[Any], document: Document, scope: Any) -> Path | None:
    """Build a purely positional ``tag:nth-of-type(n)`` chain up to the scope."""
    path: Path = []
    current = targets[0]
    depth = 0
    while current is not None and not document.is_scope(current, scope):
        info = document.describe(current)
        if info.index_of_type is None:
            return None
        tag = document.escape(info.tag)
        path.append(Knot(nth_of_type(tag, info.index_of_type), math.nan, depth))
        current = document.parent(current)
        depth += 1

    if path and unique(path, targets, document, scope):
        return path
    return None
