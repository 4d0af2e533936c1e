from __future__ import annotations

import logging
from typing import Any, Mapping

from .document import Document, LxmlDocument
from .errors import InvalidInputError, SearchTimeoutError, SelectorNotFoundError
from .models import Budget, FinderOptions, Path, SearchStatus, by_penalty, merge_options, penalty
from .optimizer import optimize, permutations
from .render import selector
from .search import fallback, run_search

logger = logging.getLogger("cssfinder.finder")


def find(
    targets: Any,
    options: FinderOptions | Mapping[str, Any] | None = None,
    *,
    document: Document | None = None,
    **overrides: Any,
) -> str:
    """Return a CSS selector that matches exactly ``targets``.

    ``targets`` is one node or a non-empty list of nodes. When ``document``
    is omitted the nodes must be lxml elements and are queried with
    ``LxmlDocument``. Options may be given as ``FinderOptions``, a mapping,
    or keyword overrides.
    """
    nodes = _target_list(targets)
    config = merge_options(options, overrides)
    if document is None:
        document = LxmlDocument.from_element(nodes[0])

    if any(not document.is_element(node) for node in nodes):
        raise InvalidInputError("Can't generate CSS selector for non-element node type.")
    if all(document.describe(node).tag == "html" for node in nodes):
        return "html"

    try:
        return _select(nodes, document, config)
    finally:
        document.release()


def _select(nodes: list[Any], document: Document, config: FinderOptions) -> str:
    budget = Budget.for_options(config)
    scope = document.resolve_scope(config.root)
    result = run_search(nodes, document, scope, config, budget)

    if result.status is SearchStatus.BUDGET_EXCEEDED:
        if not result.paths:
            logger.warning(
                "Search budget exceeded after %s checks and %.1fms; trying positional fallback",
                result.checks,
                budget.elapsed_ms(),
            )
            path = fallback(nodes, document, scope)
            if path is None:
                raise SearchTimeoutError(config.timeout_ms)
            css = selector(path)
            logger.info("Using positional fallback selector %r", css)
            return css
        logger.warning("Search budget exceeded; continuing with %s unique path(s)", len(result.paths))

    if not result.paths:
        raise SelectorNotFoundError("Selector was not found.")

    found = sorted(result.paths, key=by_penalty)
    winner, *others = found
    optimized: list[Path] = [winner, *optimize(winner, nodes, document, scope, config, budget)]
    optimized.sort(key=by_penalty)

    if len(nodes) > 1:
        best = optimized[0]
        candidates: list[Path] = []
        for path in others:
            for permutation in permutations(
                path,
                nodes,
                document,
                scope,
                maximum_length=len(best),
                maximum_score=penalty(best),
                budget=budget,
            ):
                candidates.append(permutation)
                candidates.extend(optimize(permutation, nodes, document, scope, config, budget))
        candidates.append(best)
        candidates.sort(key=by_penalty)
        optimized = candidates

    css = selector(optimized[0])
    logger.debug(
        "Selector %r for %s target(s): %s checks, %.1fms",
        css,
        len(nodes),
        budget.checks,
        budget.elapsed_ms(),
    )
    return css


def _target_list(targets: Any) -> list[Any]:
    # lxml elements are sequences of their children, so only real lists count.
    nodes = list(targets) if isinstance(targets, (list, tuple)) else [targets]
    if not nodes:
        raise InvalidInputError("At least one target node is required.")
    return nodes
