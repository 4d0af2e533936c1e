from __future__ import annotations


class FinderError(Exception):
    """Base class for selector generation failures."""


class InvalidInputError(FinderError, ValueError):
    """Raised when a target is not an element node."""


class QueryError(FinderError):
    """Raised when the document query engine rejects a generated selector."""

    def __init__(self, selector: str, message: str) -> None:
        super().__init__(f"Can't query selector {selector!r}: {message}")
        self.selector = selector


class NoMatchError(FinderError):
    """Raised when a generated selector matches no node at all."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"Can't select any node with this selector: {selector}")
        self.selector = selector


class SelectorNotFoundError(FinderError):
    """Raised when neither the search nor the fallback produced a unique selector."""


class SearchTimeoutError(SelectorNotFoundError):
    """Raised when the search budget ran out and no fallback selector exists."""

    def __init__(self, timeout_ms: float) -> None:
        super().__init__(f"Timeout: Can't find a unique selector after {timeout_ms}ms")
        self.timeout_ms = timeout_ms
