from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from time import monotonic
from typing import Any, Callable, Mapping

from .selector_rules import DEFAULT_PREDICATES

NamePredicate = Callable[[str], bool]
AttrPredicate = Callable[[str, str], bool]

ID_PENALTY = 0
CLASS_PENALTY = 1
ATTR_PENALTY = 2
TAG_PENALTY = 5
NTH_OF_TYPE_PENALTY = 10
NTH_CHILD_PENALTY = 50


@dataclass(slots=True)
class Knot:
    name: str
    penalty: float
    level: int | None = None


Path = list[Knot]


@dataclass(frozen=True, slots=True)
class NodeInfo:
    tag: str
    id: str | None = None
    classes: tuple[str, ...] = ()
    attributes: tuple[tuple[str, str], ...] = ()
    index: int | None = None
    index_of_type: int | None = None


_OPTION_ALIASES = {
    "idName": "id_name",
    "className": "class_name",
    "tagName": "tag_name",
    "timeoutMs": "timeout_ms",
    "seedMinLength": "seed_min_length",
    "optimizedMinLength": "optimized_min_length",
    "maxNumberOfPathChecks": "max_number_of_path_checks",
}


@dataclass(frozen=True, slots=True)
class FinderOptions:
    root: Any = None
    id_name: NamePredicate = DEFAULT_PREDICATES["id_name"]
    class_name: NamePredicate = DEFAULT_PREDICATES["class_name"]
    tag_name: NamePredicate = DEFAULT_PREDICATES["tag_name"]
    attr: AttrPredicate = DEFAULT_PREDICATES["attr"]
    timeout_ms: float = 1000
    seed_min_length: int = 3
    optimized_min_length: int = 2
    max_number_of_path_checks: float = math.inf

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> FinderOptions:
        return merge_options(cls(), payload)


def merge_options(
    options: FinderOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
) -> FinderOptions:
    if options is None:
        base = FinderOptions()
    elif isinstance(options, FinderOptions):
        base = options
    else:
        base = FinderOptions.from_mapping(options)

    if not overrides:
        return base

    known = {item.name for item in fields(FinderOptions)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _OPTION_ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown finder option: {key}")
        if value is None and name != "root":
            continue
        changes[name] = value
    return replace(base, **changes)


def penalty(path: Path) -> float:
    return sum(knot.penalty for knot in path)


def by_penalty(path: Path) -> tuple[float, int]:
    return penalty(path), len(path)


class SearchStatus(Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass(slots=True)
class SearchResult:
    status: SearchStatus
    paths: list[Path] = field(default_factory=list)
    checks: int = 0


@dataclass(slots=True)
class Budget:
    timeout_ms: float
    max_checks: float = math.inf
    checks: int = 0
    interrupted: bool = False
    started_at: float = field(default_factory=monotonic)

    @classmethod
    def for_options(cls, options: FinderOptions) -> Budget:
        return cls(timeout_ms=options.timeout_ms, max_checks=options.max_number_of_path_checks)

    def elapsed_ms(self) -> float:
        return (monotonic() - self.started_at) * 1000.0

    def timed_out(self) -> bool:
        return self.elapsed_ms() > self.timeout_ms

    def checks_exhausted(self) -> bool:
        return self.checks >= self.max_checks

    def exceeded(self) -> bool:
        return self.timed_out() or self.checks_exhausted()
