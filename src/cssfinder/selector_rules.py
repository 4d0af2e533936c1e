from __future__ import annotations

import re
from types import MappingProxyType

ACCEPTED_ATTR_NAMES = frozenset({"role", "name", "aria-label", "rel", "href"})

MAX_ATTR_VALUE_LENGTH = 100

_WORD_LIKE_PATTERN = re.compile(r"[a-z\-]{3,}", re.IGNORECASE)
_WORD_SPLIT_PATTERN = re.compile(r"-|[A-Z]")
_CONSONANT_RUN_PATTERN = re.compile(r"[^aeiou]{4,}", re.IGNORECASE)


def word_like(name: str) -> bool:
    """Return True when ``name`` reads like human-written words.

    Hashed or generated tokens such as ``css-175oi2r`` or ``jss42`` fail:
    only letters and hyphens are allowed, every hyphen/camel-case word must
    be at least three characters long, and no word may carry a run of four
    or more non-vowels.
    """
    if not _WORD_LIKE_PATTERN.fullmatch(name):
        return False
    for word in _WORD_SPLIT_PATTERN.split(name):
        if len(word) <= 2:
            return False
        if _CONSONANT_RUN_PATTERN.search(word):
            return False
    return True


def id_name(name: str) -> bool:
    return word_like(name)


def class_name(name: str) -> bool:
    return word_like(name)


def tag_name(name: str) -> bool:
    return True


def attr(name: str, value: str) -> bool:
    """Accept semantic attributes (or ``data-*`` ones) with word-like values."""
    name_ok = name in ACCEPTED_ATTR_NAMES
    name_ok = name_ok or (name.startswith("data-") and word_like(name))

    value_ok = word_like(value) and len(value) < MAX_ATTR_VALUE_LENGTH
    value_ok = value_ok or (value.startswith("#") and word_like(value[1:]))

    return name_ok and value_ok


DEFAULT_PREDICATES = MappingProxyType(
    {
        "id_name": id_name,
        "class_name": class_name,
        "tag_name": tag_name,
        "attr": attr,
    }
)
