from __future__ import annotations

import json
import math
import tempfile
from pathlib import Path
from typing import Any

from .models import FinderOptions, merge_options

PERSISTED_OPTIONS = {
    "timeout_ms": "timeout_ms",
    "timeoutMs": "timeout_ms",
    "seed_min_length": "seed_min_length",
    "seedMinLength": "seed_min_length",
    "optimized_min_length": "optimized_min_length",
    "optimizedMinLength": "optimized_min_length",
    "max_number_of_path_checks": "max_number_of_path_checks",
    "maxNumberOfPathChecks": "max_number_of_path_checks",
}

# null in the file stands for an unbounded limit.
UNBOUNDED_OPTIONS = frozenset({"timeout_ms", "max_number_of_path_checks"})


def _read_value(name: str, value: Any) -> float | None:
    if value is None and name in UNBOUNDED_OPTIONS:
        return math.inf
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _write_value(value: float) -> float | None:
    if math.isinf(value):
        return None
    return value


def load_finder_options(config_path: str | Path, base: FinderOptions | None = None) -> FinderOptions | None:
    """Read numeric finder options from a JSON file on top of ``base``.

    Returns None when the file is missing or unreadable, is not an object,
    or carries an unknown key or a non-numeric value.
    """
    path = Path(config_path)
    if not path.is_file():
        return None

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(payload, dict):
        return None

    overrides: dict[str, float] = {}
    for key, raw in payload.items():
        name = PERSISTED_OPTIONS.get(key)
        if name is None:
            return None
        value = _read_value(name, raw)
        if value is None:
            return None
        overrides[name] = value

    if base is None:
        return FinderOptions.from_mapping(overrides)
    return merge_options(base, overrides)


def save_finder_options(options: FinderOptions, config_path: str | Path) -> tuple[bool, str | None]:
    path = Path(config_path)
    data = {
        name: _write_value(getattr(options, name))
        for name in ("timeout_ms", "seed_min_length", "optimized_min_length", "max_number_of_path_checks")
    }
    text = json.dumps(data, indent=2, sort_keys=True, allow_nan=False) + "\n"

    staged: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            staged = Path(handle.name)
            handle.write(text)
    except OSError as exc:
        if staged is not None:
            staged.unlink(missing_ok=True)
        return False, f"Could not stage finder options in {path.parent}: {exc}"

    try:
        staged.replace(path)
    except OSError as exc:
        staged.unlink(missing_ok=True)
        return False, f"Could not write finder options to {path}: {exc}"
    return True, None
