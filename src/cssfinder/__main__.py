from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from lxml import html

from .document import LxmlDocument
from .errors import FinderError
from .finder import find
from .models import merge_options
from .options_file import load_finder_options, save_finder_options


def _build_logger(verbose: bool) -> logging.Logger:
    logger = logging.getLogger("cssfinder")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)
    return logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cssfinder", description="Generate unique CSS selectors for HTML elements")
    parser.add_argument("page", type=Path, help="HTML file to load")
    parser.add_argument("query", nargs="?", default="*", help="Select the elements to describe (default: every element)")
    parser.add_argument("--options", type=Path, help="JSON file with finder options")
    parser.add_argument("--save-options", type=Path, help="Write the effective numeric options to a JSON file")
    parser.add_argument("--timeout-ms", type=float)
    parser.add_argument("--seed-min-length", type=int)
    parser.add_argument("--optimized-min-length", type=int)
    parser.add_argument("--max-checks", type=float, dest="max_number_of_path_checks")
    parser.add_argument("--check", action="store_true", help="Verify every selector selects exactly its element")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logger = _build_logger(args.verbose)

    options = None
    if args.options:
        options = load_finder_options(args.options)
        if options is None:
            logger.error("Could not read finder options from %s", args.options)
            return 2

    overrides: dict[str, Any] = {
        "timeout_ms": args.timeout_ms,
        "seed_min_length": args.seed_min_length,
        "optimized_min_length": args.optimized_min_length,
        "max_number_of_path_checks": args.max_number_of_path_checks,
    }
    config = merge_options(options, overrides)

    if args.save_options:
        saved, error = save_finder_options(config, args.save_options)
        if not saved:
            logger.error("%s", error)
            return 2
        logger.debug("Saved finder options to %s", args.save_options)

    try:
        tree = html.parse(str(args.page))
    except OSError:
        logger.exception("Could not read %s", args.page)
        return 2
    document = LxmlDocument(tree)

    try:
        nodes = document.query_all(document.tree, args.query)
    except FinderError:
        logger.exception("Invalid element query %r", args.query)
        return 2

    failures = 0
    for node in nodes:
        try:
            css = find(node, config, document=document)
        except FinderError:
            logger.exception("Selector generation failed for <%s>", document.describe(node).tag)
            failures += 1
            continue

        if args.check:
            matches = document.query_all(document.tree, css)
            if len(matches) != 1 or matches[0] is not node:
                logger.error("Selector %r does not select exactly its element", css)
                failures += 1
        sys.stdout.write(css + "\n")

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
