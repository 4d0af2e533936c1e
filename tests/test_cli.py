import json
import logging
from pathlib import Path

import pytest

from cssfinder.__main__ import main

SAMPLE_PAGE = Path(__file__).parent / "pages" / "sample.html"


@pytest.fixture(autouse=True)
def _reset_cli_logger():
    yield
    logger = logging.getLogger("cssfinder")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


def test_cli_prints_one_selector_per_element(capsys) -> None:
    assert main([str(SAMPLE_PAGE), "li", "--check"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 6
    assert len(set(lines)) == 6


def test_cli_reads_options_file(tmp_path, capsys) -> None:
    options = tmp_path / "finder.json"
    options.write_text(json.dumps({"maxNumberOfPathChecks": 0}), encoding="utf-8")

    assert main([str(SAMPLE_PAGE), "footer div", "--options", str(options), "--check"]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "html > body:nth-of-type(1) > footer:nth-of-type(1) > div:nth-of-type(1)",
        "html > body:nth-of-type(1) > footer:nth-of-type(1) > div:nth-of-type(2)",
    ]


def test_cli_rejects_bad_options_file(tmp_path) -> None:
    assert main([str(SAMPLE_PAGE), "--options", str(tmp_path / "missing.json")]) == 2


def test_cli_rejects_invalid_query() -> None:
    assert main([str(SAMPLE_PAGE), "li["]) == 2


def test_cli_saves_effective_options(tmp_path, capsys) -> None:
    saved = tmp_path / "finder.json"

    assert main([str(SAMPLE_PAGE), "title", "--max-checks", "500", "--seed-min-length", "2", "--save-options", str(saved)]) == 0

    assert capsys.readouterr().out.splitlines() == ["title"]
    assert json.loads(saved.read_text(encoding="utf-8")) == {
        "max_number_of_path_checks": 500.0,
        "optimized_min_length": 2,
        "seed_min_length": 2,
        "timeout_ms": 1000,
    }
    assert main([str(SAMPLE_PAGE), "title", "--options", str(saved)]) == 0


def test_cli_rejects_unwritable_save_target(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    assert main([str(SAMPLE_PAGE), "--save-options", str(blocker / "finder.json")]) == 2
