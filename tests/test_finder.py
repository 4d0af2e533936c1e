import math
from pathlib import Path

import pytest
from lxml import etree, html

from cssfinder import (
    FinderOptions,
    InvalidInputError,
    LxmlDocument,
    SearchTimeoutError,
    SelectorNotFoundError,
    find,
)

SAMPLE_PAGE = Path(__file__).parent / "pages" / "sample.html"


def _select(document: LxmlDocument, css: str) -> list:
    return document.query_all(document.tree, css)


def test_every_element_of_sample_page_gets_a_unique_selector() -> None:
    document = LxmlDocument(html.parse(str(SAMPLE_PAGE)))
    nodes = _select(document, "*")
    assert len(nodes) > 40

    for node in nodes:
        css = find(node, timeout_ms=math.inf, max_number_of_path_checks=2000)
        assert _select(document, css) == [node], css
        assert "css-" not in css
        assert find(node, timeout_ms=math.inf, max_number_of_path_checks=2000) == css


def test_sample_page_prefers_semantic_fragments() -> None:
    document = LxmlDocument(html.parse(str(SAMPLE_PAGE)))
    (header,) = _select(document, "header")
    (signup,) = _select(document, "form")

    assert find(header) == "#top"
    assert find(signup) == '[name="signup"]'


def test_generated_classes_are_skipped_by_default() -> None:
    document = LxmlDocument.from_string('<div class="css-175oi2r"></div><div class="css-y6a5a9i"></div>')
    first, second = _select(document, "div")

    assert find(first) == "div:nth-of-type(1)"
    assert find(second) == "div:nth-of-type(2)"


def test_class_predicate_override_admits_any_class() -> None:
    document = LxmlDocument.from_string('<div class="css-175oi2r"></div><div class="css-y6a5a9i"></div>')
    first, _second = _select(document, "div")

    assert find(first, class_name=lambda name: True) == ".css-175oi2r"


def test_id_with_trailing_newline_is_not_word_like() -> None:
    document = LxmlDocument.from_string('<div id="main&#10;"></div>')
    (div,) = _select(document, "div")

    assert div.get("id") == "main\n"
    assert find(div) == "div"


def test_duplicate_ids_are_never_used_alone() -> None:
    document = LxmlDocument.from_string('<div id="foo"></div><div id="foo"></div>')
    first, second = _select(document, "div")

    assert find(first) == "div:nth-of-type(1)"
    assert find(second) == "div:nth-of-type(2)"


def test_search_result_is_optimized() -> None:
    document = LxmlDocument.from_string(
        '<div id="main"><div><div><span>target</span></div></div></div>'
        "<div><div><div><span>other</span></div></div></div>"
    )
    target = _select(document, "span")[0]

    assert find(target) == "#main span"


@pytest.mark.parametrize("order", [(0, 1), (1, 0)])
def test_multiple_targets_share_one_selector(order) -> None:
    document = LxmlDocument.from_string(
        '<ul id="menu"><li class="item">a</li><li class="item">b</li></ul>'
        '<ul id="extra"><li class="item">c</li></ul>'
    )
    items = _select(document, "li")
    targets = [items[index] for index in order]

    css = find(targets)

    assert css == "#menu > .item"
    assert _select(document, css) == items[:2]


def test_multiple_targets_with_common_class() -> None:
    document = LxmlDocument.from_string(
        '<ul><li class="item">a</li><li class="item">b</li><li class="other">c</li></ul>'
    )
    first, second, _third = _select(document, "li")

    assert find([first, second]) == ".item"


def test_document_element_is_html() -> None:
    document = LxmlDocument.from_string("<p>text</p>")

    assert find(document.root) == "html"
    assert find([document.root]) == "html"


def test_non_element_targets_are_rejected() -> None:
    document = LxmlDocument.from_string("<div><!-- note --><p>text</p></div>")
    (div,) = _select(document, "div")
    comment = next(child for child in div if not isinstance(child.tag, str))

    with pytest.raises(InvalidInputError):
        find(comment)
    with pytest.raises(InvalidInputError):
        find([])
    with pytest.raises(InvalidInputError):
        find(object())


def test_custom_root_limits_the_search() -> None:
    document = LxmlDocument.from_string(
        '<div id="alpha"><p class="note">one</p></div><div id="beta"><p class="note">two</p></div>'
    )
    (alpha,) = _select(document, "#alpha")
    first, _second = _select(document, "p")

    assert find(first) == "#alpha > .note"
    assert find(first, root=alpha) == ".note"


def test_zero_timeout_still_answers_single_target() -> None:
    document = LxmlDocument.from_string("<p>a</p><p>b</p><p>c</p>")
    third = _select(document, "p")[2]

    try:
        css = find(third, timeout_ms=0)
    except SearchTimeoutError:
        return
    assert _select(document, css) == [third]


def test_check_budget_falls_back_to_positional_selector() -> None:
    document = LxmlDocument.from_string('<div id="foo"></div><div id="foo"></div>')
    _first, second = _select(document, "div")

    assert find(second, max_number_of_path_checks=0) == "html > body:nth-of-type(1) > div:nth-of-type(2)"
    assert find(second, {"maxNumberOfPathChecks": 0}) == "html > body:nth-of-type(1) > div:nth-of-type(2)"


def test_unreachable_target_sets() -> None:
    document = LxmlDocument.from_string('<p id="intro">a</p><p>b</p><p>c</p>')
    first, _second, third = _select(document, "p")

    with pytest.raises(SelectorNotFoundError) as excinfo:
        find([first, third])
    assert not isinstance(excinfo.value, SearchTimeoutError)

    with pytest.raises(SearchTimeoutError) as excinfo:
        find([first, third], max_number_of_path_checks=0)
    assert "Timeout: Can't find a unique selector after 1000ms" in str(excinfo.value)


def test_options_object_and_overrides_combine() -> None:
    document = LxmlDocument.from_string('<div id="foo"></div><div id="foo"></div>')
    _first, second = _select(document, "div")
    options = FinderOptions(max_number_of_path_checks=0)

    assert find(second, options) == "html > body:nth-of-type(1) > div:nth-of-type(2)"
    assert find(second, options, max_number_of_path_checks=math.inf) == "div:nth-of-type(2)"


def test_unknown_option_is_rejected() -> None:
    document = LxmlDocument.from_string("<p>text</p>")
    (paragraph,) = _select(document, "p")

    with pytest.raises(ValueError, match="Unknown finder option"):
        find(paragraph, {"speed": 1})


def test_explicit_document_is_used() -> None:
    tree = etree.ElementTree(html.fragment_fromstring("<div><p>a</p><span>b</span></div>"))
    document = LxmlDocument(tree)
    (span,) = _select(document, "span")

    assert find(span, document=document) == "span"
