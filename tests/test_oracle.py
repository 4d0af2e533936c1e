import pytest

from cssfinder.document import LxmlDocument
from cssfinder.errors import NoMatchError
from cssfinder.models import Knot
from cssfinder.oracle import unique

MARKUP = "<html><body><p class='note'>one</p><p class='note'>two</p><span>three</span></body></html>"


class _EmptyDocument:
    def query_all(self, scope, selector):
        return []

    def same_node(self, left, right):
        return left is right


def test_unique_accepts_exact_target_set() -> None:
    document = LxmlDocument.from_string(MARKUP)
    first, second = document.query_all(document.tree, "p")

    assert unique([Knot(".note", 1, 0)], [first, second], document, document.tree)
    assert unique([Knot(".note", 1, 0)], [second, first], document, document.tree)


def test_unique_rejects_partial_or_different_matches() -> None:
    document = LxmlDocument.from_string(MARKUP)
    first, second = document.query_all(document.tree, "p")
    span = document.query_all(document.tree, "span")[0]

    assert not unique([Knot(".note", 1, 0)], [first], document, document.tree)
    assert not unique([Knot("span", 5, 0)], [first], document, document.tree)
    assert unique([Knot("span", 5, 0)], [span], document, document.tree)


def test_unique_raises_when_nothing_matches() -> None:
    with pytest.raises(NoMatchError) as excinfo:
        unique([Knot("p", 5, 0)], [object()], _EmptyDocument(), None)

    assert excinfo.value.selector == "p"
    assert "Can't select any node with this selector: p" in str(excinfo.value)
