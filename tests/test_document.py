import pytest
from bs4 import BeautifulSoup

from bfsg_audit.audit.analyzers.base_analyzer import ViolationCollector
from bfsg_audit.audit.document import (
    HtmlDocument,
    get_attribute,
    has_direct_text,
    load_document,
)
from bfsg_audit.utils.logging_helper import DocumentError


HTML = (
    '<html lang="en"><body>'
    '<div id="first" class="box wide"><p>One</p></div>'
    '<p id="second">Two</p>'
    "<span>Three</span>"
    "</body></html>"
)


def test_load_document_from_markup():
    document = load_document(HTML)

    assert isinstance(document, HtmlDocument)
    assert [el.name for el in document.elements] == ["html", "body", "div", "p", "p", "span"]


def test_load_document_from_bytes():
    document = load_document(HTML.encode("utf-8"))

    assert document.find("span").get_text() == "Three"


def test_load_document_returns_existing_document_unchanged():
    document = load_document(HTML)

    assert load_document(document) is document


@pytest.mark.parametrize("source", [None, 42, ["<p>x</p>"]])
def test_load_document_rejects_unusable_sources(source):
    with pytest.raises(DocumentError):
        load_document(source)


def test_class_attribute_is_a_plain_string():
    document = load_document(HTML)

    assert document.element_by_id("first")["class"] == "box wide"


def test_get_attribute_joins_multi_valued_attributes_of_foreign_trees():
    soup = BeautifulSoup('<div class="modal open"></div>', "html.parser")

    assert get_attribute(soup.div, "class") == "modal open"
    assert get_attribute(soup.div, "id", "") == ""


def test_select_keeps_document_order():
    document = load_document(HTML)

    paragraphs = document.select("p")
    assert [p.get_text() for p in paragraphs] == ["One", "Two"]

    with_id = document.select(predicate=lambda el: el.has_attr("id"))
    assert [el.name for el in with_id] == ["div", "p"]


def test_select_within_limits_to_descendants():
    document = load_document(HTML)
    div = document.element_by_id("first")

    assert [el.get_text() for el in document.select_within(div, "p")] == ["One"]
    assert document.select_within(div, "span") == []


def test_id_lookup():
    document = load_document(HTML)

    assert document.has_id("second")
    assert not document.has_id("missing")
    assert document.element_by_id("second").get_text() == "Two"
    assert document.element_by_id("missing") is None


def test_positions_follow_pre_order():
    document = load_document(HTML)
    div = document.element_by_id("first")
    second = document.element_by_id("second")

    assert document.position(document.find("html")) == 0
    assert document.position(div) < document.position(div.p) < document.position(second)


def test_position_of_foreign_element_raises():
    document = load_document(HTML)
    other = BeautifulSoup("<p>elsewhere</p>", "html.parser").p

    with pytest.raises(DocumentError):
        document.position(other)


def test_has_direct_text_ignores_comments():
    document = load_document("<div><!-- note --><p>x</p></div><div>text</div>")
    first, second = document.select("div")

    assert not has_direct_text(first)
    assert has_direct_text(second)


def test_collector_orders_by_position_with_aggregates_last():
    document = load_document(HTML)
    collector = ViolationCollector(document)
    span = document.find("span")
    div = document.element_by_id("first")

    fields = dict(type="warning", rule="WCAG 1.3.1", element="x", suggestion="fix")
    collector.add_summary(message="summary", **fields)
    collector.add(span, message="span", **fields)
    collector.add(div, message="div first", **fields)
    collector.add(div, message="div second", **fields)

    messages = [violation.message for violation in collector.violations()]
    assert messages == ["div first", "div second", "span", "summary"]


def test_collector_keeps_element_label_separate_from_node():
    document = load_document('<a href="/x"><img src="x.png"></a>')
    collector = ViolationCollector(document)
    img = document.find("img")

    violation = collector.add(
        img,
        type="error",
        rule="WCAG 2.4.4, 1.1.1",
        element="a",
        message="Link with image lacking alternative text",
        suggestion="Add alt text to image or aria-label to link",
    )

    assert violation.element == "a"
    assert collector.violations() == [violation]
