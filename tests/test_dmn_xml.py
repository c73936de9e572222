"""Unit tests for the namespace-blind XML helpers."""

import pytest

from simulator.errors import MalformedDocumentError
from simulator.services.dmn_xml import (
    attr,
    child_text,
    descendants,
    first_child,
    load_document,
    local_name,
)


def test_load_document_accepts_str_and_bytes(age_dmn):
    assert local_name(load_document(age_dmn).tag) == "definitions"
    assert local_name(load_document(age_dmn.encode("utf-8")).tag) == "definitions"


@pytest.mark.parametrize("text", ["", "   ", "<definitions>", "not xml at all", "<a><b></a>"])
def test_load_document_rejects_malformed(text):
    with pytest.raises(MalformedDocumentError) as exc_info:
        load_document(text)
    assert exc_info.value.code == "malformed_document"


def test_local_name():
    assert local_name("{https://www.omg.org/spec/DMN/20191111/MODEL/}decision") == "decision"
    assert local_name("decision") == "decision"
    assert local_name(None) is None


def test_first_child_only_looks_at_direct_children():
    root = load_document("<root><wrap><item id='deep'/></wrap><item id='direct'/></root>")
    assert first_child(root, "item").get("id") == "direct"
    assert first_child(root, "missing") is None


def test_descendants_any_depth_in_document_order():
    root = load_document(
        "<root><item id='1'><item id='2'/></item><wrap><item id='3'/></wrap></root>"
    )
    assert [el.get("id") for el in descendants(root, "item")] == ["1", "2", "3"]
    assert descendants(root, "root") == []


def test_prefixed_and_default_namespaces_match_the_same(age_dmn, multi_dmn):
    for text in (age_dmn, multi_dmn):
        root = load_document(text)
        decisions = descendants(root, "decision")
        assert decisions
        assert first_child(decisions[0], "decisionTable") is not None


def test_child_text_trims_and_distinguishes_missing():
    root = load_document("<e><text>\n  age  \n</text><empty><text/></empty></e>")
    assert child_text(root, "text") == "age"
    assert child_text(first_child(root, "empty"), "text") == ""
    assert child_text(root, "nothing") is None


def test_attr_defaults_to_empty_string():
    root = load_document("<e id='x'/>")
    assert attr(root, "id") == "x"
    assert attr(root, "label") == ""
