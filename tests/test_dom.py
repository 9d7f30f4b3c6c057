# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for smartcapture.dom: parsing, XPath helpers, visible text, JSON-LD."""

from __future__ import annotations

import pytest

from smartcapture.dom import (
    attr_of,
    clean_text_of,
    document_language,
    document_title,
    exists,
    find_jsonld,
    has_class,
    jsonld_blocks,
    jsonld_nodes,
    jsonld_types,
    meta_content,
    parse_document,
    select,
    select_one,
    text_of,
    word_count,
)
from smartcapture.errors import DocumentError, SmartCaptureError
from tests._html_helpers import jsonld, make_doc, meta


class TestParseDocument:
    @pytest.mark.parametrize("html", ["", "   \n\t", b""], ids=["empty", "whitespace", "empty-bytes"])
    def test_empty_input_raises(self, html):
        with pytest.raises(DocumentError):
            parse_document(html)

    def test_document_error_is_smartcapture_error(self):
        assert issubclass(DocumentError, SmartCaptureError)

    def test_bytes_input(self):
        doc = parse_document("<html><head><title>Café</title></head></html>".encode())
        assert document_title(doc) == "Café"

    def test_fragment_gets_html_root(self):
        doc = parse_document("<p>just a paragraph</p>")
        assert doc.tag == "html"
        assert clean_text_of(select_one(doc, "//p")) == "just a paragraph"


class TestSelection:
    def test_has_class_matches_whole_token(self):
        doc = make_doc('<div class="toc main">a</div><div class="toc-extra">b</div><div class="  toc ">c</div>')
        matched = [text_of(el) for el in select(doc, f"//div[{has_class('toc')}]")]
        assert matched == ["a", "c"]

    def test_select_one_document_order(self):
        doc = make_doc("<h2>second level</h2><h1>first level</h1>")
        assert text_of(select_one(doc, "//h1 | //h2")) == "second level"

    def test_variables(self):
        doc = make_doc('<span itemprop="price">9.99</span>')
        assert exists(doc, "//*[@itemprop=$p]", p="price")
        assert not exists(doc, "//*[@itemprop=$p]", p="sku")

    def test_non_element_results_dropped(self):
        doc = make_doc('<a href="/x">x</a>')
        assert select(doc, "//a/@href") == []
        assert select_one(doc, "//a/text()") is None


class TestText:
    def test_script_and_style_excluded(self):
        doc = make_doc("<div><script>var x = 1;</script><style>p{}</style><p>Hello</p> <p>world</p></div>")
        assert clean_text_of(select_one(doc, "//div")) == "Hello world"

    def test_clean_text_of_empty(self):
        doc = make_doc("<div>   </div>")
        assert clean_text_of(select_one(doc, "//div")) is None
        assert clean_text_of(None) is None

    def test_word_count(self):
        doc = make_doc("<p>one two\nthree   four</p>")
        assert word_count(select_one(doc, "//p")) == 4
        assert word_count(None) == 0

    def test_attr_of_empty_is_none(self):
        doc = make_doc('<a href="">x</a>')
        assert attr_of(select_one(doc, "//a"), "href") is None
        assert attr_of(None, "href") is None


class TestHeadHelpers:
    def test_meta_content(self):
        doc = make_doc(head=meta("property", "og:title", "Hello") + meta("name", "author", ""))
        assert meta_content(doc, "property", "og:title") == "Hello"
        assert meta_content(doc, "name", "author") is None
        assert meta_content(doc, "name", "missing") is None

    def test_meta_value_with_quote(self):
        doc = make_doc(head="<meta name=\"it's\" content=\"ok\">")
        assert meta_content(doc, "name", "it's") == "ok"

    def test_title_absent(self):
        assert document_title(make_doc("<p>x</p>")) == ""

    @pytest.mark.parametrize(
        ("lang", "expected"),
        [("en", "en"), ("  ko-KR ", "ko-KR"), (None, None)],
        ids=["plain", "padded", "absent"],
    )
    def test_language(self, lang, expected):
        assert document_language(make_doc("<p>x</p>", lang=lang)) == expected


class TestJsonLd:
    def test_malformed_block_skipped(self):
        doc = make_doc(
            head='<script type="application/ld+json">{not json</script>' + jsonld({"@type": "Recipe"})
        )
        assert jsonld_blocks(doc) == [{"@type": "Recipe"}]

    @pytest.mark.parametrize(
        ("node", "expected"),
        [
            ({"@type": "Product"}, ["Product"]),
            ({"@type": ["Article", "NewsArticle"]}, ["Article", "NewsArticle"]),
            ({"@type": ["Thing", 3]}, ["Thing"]),
            ({}, []),
            ("Product", []),
        ],
        ids=["string", "array", "non-string-member", "missing", "not-a-dict"],
    )
    def test_types(self, node, expected):
        assert jsonld_types(node) == expected

    def test_nodes_graph_first(self):
        data = {"@context": "https://schema.org", "@graph": [{"@type": "WebPage"}, {"@type": "Article"}, "junk"]}
        assert [jsonld_types(n) for n in jsonld_nodes(data)] == [["WebPage"], ["Article"], []]

    def test_nodes_graph_only_drops_container(self):
        data = {"@type": "Product", "@graph": [{"@type": "WebPage"}]}
        assert jsonld_nodes(data, graph_only=True) == [{"@type": "WebPage"}]
        assert jsonld_nodes({"@type": "Product"}, graph_only=True) == [{"@type": "Product"}]

    def test_nodes_array_block(self):
        assert jsonld_nodes([{"@type": "A"}, 5, {"@type": "B"}]) == [{"@type": "A"}, {"@type": "B"}]

    def test_find_jsonld_case_insensitive(self):
        doc = make_doc(head=jsonld({"@graph": [{"@type": "recipe", "name": "Soup"}]}))
        assert find_jsonld(doc, "Recipe")["name"] == "Soup"

    def test_find_jsonld_type_priority(self):
        doc = make_doc(head=jsonld({"@type": "Article", "n": 1}) + jsonld({"@type": "NewsArticle", "n": 2}))
        assert find_jsonld(doc, "NewsArticle", "Article")["n"] == 2
        assert find_jsonld(doc, "Product") is None
