# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Read-only DOM access over an lxml HTML tree.

Every component queries the page through these helpers: XPath element lookup,
visible text, <meta> content, and JSON-LD payloads. Nothing here mutates the
tree, so a document can be shared by the metadata extractor, the content
parser and the classifier within one capture.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import lxml.html
from lxml import etree

from smartcapture.errors import DocumentError
from smartcapture.sanitizer import normalize_whitespace

logger = logging.getLogger(__name__)

Document = lxml.html.HtmlElement

# Text nodes outside script/style/noscript bodies
_VISIBLE_TEXT = etree.XPath(
    ".//text()[not(ancestor::script) and not(ancestor::style) and not(ancestor::noscript)]",
    smart_strings=False,
)

_JSONLD_SCRIPTS = etree.XPath("//script[@type='application/ld+json']")


def parse_document(html: str | bytes) -> Document:
    """Parse a rendered-HTML snapshot into an lxml document root.

    Raises:
        DocumentError: input is empty or lxml cannot build a tree from it.
    """
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    if not html or not html.strip():
        raise DocumentError("Empty HTML input")
    try:
        parser = lxml.html.HTMLParser(recover=True, encoding="utf-8")
        return lxml.html.document_fromstring(html.encode("utf-8"), parser=parser)
    except (etree.ParserError, ValueError) as e:
        raise DocumentError(f"lxml parsing failed: {e}") from e


def root_of(el: Document) -> Document:
    """Return the <html> root for any element of the tree."""
    return el.getroottree().getroot()


def has_class(name: str) -> str:
    """XPath predicate body matching a whole class token (CSS ``.name``)."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def select(el: Document, xpath: str, **variables: Any) -> list[Document]:
    """All elements matching ``xpath`` (non-element results are dropped)."""
    return [node for node in el.xpath(xpath, **variables) if isinstance(node, etree._Element)]


def select_one(el: Document, xpath: str, **variables: Any) -> Document | None:
    """First element matching ``xpath`` in document order, or None."""
    for node in el.xpath(xpath, **variables):
        if isinstance(node, etree._Element):
            return node
    return None


def exists(el: Document, xpath: str, **variables: Any) -> bool:
    return select_one(el, xpath, **variables) is not None


def text_of(el: Document | None) -> str:
    """Visible text of ``el`` (script/style bodies excluded), untrimmed."""
    if el is None:
        return ""
    return "".join(_VISIBLE_TEXT(el))


def clean_text_of(el: Document | None) -> str | None:
    """Whitespace-normalized visible text, or None when empty."""
    text = normalize_whitespace(text_of(el))
    return text or None


def word_count(el: Document | None) -> int:
    return len(text_of(el).split())


def attr_of(el: Document | None, name: str) -> str | None:
    """Attribute value, or None when the element or a non-empty value is missing."""
    if el is None:
        return None
    value = el.get(name)
    return value if value else None


def meta_content(doc: Document, attr: str, value: str) -> str | None:
    """Content of ``<meta {attr}="{value}">``; empty content counts as missing."""
    el = select_one(doc, f"//meta[@{attr}=$value]", value=value)
    return attr_of(el, "content")


def document_title(doc: Document) -> str:
    """``<title>`` text, whitespace-normalized ('' when absent)."""
    return normalize_whitespace(text_of(select_one(doc, "//title")))


def document_language(doc: Document) -> str | None:
    lang = root_of(doc).get("lang")
    return lang.strip() if lang and lang.strip() else None


# --- JSON-LD ---


def jsonld_blocks(doc: Document) -> list[Any]:
    """Parse every application/ld+json block independently; malformed blocks are skipped."""
    parsed: list[Any] = []
    for script in _JSONLD_SCRIPTS(doc):
        raw = script.text or ""
        if not raw.strip():
            continue
        try:
            parsed.append(json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.debug("Skipping malformed JSON-LD block (%d chars)", len(raw))
            continue
    return parsed


def jsonld_types(node: Any) -> list[str]:
    """``@type`` of a JSON-LD node as a list of strings (string or array form)."""
    if not isinstance(node, dict):
        return []
    raw = node.get("@type")
    types = raw if isinstance(raw, list) else [raw]
    return [t for t in types if isinstance(t, str)]


def jsonld_nodes(data: Any, *, graph_only: bool = False) -> list[dict[str, Any]]:
    """Flatten one parsed block into candidate nodes: @graph members first, then the block itself.

    With ``graph_only`` a block carrying an @graph array contributes only its
    members, never its own top-level @type.
    """
    if isinstance(data, list):
        nodes: list[dict[str, Any]] = []
        for item in data:
            nodes.extend(jsonld_nodes(item, graph_only=graph_only))
        return nodes
    if not isinstance(data, dict):
        return []
    nodes = []
    graph = data.get("@graph")
    if isinstance(graph, list):
        nodes.extend(item for item in graph if isinstance(item, dict))
        if graph_only:
            return nodes
    nodes.append(data)
    return nodes


def find_jsonld(doc: Document, *type_names: str, blocks: list[Any] | None = None) -> dict[str, Any] | None:
    """First JSON-LD node whose @type matches, trying ``type_names`` in order.

    Type comparison is case-insensitive. Pass ``blocks`` to reuse an already
    parsed ``jsonld_blocks()`` result.
    """
    if blocks is None:
        blocks = jsonld_blocks(doc)
    for type_name in type_names:
        wanted = type_name.lower()
        for data in blocks:
            for node in jsonld_nodes(data):
                if any(t.lower() == wanted for t in jsonld_types(node)):
                    return node
    return None
