# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page-level metadata extraction, independent of classification.

Cascade priority: Open Graph > Twitter Card > standard meta/link elements >
document properties (<title>, lang, charset) > JSON-LD.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

from smartcapture import PageBasics
from smartcapture.dom import (
    Document,
    attr_of,
    clean_text_of,
    document_language,
    document_title,
    jsonld_blocks,
    jsonld_nodes,
    meta_content,
    select_one,
)
from smartcapture.sanitizer import clean_optional, sanitize_text

logger = logging.getLogger(__name__)

_MAX_TEXT = 512
_MAX_URL = 2048

_FAVICON_RELS = ("icon", "shortcut icon", "apple-touch-icon")


def _meta(doc: Document, attr: str, value: str, max_len: int = _MAX_TEXT) -> str | None:
    return clean_optional(meta_content(doc, attr, value), max_len=max_len)


def _absolute(base: str, href: str | None) -> str | None:
    if not href:
        return None
    href = href.strip()
    if not base:
        return href or None
    try:
        return urljoin(base, href)
    except ValueError:
        logger.debug("Skipping malformed URL %r", href)
        return None


def _link_href(doc: Document, rel: str) -> str | None:
    return attr_of(select_one(doc, "//link[@rel=$rel][@href]", rel=rel), "href")


def extract_title(doc: Document) -> str:
    return (
        _meta(doc, "property", "og:title")
        or _meta(doc, "name", "twitter:title")
        or sanitize_text(document_title(doc), max_len=_MAX_TEXT)
        or ""
    )


def extract_description(doc: Document) -> str | None:
    return (
        _meta(doc, "property", "og:description")
        or _meta(doc, "name", "twitter:description")
        or _meta(doc, "name", "description")
    )


def extract_favicon(doc: Document, url: str) -> str | None:
    """Declared icon link resolved against ``url``, else ``/favicon.ico`` at the origin."""
    for rel in _FAVICON_RELS:
        icon = _absolute(url, _link_href(doc, rel))
        if icon:
            return icon
    try:
        parsed = urlparse(url)
    except ValueError:
        logger.debug("Skipping favicon fallback for malformed URL %r", url)
        return None
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}/favicon.ico"
    return None


def extract_author(doc: Document) -> str | None:
    return (
        _meta(doc, "name", "author")
        or _meta(doc, "property", "article:author")
        or clean_optional(clean_text_of(select_one(doc, "//*[@rel='author']")))
    )


def _jsonld_date_published(doc: Document) -> str | None:
    for data in jsonld_blocks(doc):
        for node in jsonld_nodes(data):
            published = clean_optional(node.get("datePublished"))
            if published:
                return published
    return None


def extract_published_date(doc: Document) -> str | None:
    return (
        _meta(doc, "property", "article:published_time")
        or _meta(doc, "name", "publish_date")
        or _meta(doc, "name", "date")
        or _jsonld_date_published(doc)
    )


def extract_charset(doc: Document) -> str:
    charset = attr_of(select_one(doc, "//meta[@charset]"), "charset")
    return (charset or "utf-8").strip().lower()


class MetadataExtractor:
    """Builds PageBasics for one document snapshot."""

    def extract(self, doc: Document, url: str = "") -> PageBasics:
        return PageBasics(
            title=extract_title(doc),
            description=extract_description(doc),
            favicon=extract_favicon(doc, url),
            url=url or None,
            canonical_url=_absolute(url, _link_href(doc, "canonical")),
            author=extract_author(doc),
            published_date=extract_published_date(doc),
            og_image=_absolute(url, _meta(doc, "property", "og:image", max_len=_MAX_URL)),
            og_type=_meta(doc, "property", "og:type"),
            og_site_name=_meta(doc, "property", "og:site_name"),
            language=document_language(doc),
            charset=extract_charset(doc),
        )
