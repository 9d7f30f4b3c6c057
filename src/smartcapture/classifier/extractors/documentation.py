# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Documentation extractor: heading, breadcrumb trail, in-page TOC, version, framework."""

from __future__ import annotations

import re

from smartcapture.classifier import DocumentationFields, PageType, TocEntry
from smartcapture.classifier.extractors.base import named_meta
from smartcapture.dom import Document, attr_of, clean_text_of, document_title, has_class, select, select_one
from smartcapture.sanitizer import clean_optional

_BREADCRUMB_CONTAINER = " | ".join(
    (
        "//*[@aria-label='breadcrumb']",
        f"//*[{has_class('breadcrumb')}]",
        f"//*[{has_class('breadcrumbs')}]",
        f"//nav[{has_class('crumbs')}]",
    )
)
_BREADCRUMB_ITEMS = ".//*[self::a or self::li or self::span]"

_TOC_CONTAINER = " | ".join(
    (
        f"//*[{has_class('toc')}]",
        "//*[@id='toc']",
        f"//*[{has_class('table-of-contents')}]",
        "//nav[contains(@aria-label, 'table of contents')]",
    )
)
_TOC_LINKS = ".//a[starts-with(@href, '#')]"

_VERSION_ELEMENT = " | ".join(
    (
        "//select[contains(@name, 'version')]//option[@selected]",
        f"//*[{has_class('version-selector')}]//*[{has_class('current')}]",
        f"//*[{has_class('version-badge')}]",
        "//*[@data-version]",
    )
)
_VERSION_IN_TITLE_RE = re.compile(r"v?(\d+\.\d+(?:\.\d+)?)")

KNOWN_FRAMEWORKS = ("react", "vue", "angular", "svelte", "next.js", "django", "flask", "rails", "express")


def _breadcrumb(doc: Document) -> tuple[str, ...]:
    container = select_one(doc, _BREADCRUMB_CONTAINER)
    if container is None:
        return ()
    # Nested a/li/span repeat the same label; keep the first occurrence.
    seen: dict[str, None] = {}
    for el in select(container, _BREADCRUMB_ITEMS):
        text = clean_text_of(el)
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def _table_of_contents(doc: Document) -> tuple[TocEntry, ...]:
    container = select_one(doc, _TOC_CONTAINER)
    if container is None:
        return ()
    entries = []
    for link in select(container, _TOC_LINKS):
        title = clean_text_of(link)
        if title:
            entries.append(TocEntry(title=title, anchor=link.get("href", "")))
    return tuple(entries)


def _version(doc: Document) -> str | None:
    el = select_one(doc, _VERSION_ELEMENT)
    if el is not None:
        return clean_optional(clean_text_of(el)) or clean_optional(attr_of(el, "data-version"))
    m = _VERSION_IN_TITLE_RE.search(document_title(doc))
    return m.group(0) if m else None


def _framework(doc: Document) -> str | None:
    generator = named_meta(doc, "generator")
    if generator:
        return generator
    title = document_title(doc).lower()
    return next((f for f in KNOWN_FRAMEWORKS if f in title), None)


class DocumentationExtractor:
    page_type = PageType.DOCUMENTATION

    def extract(self, doc: Document, url: str = "") -> DocumentationFields:
        return DocumentationFields(
            section_title=clean_optional(clean_text_of(select_one(doc, "//h1"))),
            breadcrumb=_breadcrumb(doc),
            table_of_contents=_table_of_contents(doc),
            version=_version(doc),
            framework=_framework(doc),
        )
