# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Article extractor: byline, dates, section, publisher, reading time."""

from __future__ import annotations

from typing import Any

from smartcapture.classifier import ArticleFields, PageType
from smartcapture.classifier.extractors.base import (
    first_of,
    itemprop_value,
    named_meta,
    nested_string,
    og,
    person_or_org_name,
)
from smartcapture.config import ContentConfig
from smartcapture.content_parser import find_main_content, reading_time
from smartcapture.dom import Document, clean_text_of, find_jsonld, select_one, word_count
from smartcapture.sanitizer import clean_optional

_ARTICLE_TYPES = ("Article", "NewsArticle", "BlogPosting")


def resolve_author(ld: dict[str, Any] | None) -> str | None:
    """JSON-LD author as a display string.

    Accepts a plain string, a Person/Organization object, or an array mixing
    both (joined with ", ").
    """
    if not ld:
        return None
    return person_or_org_name(ld.get("author"))


class ArticleExtractor:
    page_type = PageType.ARTICLE

    def __init__(self, config: ContentConfig | None = None) -> None:
        self._config = config or ContentConfig()

    def extract(self, doc: Document, url: str = "") -> ArticleFields:
        ld = find_jsonld(doc, *_ARTICLE_TYPES)

        author = first_of(
            resolve_author(ld),
            itemprop_value(doc, "author"),
            named_meta(doc, "author"),
            og(doc, "article:author"),
            clean_optional(clean_text_of(select_one(doc, "//*[@rel='author']"))),
        )

        return ArticleFields(
            author=author,
            published_date=first_of(
                clean_optional(nested_string(ld, "datePublished")),
                og(doc, "article:published_time"),
                itemprop_value(doc, "datePublished"),
            ),
            modified_date=first_of(
                clean_optional(nested_string(ld, "dateModified")),
                og(doc, "article:modified_time"),
                itemprop_value(doc, "dateModified"),
            ),
            section=first_of(
                clean_optional(nested_string(ld, "articleSection")),
                og(doc, "article:section"),
            ),
            publisher=first_of(
                clean_optional(nested_string(ld, "publisher", "name")),
                og(doc, "og:site_name"),
            ),
            reading_time_minutes=self._estimate_reading_time(doc),
        )

    def _estimate_reading_time(self, doc: Document) -> int:
        main = find_main_content(doc, self._config)
        return reading_time(word_count(main), self._config.words_per_minute)
