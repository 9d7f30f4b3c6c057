# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Repository extractor for GitHub-style hosting pages.

Owner and name come from the URL path; counters and labels are read from
the host's rendered DOM. Counters may be abbreviated ("1.2k").
"""

from __future__ import annotations

import re

from smartcapture.classifier import PageType, RepositoryFields
from smartcapture.classifier.extractors.base import first_of, og
from smartcapture.dom import Document, clean_text_of, has_class, select, select_one
from smartcapture.sanitizer import clean_optional

_REPO_URL_RE = re.compile(r"(?:github\.com|gitlab\.com|bitbucket\.org|codeberg\.org)/([\w.-]+)/([\w.-]+)")
_THOUSANDS_RE = re.compile(r"^(\d+(?:\.\d+)?)k$", re.IGNORECASE)
_LEADING_INT_RE = re.compile(r"^\d+")

_DESCRIPTION_XPATHS = (
    "//*[@itemprop='about']",
    f"//*[{has_class('repository-description')}]",
    f"//*[{has_class('f4')}]",
)
_STARS_XPATHS = (
    "//*[@id='repo-stars-counter-star']",
    f"//*[{has_class('social-count')}]",
)
_FORKS_XPATHS = ("//*[@id='repo-network-counter']",)
_LANGUAGE_XPATHS = (
    "//*[@itemprop='programmingLanguage']",
    f"//*[{has_class('repo-language-color')}]/following-sibling::*[1][self::span]",
)
_LICENSE_XPATHS = (
    "//*[contains(@data-analytics-event, 'license')]/..",
    f"//*[{has_class('octicon-law')}]/..",
)
_TOPIC_XPATH = f"//*[{has_class('topic-tag')}] | //*[@data-octo-click='topic_click']"


def parse_count(text: str | None) -> int | None:
    """``"1,234"`` → 1234, ``"1.2k"`` → 1200; None when no leading digits."""
    if not text:
        return None
    cleaned = text.replace(",", "").strip()
    m = _THOUSANDS_RE.match(cleaned)
    if m:
        return round(float(m.group(1)) * 1000)
    m = _LEADING_INT_RE.match(cleaned)
    return int(m.group()) if m else None


def _first_text(doc: Document, xpaths: tuple[str, ...]) -> str | None:
    for xpath in xpaths:
        text = clean_optional(clean_text_of(select_one(doc, xpath)))
        if text:
            return text
    return None


def _topics(doc: Document) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for el in select(doc, _TOPIC_XPATH):
        text = clean_optional(clean_text_of(el))
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


class RepositoryExtractor:
    page_type = PageType.REPOSITORY

    def extract(self, doc: Document, url: str = "") -> RepositoryFields:
        owner = name = full_name = None
        m = _REPO_URL_RE.search(url)
        if m:
            owner, name = m.group(1), m.group(2)
            full_name = f"{owner}/{name}"

        return RepositoryFields(
            name=name,
            owner=owner,
            full_name=full_name,
            stars=parse_count(_first_text(doc, _STARS_XPATHS)),
            forks=parse_count(_first_text(doc, _FORKS_XPATHS)),
            language=_first_text(doc, _LANGUAGE_XPATHS),
            description=first_of(og(doc, "og:description"), _first_text(doc, _DESCRIPTION_XPATHS)),
            license=_first_text(doc, _LICENSE_XPATHS),
            topics=_topics(doc),
        )
