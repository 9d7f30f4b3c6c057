# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Video extractor: title, duration, channel, stats, media URLs."""

from __future__ import annotations

from typing import Any
from urllib.parse import urljoin, urlparse

from smartcapture.classifier import PageType, VideoFields
from smartcapture.classifier.extractors.base import (
    first_of,
    first_string,
    itemprop_content,
    itemprop_value,
    og,
    parse_iso_duration,
    person_or_org_name,
    to_int,
)
from smartcapture.dom import Document, attr_of, clean_text_of, document_title, find_jsonld, select_one
from smartcapture.sanitizer import clean_optional

# Host suffix → XPath of the uploader's channel link
_CHANNEL_LINKS: dict[str, str] = {
    "youtube.com": "//*[@id='channel-name']//a | //ytd-channel-name//a",
    "youtu.be": "//*[@id='channel-name']//a | //ytd-channel-name//a",
}


def iso_duration_seconds(value: Any) -> int | None:
    """``PT1H23M45S`` → 5025. Missing components count as 0."""
    parts = parse_iso_duration(value)
    if parts is None:
        return None
    hours, minutes, seconds = parts
    return hours * 3600 + minutes * 60 + seconds


def _watch_count(stats: Any) -> int | None:
    """userInteractionCount of the WatchAction entry in interactionStatistic."""
    if isinstance(stats, dict):
        stats = [stats]
    if not isinstance(stats, list):
        return None
    for stat in stats:
        if not isinstance(stat, dict):
            continue
        action = stat.get("interactionType")
        if isinstance(action, dict):
            action = action.get("@type", "")
        if isinstance(action, str) and action.rsplit("/", 1)[-1] == "WatchAction":
            return to_int(stat.get("userInteractionCount"))
    return None


def _channel_link_xpath(url: str) -> str | None:
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return None
    for suffix, xpath in _CHANNEL_LINKS.items():
        if host == suffix or host.endswith("." + suffix):
            return xpath
    return None


class VideoExtractor:
    page_type = PageType.VIDEO

    def extract(self, doc: Document, url: str = "") -> VideoFields:
        ld = find_jsonld(doc, "VideoObject") or {}
        channel_link = self._channel_link(doc, url)

        return VideoFields(
            title=first_of(
                clean_optional(ld.get("name")),
                og(doc, "og:title"),
                clean_optional(document_title(doc)),
            ),
            duration=first_of(
                iso_duration_seconds(ld.get("duration")),
                iso_duration_seconds(itemprop_content(doc, "duration")),
            ),
            channel=first_of(
                person_or_org_name(ld.get("author")),
                clean_optional(clean_text_of(channel_link)),
            ),
            channel_url=self._absolute(url, attr_of(channel_link, "href")),
            upload_date=first_of(
                clean_optional(ld.get("uploadDate")),
                og(doc, "og:video:release_date"),
                itemprop_value(doc, "uploadDate"),
            ),
            view_count=first_of(
                to_int(ld.get("interactionCount")),
                _watch_count(ld.get("interactionStatistic")),
                to_int(itemprop_content(doc, "interactionCount")),
            ),
            thumbnail_url=first_of(
                clean_optional(first_string(ld.get("thumbnailUrl")), max_len=2048),
                itemprop_content(doc, "thumbnailUrl"),
                og(doc, "og:image"),
            ),
            embed_url=first_of(
                clean_optional(ld.get("embedUrl"), max_len=2048),
                itemprop_content(doc, "embedUrl"),
                og(doc, "og:video:url"),
            ),
        )

    @staticmethod
    def _channel_link(doc: Document, url: str) -> Document | None:
        xpath = _channel_link_xpath(url)
        return select_one(doc, xpath) if xpath else None

    @staticmethod
    def _absolute(base: str, href: str | None) -> str | None:
        if not href:
            return None
        if not base:
            return href
        try:
            return urljoin(base, href)
        except ValueError:
            return None
