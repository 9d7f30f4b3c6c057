# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""URL-pattern detector: page type from well-known platform URLs.

Pure function of the URL string. Rules are ordered most-specific-first and
the first match wins; confidence reflects specificity, from 0.7 for loose
documentation-host matches up to 0.9 for exact path patterns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from smartcapture.classifier import DetectionResult, PageType
from smartcapture.dom import Document


@dataclass(frozen=True, slots=True)
class UrlRule:
    """One platform rule: regex searched anywhere in the URL."""

    name: str
    pattern: re.Pattern[str]
    type: PageType
    confidence: float


def _rule(name: str, pattern: str, page_type: PageType, confidence: float) -> UrlRule:
    return UrlRule(name, re.compile(pattern), page_type, confidence)


URL_RULES: tuple[UrlRule, ...] = (
    # ---- repository ----
    _rule("github_repo", r"github\.com/[\w.-]+/[\w.-]+/?$", PageType.REPOSITORY, 0.9),
    _rule("gitlab_repo", r"gitlab\.com/[\w.-]+/[\w.-]+/?$", PageType.REPOSITORY, 0.9),
    _rule("bitbucket_repo", r"bitbucket\.org/[\w.-]+/[\w.-]+/?$", PageType.REPOSITORY, 0.9),
    _rule("codeberg_repo", r"codeberg\.org/[\w.-]+/[\w.-]+/?$", PageType.REPOSITORY, 0.85),
    # ---- video ----
    _rule("youtube_watch", r"youtube\.com/watch", PageType.VIDEO, 0.9),
    _rule("youtu_be", r"youtu\.be/", PageType.VIDEO, 0.9),
    _rule("vimeo", r"vimeo\.com/\d+", PageType.VIDEO, 0.9),
    _rule("dailymotion", r"dailymotion\.com/video/", PageType.VIDEO, 0.85),
    _rule("twitch_video", r"twitch\.tv/videos/", PageType.VIDEO, 0.85),
    # ---- product ----
    _rule("amazon_dp", r"amazon\.\w+/.*/dp/", PageType.PRODUCT, 0.9),
    _rule("ebay_item", r"ebay\.\w+/itm/", PageType.PRODUCT, 0.9),
    _rule("etsy_listing", r"etsy\.com/listing/", PageType.PRODUCT, 0.9),
    _rule("shopify_product", r"shopify\.com/products/", PageType.PRODUCT, 0.85),
    # ---- social_post ----
    _rule("twitter_status", r"(?:twitter\.com|x\.com)/\w+/status/\d+", PageType.SOCIAL_POST, 0.9),
    _rule("mastodon_status", r"mastodon\.\w+/@\w+/\d+", PageType.SOCIAL_POST, 0.85),
    _rule("reddit_comments", r"reddit\.com/r/\w+/comments/", PageType.SOCIAL_POST, 0.85),
    _rule("linkedin_post", r"linkedin\.com/posts/", PageType.SOCIAL_POST, 0.85),
    # ---- forum_thread ----
    _rule("stackoverflow_question", r"stackoverflow\.com/questions/\d+", PageType.FORUM_THREAD, 0.9),
    _rule("stackexchange_question", r"stackexchange\.com/questions/\d+", PageType.FORUM_THREAD, 0.9),
    _rule("discourse_topic", r"discourse\.\w+/t/", PageType.FORUM_THREAD, 0.85),
    _rule("hackernews_item", r"news\.ycombinator\.com/item\?id=", PageType.FORUM_THREAD, 0.85),
    # ---- recipe ----
    _rule("allrecipes", r"allrecipes\.com/recipe/", PageType.RECIPE, 0.9),
    _rule("food_com", r"food\.com/recipe/", PageType.RECIPE, 0.9),
    _rule("epicurious", r"epicurious\.com/recipes/", PageType.RECIPE, 0.9),
    _rule("seriouseats", r"seriouseats\.com/recipes/", PageType.RECIPE, 0.85),
    # ---- documentation (broad host patterns, lowest confidence) ----
    _rule("docs_host", r"docs\.\w+\.\w+", PageType.DOCUMENTATION, 0.75),
    _rule("developer_host", r"developer\.\w+\.\w+", PageType.DOCUMENTATION, 0.7),
    _rule("wiki_host", r"wiki\.\w+\.\w+", PageType.DOCUMENTATION, 0.7),
    _rule("readthedocs", r"readthedocs\.\w+", PageType.DOCUMENTATION, 0.85),
)


def match_url(url: str, rules: tuple[UrlRule, ...] = URL_RULES) -> UrlRule | None:
    """Return the first rule whose pattern occurs in ``url``."""
    for rule in rules:
        if rule.pattern.search(url):
            return rule
    return None


class UrlPatternDetector:
    name = "url-pattern"

    def __init__(self, rules: tuple[UrlRule, ...] = URL_RULES) -> None:
        self._rules = rules

    def detect(self, doc: Document | None, url: str) -> DetectionResult | None:
        rule = match_url(url, self._rules)
        if rule is None:
            return None
        return DetectionResult(type=rule.type, confidence=rule.confidence)
