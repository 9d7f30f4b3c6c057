# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Main-content detection and content summary (excerpt, keywords, reading time).

Main content is found in two passes:
1. Fixed selector priority list; the first candidate whose word count exceeds
   ``ContentConfig.min_main_words`` wins.
2. Otherwise the direct child of <body> (page chrome excluded) carrying the
   most words, else <body> itself.

Keywords are plain term frequencies over the main-content tokens after
lower-casing, stripping punctuation, and dropping short tokens and stop words.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter

from smartcapture import ContentSummary
from smartcapture.config import ContentConfig
from smartcapture.dom import Document, has_class, root_of, select, select_one, text_of
from smartcapture.sanitizer import normalize_whitespace, truncate

logger = logging.getLogger(__name__)

# Priority order; first match with enough words wins.
MAIN_CONTENT_XPATHS: tuple[str, ...] = (
    "//article",
    "//*[@role='main']",
    "//main",
    f"//*[{has_class('post-content')}]",
    f"//*[{has_class('article-content')}]",
    f"//*[{has_class('entry-content')}]",
    f"//*[{has_class('story-body')}]",
    "//*[@id='article-body']",
    "//*[@id='content']",
    f"//*[{has_class('content')}]",
)

_BODY_CANDIDATES = "./*[not(self::nav or self::header or self::footer or self::aside or self::script or self::style)]"

_KEYWORD_STRIP_RE = re.compile(r"[^a-z0-9\-]")

STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "this", "that", "these", "those", "is",
        "are", "was", "were", "be", "been", "being", "have", "has", "had",
        "do", "does", "did", "will", "would", "shall", "should", "may",
        "might", "must", "can", "could", "it", "its", "he", "she", "they",
        "we", "you", "i", "me", "my", "your", "their", "our", "him", "her",
        "them", "us", "not", "no", "if", "so", "as", "about", "more", "also",
        "just", "than", "then", "when", "what", "which", "who", "how", "all",
        "each", "every", "both", "few", "some", "any", "most", "other", "into",
        "over", "after", "before", "between", "under", "above", "such", "only",
        "very", "there", "here", "where", "why", "while", "during", "through",
        "because", "since", "until", "although", "though", "even", "still",
        "however", "already", "always", "never", "often", "sometimes", "like",
        "well", "back", "much", "many", "make", "made", "get", "got", "take",
        "took", "come", "came", "want", "need", "use", "used", "using", "new",
        "first", "last", "long", "great", "little", "own", "old", "right",
        "big", "high", "different", "small", "large", "next", "early", "young",
        "important", "public", "good", "same", "able", "know", "said", "says",
    }
)


def _words(el: Document | None) -> list[str]:
    return text_of(el).split()


def _body_of(doc: Document) -> Document:
    root = root_of(doc)
    body = select_one(root, "//body")
    return body if body is not None else root


def find_main_content(doc: Document, config: ContentConfig | None = None) -> Document:
    """Element holding the page's main readable content (never None)."""
    cfg = config or ContentConfig()
    for xpath in MAIN_CONTENT_XPATHS:
        el = select_one(doc, xpath)
        if el is not None and len(_words(el)) > cfg.min_main_words:
            return el

    body = _body_of(doc)
    best, best_len = body, 0
    for child in select(body, _BODY_CANDIDATES):
        n = len(_words(child))
        if n > best_len:
            best, best_len = child, n
    return best


def reading_time(word_count: int, words_per_minute: int = 200) -> int:
    """Minutes to read ``word_count`` words; never less than 1."""
    return max(1, math.ceil(word_count / words_per_minute))


def extract_keywords(words: list[str], config: ContentConfig | None = None) -> list[str]:
    """Top terms by frequency; ties keep first-seen order."""
    cfg = config or ContentConfig()
    freq: Counter[str] = Counter()
    for raw in words:
        w = _KEYWORD_STRIP_RE.sub("", raw.lower())
        if len(w) < cfg.min_keyword_length or w in STOP_WORDS:
            continue
        freq[w] += 1
    return [word for word, _ in freq.most_common(cfg.max_keywords)]


class ContentParser:
    def __init__(self, config: ContentConfig | None = None) -> None:
        self._config = config or ContentConfig()

    def parse_content(self, doc: Document) -> ContentSummary:
        main = find_main_content(doc, self._config)
        text = normalize_whitespace(text_of(main))
        words = text.split()

        logger.debug("Main content <%s>: %d words", main.tag, len(words))

        return ContentSummary(
            excerpt=self.excerpt(text),
            keywords=tuple(extract_keywords(words, self._config)),
            reading_time_minutes=reading_time(len(words), self._config.words_per_minute),
            word_count=len(words),
        )

    def excerpt(self, text: str) -> str:
        if not text:
            return ""
        return truncate(text, self._config.excerpt_length, self._config.excerpt_break_ratio)
