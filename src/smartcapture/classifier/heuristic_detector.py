# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""DOM heuristic detector: lowest-priority fallback.

Each candidate type owns a list of independent signals (semantic elements,
microdata attributes, repeated structural blocks, button wording). A fired
signal adds its fixed integer weight to that type's tally. The best tally
wins, ties going to the type declared first in ``SCORERS``.

Repository and social_post pages are not scored here; they are only
recognised through JSON-LD or URL rules.

Confidence = min(0.5 + score × 0.05, 0.8), and nothing below a score of 3 is
reported, so a heuristic guess never outranks the deterministic detectors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from smartcapture.classifier import DetectionResult, PageType
from smartcapture.config import HeuristicConfig
from smartcapture.dom import Document, exists, has_class, select, select_one, text_of, word_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HeuristicSignal:
    """A single DOM signal contributing a fixed weight to one page type."""

    name: str
    weight: int
    check: Callable[[Document, HeuristicConfig], bool]


@dataclass(frozen=True, slots=True)
class Scorer:
    type: PageType
    signals: tuple[HeuristicSignal, ...]

    def score(self, doc: Document, config: HeuristicConfig) -> int:
        return sum(sig.weight for sig in self.signals if sig.check(doc, config))


# ---------------------------------------------------------------------------
# Check builders
# ---------------------------------------------------------------------------


def _any_of(*xpaths: str) -> str:
    return " | ".join(xpaths)


def _present(xpath: str) -> Callable[[Document, HeuristicConfig], bool]:
    return lambda doc, _cfg: exists(doc, xpath)


def _at_least(xpath: str, count: int) -> Callable[[Document, HeuristicConfig], bool]:
    return lambda doc, _cfg: len(select(doc, xpath)) >= count


def _itemprop(*props: str) -> str:
    return _any_of(*(f"//*[@itemprop='{p}']" for p in props))


_CART_PHRASES = ("add to cart", "buy now")


def _has_cart_button(doc: Document, _cfg: HeuristicConfig) -> bool:
    for button in select(doc, _any_of("//button", "//*[@role='button']")):
        label = text_of(button).lower()
        if any(phrase in label for phrase in _CART_PHRASES):
            return True
    return False


def _has_long_main_text(doc: Document, cfg: HeuristicConfig) -> bool:
    main = select_one(doc, "//*[self::article or self::main or @role='main']")
    return main is not None and word_count(main) > cfg.long_article_words


# ---------------------------------------------------------------------------
# Signal registry
# ---------------------------------------------------------------------------

_ARTICLE_SIGNALS = (
    HeuristicSignal("article_element", 2, _present("//article")),
    HeuristicSignal("article_body_itemprop", 2, _present(_itemprop("articleBody"))),
    HeuristicSignal("time_datetime", 1, _present("//time[@datetime]")),
    HeuristicSignal("author_marker", 1, _present("//*[@itemprop='author' or @rel='author']")),
    HeuristicSignal("published_time_meta", 1, _present("//meta[@property='article:published_time']")),
    HeuristicSignal("long_form_text", 1, _has_long_main_text),
)

_PRODUCT_SIGNALS = (
    HeuristicSignal("price_itemprop", 2, _present(_itemprop("price"))),
    HeuristicSignal("currency_itemprop", 1, _present(_itemprop("priceCurrency"))),
    HeuristicSignal("rating_itemprop", 2, _present(_itemprop("aggregateRating", "ratingValue"))),
    HeuristicSignal("product_data_attr", 1, _present("//*[@data-product-id or @data-sku]")),
    HeuristicSignal("cart_button", 2, _has_cart_button),
)

_VIDEO_SIGNALS = (
    HeuristicSignal("video_element", 2, _present("//video")),
    HeuristicSignal(
        "video_embed",
        2,
        _present("//iframe[contains(@src, 'youtube') or contains(@src, 'vimeo')]"),
    ),
    HeuristicSignal("duration_itemprop", 2, _present(_itemprop("duration"))),
    HeuristicSignal("upload_date_itemprop", 1, _present(_itemprop("uploadDate"))),
    HeuristicSignal("thumbnail_itemprop", 1, _present(_itemprop("thumbnailUrl"))),
)

_RECIPE_SIGNALS = (
    HeuristicSignal("ingredient_itemprop", 3, _present(_itemprop("recipeIngredient"))),
    HeuristicSignal("instructions_itemprop", 3, _present(_itemprop("recipeInstructions"))),
    HeuristicSignal("prep_time_itemprop", 1, _present(_itemprop("prepTime"))),
    HeuristicSignal("cook_time_itemprop", 1, _present(_itemprop("cookTime"))),
    HeuristicSignal("yield_itemprop", 1, _present(_itemprop("recipeYield"))),
)

_DOCUMENTATION_SIGNALS = (
    HeuristicSignal(
        "docs_sidebar",
        2,
        _present(
            _any_of(
                f"//nav[{has_class('sidebar')}]",
                f"//*[{has_class('docs-sidebar')}]",
                f"//*[{has_class('toc')}]",
                "//*[@id='toc']",
            )
        ),
    ),
    HeuristicSignal(
        "breadcrumb",
        1,
        _present(_any_of("//*[@aria-label='breadcrumb']", f"//*[{has_class('breadcrumb')}]")),
    ),
    HeuristicSignal(
        "code_blocks",
        2,
        _at_least(
            _any_of("//pre/code", f"//*[{has_class('highlight')}]", f"//*[{has_class('codehilite')}]"),
            2,
        ),
    ),
    HeuristicSignal(
        "version_selector",
        1,
        _present(_any_of("//select[contains(@name, 'version')]", f"//*[{has_class('version-selector')}]")),
    ),
)

_FORUM_THREAD_SIGNALS = (
    HeuristicSignal(
        "answer_blocks",
        3,
        _at_least(
            _any_of(
                f"//*[{has_class('answer')}]",
                f"//*[{has_class('comment')}]",
                "//*[@itemprop='suggestedAnswer']",
                "//*[@itemprop='acceptedAnswer']",
            ),
            2,
        ),
    ),
    HeuristicSignal(
        "vote_count",
        2,
        _present(_any_of(f"//*[{has_class('vote-count')}]", "//*[@itemprop='upvoteCount']")),
    ),
    HeuristicSignal(
        "post_tags",
        1,
        _present(_any_of(f"//*[{has_class('post-tag')}]", f"//*[{has_class('tag-list')}]")),
    ),
)

# Declaration order breaks ties.
SCORERS: tuple[Scorer, ...] = (
    Scorer(PageType.ARTICLE, _ARTICLE_SIGNALS),
    Scorer(PageType.PRODUCT, _PRODUCT_SIGNALS),
    Scorer(PageType.VIDEO, _VIDEO_SIGNALS),
    Scorer(PageType.RECIPE, _RECIPE_SIGNALS),
    Scorer(PageType.DOCUMENTATION, _DOCUMENTATION_SIGNALS),
    Scorer(PageType.FORUM_THREAD, _FORUM_THREAD_SIGNALS),
)


def score_page(doc: Document, config: HeuristicConfig | None = None) -> dict[PageType, int]:
    """Raw tally per scored type, in declaration order."""
    cfg = config or HeuristicConfig()
    return {scorer.type: scorer.score(doc, cfg) for scorer in SCORERS}


class HeuristicDetector:
    name = "heuristic"

    def __init__(self, config: HeuristicConfig | None = None) -> None:
        self._config = config or HeuristicConfig()

    def detect(self, doc: Document, url: str = "") -> DetectionResult | None:
        scores = score_page(doc, self._config)

        best_type = PageType.UNKNOWN
        best_score = 0
        for page_type, score in scores.items():
            if score > best_score:
                best_type, best_score = page_type, score

        logger.debug("Heuristic scores: %s", {t.value: s for t, s in scores.items()})

        if best_score < self._config.min_score:
            return None
        return DetectionResult(type=best_type, confidence=self._config.confidence_for(best_score))
