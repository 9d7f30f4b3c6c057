# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Immutable tuning configuration for the extraction pipeline.

Every threshold and weight the classifier and content parser rely on lives
here under a name, so tests can pin them and callers can tune them without
touching module state. A config object is built once (usually via
``SmartCaptureConfig.from_env()``) and handed to components at construction.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class ClassifierConfig:
    """Detector acceptance and fixed detector confidences."""

    min_confidence: float = 0.5  # first detector result at or above this wins
    schema_confidence: float = 0.95  # JSON-LD @type match


@dataclass(frozen=True, slots=True)
class HeuristicConfig:
    """Score → confidence mapping for the DOM heuristic detector."""

    min_score: int = 3
    base_confidence: float = 0.5
    confidence_per_point: float = 0.05
    max_confidence: float = 0.8  # stays below URL/schema detectors
    long_article_words: int = 500

    def confidence_for(self, score: int) -> float:
        return min(self.base_confidence + score * self.confidence_per_point, self.max_confidence)


@dataclass(frozen=True, slots=True)
class ContentConfig:
    """Main-content detection, excerpt, keyword and reading-time settings."""

    min_main_words: int = 80  # selector candidate must exceed this
    excerpt_length: int = 300
    excerpt_break_ratio: float = 0.6  # word-boundary cut only past this share
    max_keywords: int = 10
    min_keyword_length: int = 4
    words_per_minute: int = 200


@dataclass(frozen=True, slots=True)
class SmartCaptureConfig:
    """Top-level configuration grouping every component's settings."""

    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    heuristic: HeuristicConfig = field(default_factory=HeuristicConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SmartCaptureConfig:
        """Build a config from ``SMARTCAPTURE_*`` environment variables.

        Unparseable values are ignored and the default is kept.
        """
        env = os.environ if environ is None else environ
        config = cls()

        classifier = config.classifier
        env_min_conf = env.get("SMARTCAPTURE_MIN_CONFIDENCE", "").strip()
        if env_min_conf:
            with suppress(ValueError):
                value = float(env_min_conf)
                if 0.0 <= value <= 1.0:
                    classifier = replace(classifier, min_confidence=value)

        content = config.content
        for env_name, attr in (
            ("SMARTCAPTURE_EXCERPT_LENGTH", "excerpt_length"),
            ("SMARTCAPTURE_MAX_KEYWORDS", "max_keywords"),
            ("SMARTCAPTURE_WORDS_PER_MINUTE", "words_per_minute"),
        ):
            raw = env.get(env_name, "").strip()
            if raw:
                with suppress(ValueError):
                    count = int(raw)
                    if count > 0:
                        content = replace(content, **{attr: count})

        log_level = env.get("SMARTCAPTURE_LOG_LEVEL", "").strip().upper() or config.log_level

        return replace(config, classifier=classifier, content=content, log_level=log_level)


DEFAULT_CONFIG = SmartCaptureConfig()
