# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""PageClassifier: detector cascade plus type-specific extraction.

Detection runs in fixed trust order:
    1. SchemaOrgDetector   (0.95, author-asserted JSON-LD)
    2. UrlPatternDetector  (0.7-0.9, platform URL rules)
    3. HeuristicDetector   (0.5-0.8, DOM signal tallies)

The first proposal at or above ``ClassifierConfig.min_confidence`` is
accepted; results are never combined across detectors. The extractor
registered for the accepted type then fills ``ClassificationData.fields``.

classify() never raises: a failing detector is skipped, a failing extractor
leaves EmptyFields in place, and no accepted proposal yields UNKNOWN at 0.0.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from smartcapture.classifier import (
    ClassificationData,
    EmptyFields,
    PageDetector,
    PageType,
    TypeExtractor,
    TypeSpecificFields,
)
from smartcapture.classifier.extractors import (
    ArticleExtractor,
    DocumentationExtractor,
    ProductExtractor,
    RecipeExtractor,
    RepositoryExtractor,
    VideoExtractor,
)
from smartcapture.classifier.heuristic_detector import HeuristicDetector
from smartcapture.classifier.schema_detector import SchemaOrgDetector
from smartcapture.classifier.url_detector import UrlPatternDetector
from smartcapture.config import DEFAULT_CONFIG, SmartCaptureConfig
from smartcapture.dom import Document
from smartcapture.errors import ExtractorError

logger = logging.getLogger(__name__)


def default_detectors(config: SmartCaptureConfig = DEFAULT_CONFIG) -> tuple[PageDetector, ...]:
    """Detectors in priority order."""
    return (
        SchemaOrgDetector(config.classifier),
        UrlPatternDetector(),
        HeuristicDetector(config.heuristic),
    )


def default_extractors(config: SmartCaptureConfig = DEFAULT_CONFIG) -> dict[PageType, TypeExtractor]:
    return {
        PageType.ARTICLE: ArticleExtractor(config.content),
        PageType.PRODUCT: ProductExtractor(),
        PageType.VIDEO: VideoExtractor(),
        PageType.REPOSITORY: RepositoryExtractor(),
        PageType.DOCUMENTATION: DocumentationExtractor(),
        PageType.RECIPE: RecipeExtractor(),
    }


DEFAULT_DETECTORS: tuple[PageDetector, ...] = default_detectors()
DEFAULT_EXTRACTORS: Mapping[PageType, TypeExtractor] = default_extractors()


class PageClassifier:
    def __init__(
        self,
        config: SmartCaptureConfig | None = None,
        *,
        detectors: Sequence[PageDetector] | None = None,
        extractors: Mapping[PageType, TypeExtractor] | None = None,
    ) -> None:
        cfg = config or DEFAULT_CONFIG
        self._min_confidence = cfg.classifier.min_confidence
        if detectors is None:
            detectors = DEFAULT_DETECTORS if config is None else default_detectors(cfg)
        if extractors is None:
            extractors = DEFAULT_EXTRACTORS if config is None else default_extractors(cfg)
        self._detectors = tuple(detectors)
        self._extractors = dict(extractors)

    @property
    def detectors(self) -> tuple[PageDetector, ...]:
        return self._detectors

    def classify(self, doc: Document, url: str) -> ClassificationData:
        for detector in self._detectors:
            try:
                result = detector.detect(doc, url)
            except Exception as e:
                logger.warning("Detector %r failed: %s: %s", detector.name, type(e).__name__, e)
                continue

            if result is None or result.confidence < self._min_confidence:
                continue

            logger.info(
                "Detected type %r via %s (confidence: %.2f)",
                result.type.value,
                detector.name,
                result.confidence,
            )
            return ClassificationData(
                type=result.type,
                confidence=result.confidence,
                fields=self._extract_fields(result.type, doc, url),
            )

        logger.info("No page type detected, classifying as %r", PageType.UNKNOWN.value)
        return ClassificationData.unknown()

    def _extract_fields(self, page_type: PageType, doc: Document, url: str) -> TypeSpecificFields:
        extractor = self._extractors.get(page_type)
        if extractor is None:
            return EmptyFields()
        try:
            fields = extractor.extract(doc, url)
            if not isinstance(fields, EmptyFields) and getattr(type(fields), "page_type", None) is not page_type:
                raise ExtractorError(
                    f"expected a {page_type.value!r} record, got {type(fields).__name__}",
                    extractor=type(extractor).__name__,
                )
            return fields
        except Exception as e:
            logger.warning(
                "Extractor %s for %r failed: %s: %s",
                type(extractor).__name__,
                page_type.value,
                type(e).__name__,
                e,
            )
            return EmptyFields()
