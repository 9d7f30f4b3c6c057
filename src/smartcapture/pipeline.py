# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Extraction entry point: one page snapshot + URL → ExtractionResult.

MetadataExtractor, ContentParser and PageClassifier read the same document
independently. The first two degrade to minimal defaults on failure and add
a warning to the result; the classifier is total on its own. Only an
unparseable HTML string raises (DocumentError), before any stage runs.
"""

from __future__ import annotations

import logging
import time

from smartcapture import ContentSummary, ExtractionResult, PageBasics
from smartcapture.classifier.page_classifier import PageClassifier
from smartcapture.config import DEFAULT_CONFIG, SmartCaptureConfig
from smartcapture.content_parser import ContentParser
from smartcapture.dom import Document, parse_document
from smartcapture.logging_config import capture_context
from smartcapture.metadata import MetadataExtractor
from smartcapture.sanitizer import clean_optional

logger = logging.getLogger(__name__)

_MAX_SELECTED_TEXT = 10_000


class ExtractionPipeline:
    """Holds the configured components so repeated captures reuse them."""

    def __init__(self, config: SmartCaptureConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.metadata = MetadataExtractor()
        self.content = ContentParser(self.config.content)
        self.classifier = PageClassifier(self.config)

    def run(self, document: Document | str | bytes, url: str, *, selected_text: str | None = None) -> ExtractionResult:
        """Extract basics, summary and classification for one page.

        Raises:
            DocumentError: ``document`` is an empty or unparseable HTML string.
        """
        doc = parse_document(document) if isinstance(document, (str, bytes)) else document

        with capture_context(url):
            t0 = time.perf_counter()
            warnings: list[str] = []

            try:
                basics = self.metadata.extract(doc, url)
            except Exception as e:
                logger.warning("Metadata extraction failed: %s: %s", type(e).__name__, e)
                warnings.append(f"metadata extraction failed: {type(e).__name__}")
                basics = PageBasics(title="", url=url or None)

            try:
                summary = self.content.parse_content(doc)
            except Exception as e:
                logger.warning("Content parsing failed: %s: %s", type(e).__name__, e)
                warnings.append(f"content parsing failed: {type(e).__name__}")
                summary = ContentSummary()

            classification = self.classifier.classify(doc, url)

            logger.info(
                "Extracted %s page in %.1fms (%d words)",
                classification.type.value,
                (time.perf_counter() - t0) * 1000,
                summary.word_count,
            )

        return ExtractionResult(
            basics=basics,
            summary=summary,
            classification=classification,
            selected_text=clean_optional(selected_text, max_len=_MAX_SELECTED_TEXT),
            warnings=tuple(warnings),
        )


def extract_page(
    document: Document | str | bytes,
    url: str,
    *,
    selected_text: str | None = None,
    config: SmartCaptureConfig | None = None,
) -> ExtractionResult:
    """Run the full extraction pipeline over ``document`` (lxml tree or HTML string)."""
    return ExtractionPipeline(config).run(document, url, selected_text=selected_text)
