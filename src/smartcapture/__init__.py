# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Smart Capture: typed metadata extraction from rendered web pages.

For one page snapshot and its URL the pipeline produces:
- basics: page-level metadata (title, description, favicon, canonical URL, ...)
- summary: main-content excerpt, keywords, word count and reading time
- classification: semantic page type, confidence, and type-specific fields
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smartcapture.classifier import ClassificationData


@dataclass(frozen=True, slots=True)
class PageBasics:
    """Descriptive metadata of a page, independent of its classification."""

    title: str  # always present, possibly ""
    description: str | None = None
    favicon: str | None = None
    url: str | None = None
    canonical_url: str | None = None
    author: str | None = None
    published_date: str | None = None
    og_image: str | None = None
    og_type: str | None = None
    og_site_name: str | None = None
    language: str | None = None
    charset: str | None = None


@dataclass(frozen=True, slots=True)
class ContentSummary:
    """Category-independent digest of the main readable content."""

    excerpt: str = ""  # <=300 chars plus an optional ellipsis
    keywords: tuple[str, ...] = ()  # frequency-descending, <=10
    reading_time_minutes: int = 1
    word_count: int = 0


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Everything extracted from one page snapshot."""

    basics: PageBasics
    summary: ContentSummary
    classification: ClassificationData
    selected_text: str | None = None
    warnings: tuple[str, ...] = ()  # degraded-mode notices

    @property
    def page_type(self) -> str:
        return self.classification.type.value
