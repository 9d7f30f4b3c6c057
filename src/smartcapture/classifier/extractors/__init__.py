# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Type-specific field extractors, one per extractable PageType.

social_post and forum_thread have no extractor; classification of those
types always carries EmptyFields.
"""

from __future__ import annotations

from smartcapture.classifier.extractors.article import ArticleExtractor
from smartcapture.classifier.extractors.documentation import DocumentationExtractor
from smartcapture.classifier.extractors.product import ProductExtractor
from smartcapture.classifier.extractors.recipe import RecipeExtractor
from smartcapture.classifier.extractors.repository import RepositoryExtractor
from smartcapture.classifier.extractors.video import VideoExtractor

__all__ = [
    "ArticleExtractor",
    "DocumentationExtractor",
    "ProductExtractor",
    "RecipeExtractor",
    "RepositoryExtractor",
    "VideoExtractor",
]
