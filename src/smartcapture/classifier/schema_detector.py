# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Schema.org detector: page type from JSON-LD @type.

Highest-priority detector: structured data is asserted by the page author,
so a match carries a fixed confidence (0.95 by default).
"""

from __future__ import annotations

from typing import Any

from smartcapture.classifier import DetectionResult, PageType
from smartcapture.config import ClassifierConfig
from smartcapture.dom import Document, jsonld_blocks, jsonld_nodes, jsonld_types

# schema.org @type (lowercased) → PageType
SCHEMA_TYPE_MAP: dict[str, PageType] = {
    "article": PageType.ARTICLE,
    "newsarticle": PageType.ARTICLE,
    "blogposting": PageType.ARTICLE,
    "technicalarticle": PageType.ARTICLE,
    "scholarlyarticle": PageType.ARTICLE,
    "report": PageType.ARTICLE,
    "product": PageType.PRODUCT,
    "videoobject": PageType.VIDEO,
    "recipe": PageType.RECIPE,
    "softwaresourcecode": PageType.REPOSITORY,
    "softwareapplication": PageType.REPOSITORY,
    "howto": PageType.DOCUMENTATION,
    "qapage": PageType.FORUM_THREAD,
    "discussionforumposting": PageType.FORUM_THREAD,
    "socialmediaposting": PageType.SOCIAL_POST,
}


def resolve_schema_type(data: Any) -> PageType | None:
    """Map one parsed JSON-LD block to a PageType.

    A block with an @graph array is judged by its members alone.
    """
    for node in jsonld_nodes(data, graph_only=True):
        for schema_type in jsonld_types(node):
            mapped = SCHEMA_TYPE_MAP.get(schema_type.lower())
            if mapped is not None:
                return mapped
    return None


class SchemaOrgDetector:
    name = "schema.org"

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._confidence = (config or ClassifierConfig()).schema_confidence

    def detect(self, doc: Document, url: str = "") -> DetectionResult | None:
        for data in jsonld_blocks(doc):
            page_type = resolve_schema_type(data)
            if page_type is not None:
                return DetectionResult(type=page_type, confidence=self._confidence)
        return None
