# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import smartcapture  # noqa: F401
except ImportError:
    raise ImportError("smartcapture is not installed. Run: pip install -e '.[dev]'") from None

import pytest

from smartcapture.capture import Capture, CaptureQuery
from tests._html_helpers import jsonld, meta, page, words


class InMemoryCaptureStore:
    """Dict-backed CaptureStore for engine tests."""

    def __init__(self) -> None:
        self.captures: dict[str, Capture] = {}
        self.saves = 0

    async def save(self, capture: Capture) -> None:
        self.saves += 1
        self.captures[capture.id] = capture

    async def get(self, capture_id: str) -> Capture | None:
        return self.captures.get(capture_id)

    async def query(self, query: CaptureQuery) -> list[Capture]:
        results = list(self.captures.values())
        if query.ids is not None:
            results = [c for c in results if c.id in query.ids]
        if query.type is not None:
            results = [c for c in results if c.classification.type == query.type]
        if query.tags is not None:
            results = [c for c in results if set(c.annotations.tags) & set(query.tags)]
        if query.starred is not None:
            results = [c for c in results if c.annotations.starred == query.starred]
        end = None if query.limit is None else query.offset + query.limit
        return results[query.offset : end]

    async def delete(self, capture_id: str) -> None:
        self.captures.pop(capture_id, None)


@pytest.fixture
def store() -> InMemoryCaptureStore:
    return InMemoryCaptureStore()


@pytest.fixture
def article_html() -> str:
    """A news article page with JSON-LD, OG tags and 1000 body words."""
    head = "".join(
        (
            "<title>Wetland survey results | Coastal News</title>",
            '<meta charset="UTF-8">',
            meta("property", "og:title", "Wetland survey results"),
            meta("property", "og:description", "Volunteers counted birds."),
            meta("property", "og:site_name", "Coastal News"),
            meta("name", "author", "Dana Reyes"),
            '<link rel="icon" href="/static/icon.png">',
            '<link rel="canonical" href="/news/wetland-survey">',
            jsonld(
                {
                    "@context": "https://schema.org",
                    "@type": "NewsArticle",
                    "headline": "Wetland survey results",
                    "author": {"@type": "Person", "name": "Dana Reyes"},
                    "datePublished": "2025-03-01T08:00:00Z",
                    "publisher": {"@type": "Organization", "name": "Coastal News"},
                }
            ),
        )
    )
    body = f"<nav>Home News Sports</nav><article><h1>Wetland survey results</h1>\n<p>{words(1000)}</p></article>"
    return page(body, head, lang="en")
