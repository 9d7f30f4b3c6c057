# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Capture records and the engine that persists them.

A Capture wraps one ExtractionResult with identity, timestamps and the user's
annotations. Storage is an external collaborator reached through the async
``CaptureStore`` protocol (save/get/query/delete); interpreting a
``CaptureQuery`` is the backend's job.

Dependencies: pipeline.py (ExtractionPipeline). No storage backend imports.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from smartcapture import ContentSummary, ExtractionResult, PageBasics
from smartcapture.classifier import ClassificationData, PageType
from smartcapture.config import SmartCaptureConfig
from smartcapture.dom import Document
from smartcapture.errors import CaptureNotFoundError
from smartcapture.pipeline import ExtractionPipeline

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CaptureMetadata:
    id: str  # UUID4
    created_at: str  # ISO-8601 UTC
    updated_at: str
    profile_id: str | None = None


@dataclass(frozen=True, slots=True)
class TextHighlight:
    text: str
    start_offset: int | None = None
    color: str | None = None


@dataclass(frozen=True, slots=True)
class UserAnnotations:
    tags: tuple[str, ...] = ()
    notes: str = ""
    highlights: tuple[TextHighlight, ...] = ()
    starred: bool = False
    archived: bool = False


@dataclass(frozen=True, slots=True)
class Capture:
    """The storage unit: one page snapshot plus the user's annotations."""

    metadata: CaptureMetadata
    basics: PageBasics
    summary: ContentSummary
    classification: ClassificationData
    annotations: UserAnnotations = field(default_factory=UserAnnotations)

    @property
    def id(self) -> str:
        return self.metadata.id


@dataclass(frozen=True, slots=True)
class CaptureQuery:
    """Filter passed through to ``CaptureStore.query``. None means "any"."""

    ids: tuple[str, ...] | None = None
    tags: tuple[str, ...] | None = None  # match any tag
    type: PageType | None = None
    starred: bool | None = None
    archived: bool | None = None
    search_text: str | None = None
    limit: int | None = None
    offset: int = 0


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class CaptureStore(Protocol):
    """Interface for capture persistence (browser storage, IndexedDB, SQLite, ...)."""

    async def save(self, capture: Capture) -> None: ...

    async def get(self, capture_id: str) -> Capture | None: ...

    async def query(self, query: CaptureQuery) -> list[Capture]: ...

    async def delete(self, capture_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CaptureEngine:
    """Extracts a page, assembles a Capture, and saves it to the store."""

    def __init__(
        self,
        store: CaptureStore,
        config: SmartCaptureConfig | None = None,
        *,
        clock: Callable[[], str] = now_iso,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._store = store
        self._pipeline = ExtractionPipeline(config)
        self._clock = clock
        self._id_factory = id_factory

    async def capture(
        self,
        document: Document | str | bytes,
        url: str,
        *,
        profile_id: str | None = None,
        tags: Iterable[str] = (),
        notes: str = "",
        selected_text: str | None = None,
    ) -> Capture:
        """Extract ``document`` and persist the resulting Capture.

        Raises:
            DocumentError: ``document`` is an empty or unparseable HTML string.
        """
        result = self._pipeline.run(document, url, selected_text=selected_text)
        return await self.save_result(result, profile_id=profile_id, tags=tags, notes=notes)

    async def save_result(
        self,
        result: ExtractionResult,
        *,
        profile_id: str | None = None,
        tags: Iterable[str] = (),
        notes: str = "",
    ) -> Capture:
        """Persist an already computed ExtractionResult as a new Capture."""
        now = self._clock()
        highlights = (TextHighlight(text=result.selected_text),) if result.selected_text else ()
        capture = Capture(
            metadata=CaptureMetadata(id=self._id_factory(), created_at=now, updated_at=now, profile_id=profile_id),
            basics=result.basics,
            summary=result.summary,
            classification=result.classification,
            annotations=UserAnnotations(tags=tuple(tags), notes=notes, highlights=highlights),
        )

        await self._store.save(capture)
        logger.info("Capture saved: %s (%s)", capture.id, capture.classification.type.value)
        return capture

    async def update_annotations(
        self,
        capture_id: str,
        *,
        tags: Iterable[str] | None = None,
        notes: str | None = None,
        highlights: Iterable[TextHighlight] | None = None,
        starred: bool | None = None,
        archived: bool | None = None,
    ) -> Capture:
        """Merge the given annotation fields into a stored capture; None leaves a field as is.

        Raises:
            CaptureNotFoundError: no capture with ``capture_id`` exists.
        """
        existing = await self._store.get(capture_id)
        if existing is None:
            logger.warning("Cannot update annotations: capture %s not found", capture_id)
            raise CaptureNotFoundError(f"Capture {capture_id!r} not found", capture_id=capture_id)

        changes: dict[str, object] = {}
        if tags is not None:
            changes["tags"] = tuple(tags)
        if notes is not None:
            changes["notes"] = notes
        if highlights is not None:
            changes["highlights"] = tuple(highlights)
        if starred is not None:
            changes["starred"] = starred
        if archived is not None:
            changes["archived"] = archived

        updated = replace(
            existing,
            annotations=replace(existing.annotations, **changes),
            metadata=replace(existing.metadata, updated_at=self._clock()),
        )
        await self._store.save(updated)
        logger.info("Updated annotations for %s", capture_id)
        return updated
