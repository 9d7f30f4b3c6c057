# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page classification engine.

Core data structures shared by the detectors, the type extractors and the
PageClassifier: the closed PageType enumeration, transient DetectionResult,
one frozen field record per extractable type, and ClassificationData which
ties a type to the record shape registered for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smartcapture.dom import Document


class PageType(StrEnum):
    """Semantic page category."""

    ARTICLE = "article"
    PRODUCT = "product"
    VIDEO = "video"
    REPOSITORY = "repository"
    DOCUMENTATION = "documentation"
    SOCIAL_POST = "social_post"
    FORUM_THREAD = "forum_thread"
    RECIPE = "recipe"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """A single detector's proposal. Never persisted on its own."""

    type: PageType
    confidence: float  # 0.0–1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence!r}")


# ---------------------------------------------------------------------------
# Type-specific field records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EmptyFields:
    """No type-specific data (unknown pages, types without an extractor, failures)."""

    page_type: ClassVar[PageType | None] = None


@dataclass(frozen=True, slots=True)
class ArticleFields:
    page_type: ClassVar[PageType] = PageType.ARTICLE

    author: str | None = None
    published_date: str | None = None
    modified_date: str | None = None
    section: str | None = None
    publisher: str | None = None
    reading_time_minutes: int | None = None


@dataclass(frozen=True, slots=True)
class ProductFields:
    page_type: ClassVar[PageType] = PageType.PRODUCT

    name: str | None = None
    price: str | None = None  # as published, e.g. "19.99"
    currency: str | None = None
    rating: float | None = None
    review_count: int | None = None
    in_stock: bool | None = None  # None = availability not stated
    sku: str | None = None
    brand: str | None = None
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class VideoFields:
    page_type: ClassVar[PageType] = PageType.VIDEO

    title: str | None = None
    duration: int | None = None  # seconds
    channel: str | None = None
    channel_url: str | None = None
    upload_date: str | None = None
    view_count: int | None = None
    thumbnail_url: str | None = None
    embed_url: str | None = None


@dataclass(frozen=True, slots=True)
class RepositoryFields:
    page_type: ClassVar[PageType] = PageType.REPOSITORY

    name: str | None = None
    owner: str | None = None
    full_name: str | None = None
    stars: int | None = None
    forks: int | None = None
    language: str | None = None
    description: str | None = None
    license: str | None = None
    topics: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TocEntry:
    title: str
    anchor: str


@dataclass(frozen=True, slots=True)
class DocumentationFields:
    page_type: ClassVar[PageType] = PageType.DOCUMENTATION

    section_title: str | None = None
    breadcrumb: tuple[str, ...] = ()
    table_of_contents: tuple[TocEntry, ...] = ()
    version: str | None = None
    framework: str | None = None


@dataclass(frozen=True, slots=True)
class RecipeFields:
    page_type: ClassVar[PageType] = PageType.RECIPE

    recipe_name: str | None = None
    prep_time: int | None = None  # minutes; None = unknown
    cook_time: int | None = None
    total_time: int | None = None
    servings: str | None = None
    calories: float | None = None
    ingredients: tuple[str, ...] = ()
    cuisine_type: str | None = None


TypeSpecificFields = (
    EmptyFields | ArticleFields | ProductFields | VideoFields | RepositoryFields | DocumentationFields | RecipeFields
)


@dataclass(frozen=True, slots=True)
class ClassificationData:
    """Final classification of one page.

    ``fields`` must be the record registered for ``type`` or EmptyFields;
    an UNKNOWN classification always carries EmptyFields.
    """

    type: PageType
    confidence: float
    fields: TypeSpecificFields = EmptyFields()

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence!r}")
        record_type = type(self.fields).page_type
        if record_type is not None and record_type != self.type:
            raise ValueError(f"{type(self.fields).__name__} cannot describe a {self.type.value!r} page")

    @classmethod
    def unknown(cls) -> ClassificationData:
        return cls(type=PageType.UNKNOWN, confidence=0.0, fields=EmptyFields())


# ---------------------------------------------------------------------------
# Component interfaces
# ---------------------------------------------------------------------------


@runtime_checkable
class PageDetector(Protocol):
    """Proposes a page type from one evidence source."""

    name: str

    def detect(self, doc: Document, url: str) -> DetectionResult | None: ...


@runtime_checkable
class TypeExtractor(Protocol):
    """Pulls the type-specific field record for an accepted page type."""

    page_type: PageType

    def extract(self, doc: Document, url: str) -> TypeSpecificFields: ...
