# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""JSON wire form for extraction results and captures.

Keys use the browser tool's camelCase names (``canonicalUrl``,
``readingTimeMinutes``, ``typeSpecificFields``). Optional members that are
None, and optional sequences that are empty, are omitted.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from smartcapture import ContentSummary, ExtractionResult, PageBasics
from smartcapture.capture import Capture, TextHighlight
from smartcapture.classifier import ClassificationData, TocEntry, TypeSpecificFields


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _value(v: Any) -> Any:
    if isinstance(v, TocEntry):
        return {"title": v.title, "anchor": v.anchor}
    if isinstance(v, tuple):
        return [_value(item) for item in v]
    return v


def _compact(obj: Any, *, keep: tuple[str, ...] = ()) -> dict[str, Any]:
    """Dataclass → camelCase dict; None and empty tuples dropped unless listed in ``keep``."""
    out: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        v = getattr(obj, f.name)
        if f.name not in keep and (v is None or v == ()):
            continue
        out[camel_case(f.name)] = _value(v)
    return out


def basics_to_dict(basics: PageBasics) -> dict[str, Any]:
    return _compact(basics, keep=("title",))


def summary_to_dict(summary: ContentSummary) -> dict[str, Any]:
    return _compact(summary, keep=("keywords",))


def fields_to_dict(fields: TypeSpecificFields) -> dict[str, Any]:
    return _compact(fields)


def classification_to_dict(classification: ClassificationData) -> dict[str, Any]:
    return {
        "type": classification.type.value,
        "confidence": classification.confidence,
        "typeSpecificFields": fields_to_dict(classification.fields),
    }


def _highlight_to_dict(highlight: TextHighlight) -> dict[str, Any]:
    return _compact(highlight, keep=("text",))


def capture_to_dict(capture: Capture) -> dict[str, Any]:
    ann = capture.annotations
    return {
        "metadata": _compact(capture.metadata),
        "basics": basics_to_dict(capture.basics),
        "summary": summary_to_dict(capture.summary),
        "classification": classification_to_dict(capture.classification),
        "annotations": {
            "tags": list(ann.tags),
            "notes": ann.notes,
            "highlights": [_highlight_to_dict(h) for h in ann.highlights],
            "starred": ann.starred,
            "archived": ann.archived,
        },
    }


def to_dict(obj: ExtractionResult | Capture) -> dict[str, Any]:
    """Wire dict for an ExtractionResult or a Capture."""
    if isinstance(obj, Capture):
        return capture_to_dict(obj)

    data: dict[str, Any] = {
        "basics": basics_to_dict(obj.basics),
        "summary": summary_to_dict(obj.summary),
        "classification": classification_to_dict(obj.classification),
    }
    if obj.selected_text:
        data["selectedText"] = obj.selected_text
    if obj.warnings:
        data["warnings"] = list(obj.warnings)
    return data


def to_json(obj: ExtractionResult | Capture, indent: int = 2) -> str:
    """Serialize an ExtractionResult or Capture to a JSON string.

    Args:
        obj: result or capture to serialize
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return json.dumps(to_dict(obj), ensure_ascii=False, indent=indent)
