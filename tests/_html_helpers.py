# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared helper utilities for building test documents.

Underscore prefix prevents pytest collection.
These are plain utility functions (not fixtures; conftest.py is reserved
for fixtures).
"""

from __future__ import annotations

import json
from typing import Any

from smartcapture.dom import Document, parse_document

FILLER = (
    "Researchers gathered observations across seasons while volunteers catalogued "
    "migrating birds along coastal wetlands near harbor towns"
).split()


def page(body: str = "", head: str = "", *, lang: str | None = None) -> str:
    """Wrap body/head fragments into a full HTML page string."""
    lang_attr = f' lang="{lang}"' if lang else ""
    return f"<!DOCTYPE html><html{lang_attr}><head>{head}</head><body>{body}</body></html>"


def make_doc(body: str = "", head: str = "", *, lang: str | None = None) -> Document:
    """Parse a page built from body/head fragments."""
    return parse_document(page(body, head, lang=lang))


def jsonld(data: Any) -> str:
    """A ``<script type="application/ld+json">`` tag carrying ``data``."""
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


def meta(attr: str, value: str, content: str) -> str:
    return f'<meta {attr}="{value}" content="{content}">'


def words(n: int, vocabulary: list[str] | None = None) -> str:
    """``n`` space-separated words cycling through ``vocabulary``."""
    vocab = vocabulary or FILLER
    return " ".join(vocab[i % len(vocab)] for i in range(n))
