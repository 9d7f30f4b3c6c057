# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Helpers shared by the type extractors.

Cascade priority for every field: JSON-LD > itemprop > OG/Twitter meta > DOM
heuristics. Helpers here coerce loosely-typed JSON-LD values and read the
microdata / meta sources; each returns None instead of raising so a missing
or malformed source simply falls through to the next one.
"""

from __future__ import annotations

import math
import re
from typing import Any

from smartcapture.dom import Document, attr_of, clean_text_of, meta_content, select_one
from smartcapture.sanitizer import clean_optional

_NUMBER_CHARS_RE = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")
_ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def to_number(value: Any) -> float | None:
    """Lenient number coercion: numbers pass through, strings drop non-numeric chars.

    ``"1,234 ratings"`` → 1234.0, ``"$19.99"`` → 19.99, ``"n/a"`` → None.
    NaN and infinities (which json.loads accepts) are dropped.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        m = _LEADING_FLOAT_RE.match(_NUMBER_CHARS_RE.sub("", value))
        if not m:
            return None
        number = float(m.group())
    else:
        return None
    return number if math.isfinite(number) else None


def to_int(value: Any) -> int | None:
    f = to_number(value)
    return round(f) if f is not None else None


def nested_string(obj: Any, *keys: str) -> str | None:
    """Follow ``keys`` through nested dicts; return the leaf only if it is a string."""
    current = obj
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current if isinstance(current, str) else None


def person_or_org_name(value: Any) -> str | None:
    """Name from a Person/Organization node, a plain string, or a list of either."""
    if isinstance(value, str):
        return clean_optional(value)
    if isinstance(value, dict):
        return clean_optional(value.get("name"))
    if isinstance(value, list):
        names = [n for n in (person_or_org_name(v) for v in value) if n]
        return ", ".join(names) if names else None
    return None


def first_string(value: Any) -> str | None:
    """A string, or the first element of a list of strings."""
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, str) and value else None


def first_offer(offers: Any) -> dict[str, Any] | None:
    """Offers polymorphism: a single Offer object or the first of an array."""
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    return offers if isinstance(offers, dict) else None


def parse_iso_duration(value: Any) -> tuple[int, int, int] | None:
    """``PT#H#M#S`` → (hours, minutes, seconds); each missing part is 0."""
    if not isinstance(value, str):
        return None
    m = _ISO_DURATION_RE.search(value)
    if not m:
        return None
    hours, minutes, seconds = (int(g) if g else 0 for g in m.groups())
    return hours, minutes, seconds


# --- microdata / meta ---


def itemprop_element(doc: Document, prop: str) -> Document | None:
    return select_one(doc, "//*[@itemprop=$prop]", prop=prop)


def itemprop_text(doc: Document, prop: str) -> str | None:
    """Visible text of the first ``[itemprop=prop]`` element."""
    return clean_optional(clean_text_of(itemprop_element(doc, prop)))


def itemprop_content(doc: Document, prop: str) -> str | None:
    """``content`` attribute of the first ``[itemprop=prop]`` element."""
    return clean_optional(attr_of(itemprop_element(doc, prop), "content"))


def itemprop_value(doc: Document, prop: str) -> str | None:
    """``content`` attribute, falling back to visible text."""
    el = itemprop_element(doc, prop)
    if el is None:
        return None
    return clean_optional(attr_of(el, "content")) or clean_optional(clean_text_of(el))


def og(doc: Document, prop: str) -> str | None:
    """``<meta property="...">`` content (Open Graph / article: / product: namespaces)."""
    return clean_optional(meta_content(doc, "property", prop), max_len=2048)


def named_meta(doc: Document, name: str) -> str | None:
    """``<meta name="...">`` content (author, generator, twitter:*)."""
    return clean_optional(meta_content(doc, "name", name), max_len=2048)


def first_of(*values: Any) -> Any:
    """First value that is not None (empty strings were already mapped to None)."""
    for v in values:
        if v is not None:
            return v
    return None
