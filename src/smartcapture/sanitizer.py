# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Text clean-up for values lifted out of arbitrary web pages.

1. normalize_whitespace(): collapse runs of whitespace (content analysis)
2. truncate(): word-boundary cut with ellipsis (excerpts)
3. sanitize_text(): short field values (titles, names, dates) before they
   enter a field record
"""

from __future__ import annotations

import re

# Zero-width chars, bidi overrides, C0/C1 controls (tab/newline handled separately)
_CONTROL_CHAR_RE = re.compile(
    r"[\u200B-\u200F\u202A-\u202E\u2060-\u2069\uFEFF\uFFF9-\uFFFB"
    r"\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]"
)

# ANSI escape sequences
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")

_WHITESPACE_RE = re.compile(r"\s+")

ELLIPSIS = "\u2026"


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run into a single space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, max_len: int, break_ratio: float = 0.6) -> str:
    """Cut ``text`` to ``max_len`` chars, preferring the last word boundary.

    The cut moves back to the last space only when that space lies beyond
    ``max_len * break_ratio``; otherwise the text is cut mid-word. An ellipsis
    is appended whenever anything was removed, so the result is at most
    ``max_len + 1`` characters.
    """
    if len(text) <= max_len:
        return text
    head = text[:max_len]
    last_space = head.rfind(" ")
    break_point = last_space if last_space > max_len * break_ratio else max_len
    return head[:break_point].rstrip() + ELLIPSIS


def sanitize_text(text: str, max_len: int = 256) -> str:
    """Sanitize a short text field taken from page markup or JSON-LD.

    - Removes ANSI escape sequences
    - Strips Unicode control characters (zero-width, bidi overrides)
    - Collapses newlines and whitespace runs into single spaces
    - Truncates to max_len
    """
    if not text:
        return text

    text = _ANSI_ESCAPE_RE.sub("", text)
    text = _CONTROL_CHAR_RE.sub("", text)
    text = normalize_whitespace(text)

    if len(text) > max_len:
        text = text[:max_len]

    return text


def clean_optional(value: object, max_len: int = 256) -> str | None:
    """``sanitize_text`` for loosely-typed sources: non-strings and blanks → None."""
    if not isinstance(value, str):
        return None
    cleaned = sanitize_text(value, max_len=max_len)
    return cleaned or None
