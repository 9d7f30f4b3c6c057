# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for smartcapture.sanitizer: text clean-up for page-derived values."""

from __future__ import annotations

import pytest

from smartcapture.sanitizer import ELLIPSIS, clean_optional, normalize_whitespace, sanitize_text, truncate


class TestSanitizeText:
    def test_passthrough(self):
        assert sanitize_text("Walnut Desk") == "Walnut Desk"

    def test_passthrough_non_latin(self):
        assert sanitize_text("장바구니 담기") == "장바구니 담기"

    def test_empty_string(self):
        assert sanitize_text("") == ""

    @pytest.mark.parametrize(
        "raw",
        ["ab\u200bcd", "ab\u200ccd", "ab\u200dcd", "\ufeffabcd", "ab\u202ecd", "ab\u2066cd", "ab\x00cd", "ab\x7fcd"],
    )
    def test_strips_invisible_and_control_chars(self, raw: str):
        assert sanitize_text(raw) == "abcd"

    def test_strips_ansi(self):
        assert sanitize_text("\x1b[31mred\x1b[0m alert") == "red alert"

    def test_collapses_newlines_and_tabs(self):
        assert sanitize_text("line1\n\n\tline2\r\nline3") == "line1 line2 line3"

    def test_truncates_to_max_len(self):
        assert sanitize_text("a" * 300) == "a" * 256
        assert sanitize_text("a" * 300, max_len=10) == "a" * 10


class TestCleanOptional:
    @pytest.mark.parametrize("value", [None, 42, 4.5, ["x"], {"name": "x"}, "", "   ", "\u200b"])
    def test_missing_values(self, value):
        assert clean_optional(value) is None

    def test_cleans_string(self):
        assert clean_optional("  Dana\n Reyes ") == "Dana Reyes"


class TestNormalizeWhitespace:
    def test_collapse_and_trim(self):
        assert normalize_whitespace("  a \n\n b\t c  ") == "a b c"

    def test_empty(self):
        assert normalize_whitespace("") == ""


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("short text", 300) == "short text"

    def test_exact_length_unchanged(self):
        assert truncate("x" * 300, 300) == "x" * 300

    def test_breaks_at_last_space(self):
        assert truncate("alpha beta gamma delta", 15) == "alpha beta" + ELLIPSIS

    def test_cuts_mid_word_when_space_too_early(self):
        # last space at index 5, not beyond 0.6 * 15
        assert truncate("alpha betagammadelta", 15) == "alpha betagamma" + ELLIPSIS

    def test_never_exceeds_max_plus_ellipsis(self):
        text = "word " * 200
        assert len(truncate(text, 300)) <= 301

    def test_custom_break_ratio(self):
        assert truncate("alpha betagammadelta", 15, break_ratio=0.2) == "alpha" + ELLIPSIS
