# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for smartcapture.config: defaults and SMARTCAPTURE_* overrides."""

from __future__ import annotations

import dataclasses

import pytest

from smartcapture.config import (
    DEFAULT_CONFIG,
    ClassifierConfig,
    ContentConfig,
    HeuristicConfig,
    SmartCaptureConfig,
)


class TestDefaults:
    def test_classifier(self):
        assert ClassifierConfig() == ClassifierConfig(min_confidence=0.5, schema_confidence=0.95)

    def test_content(self):
        cfg = ContentConfig()
        assert (cfg.min_main_words, cfg.excerpt_length, cfg.max_keywords) == (80, 300, 10)
        assert (cfg.min_keyword_length, cfg.words_per_minute) == (4, 200)
        assert cfg.excerpt_break_ratio == 0.6

    def test_default_config_is_default(self):
        assert DEFAULT_CONFIG == SmartCaptureConfig()

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.classifier.min_confidence = 0.1  # type: ignore[misc]


class TestHeuristicConfidence:
    @pytest.mark.parametrize("score,expected", [(3, 0.65), (4, 0.7), (5, 0.75), (6, 0.8), (12, 0.8)])
    def test_confidence_for(self, score: int, expected: float):
        assert HeuristicConfig().confidence_for(score) == pytest.approx(expected)

    def test_monotonic(self):
        cfg = HeuristicConfig()
        values = [cfg.confidence_for(s) for s in range(20)]
        assert values == sorted(values)
        assert max(values) == cfg.max_confidence


class TestFromEnv:
    def test_empty_environment(self):
        assert SmartCaptureConfig.from_env({}) == SmartCaptureConfig()

    def test_overrides(self):
        env = {
            "SMARTCAPTURE_MIN_CONFIDENCE": "0.6",
            "SMARTCAPTURE_EXCERPT_LENGTH": "200",
            "SMARTCAPTURE_MAX_KEYWORDS": "5",
            "SMARTCAPTURE_WORDS_PER_MINUTE": "250",
            "SMARTCAPTURE_LOG_LEVEL": "debug",
        }
        cfg = SmartCaptureConfig.from_env(env)
        assert cfg.classifier.min_confidence == 0.6
        assert cfg.content.excerpt_length == 200
        assert cfg.content.max_keywords == 5
        assert cfg.content.words_per_minute == 250
        assert cfg.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "name,value",
        [
            ("SMARTCAPTURE_MIN_CONFIDENCE", "high"),
            ("SMARTCAPTURE_MIN_CONFIDENCE", "1.5"),
            ("SMARTCAPTURE_EXCERPT_LENGTH", "0"),
            ("SMARTCAPTURE_MAX_KEYWORDS", "-3"),
            ("SMARTCAPTURE_WORDS_PER_MINUTE", "fast"),
            ("SMARTCAPTURE_LOG_LEVEL", "   "),
        ],
    )
    def test_invalid_values_ignored(self, name: str, value: str):
        assert SmartCaptureConfig.from_env({name: value}) == SmartCaptureConfig()

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("SMARTCAPTURE_MAX_KEYWORDS", "7")
        assert SmartCaptureConfig.from_env().content.max_keywords == 7
