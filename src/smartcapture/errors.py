# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""SmartCapture exception hierarchy.

All SmartCapture-specific errors inherit from SmartCaptureError, allowing
callers to catch the base class for any SmartCapture failure or specific
subclasses for targeted handling.

None of these escape ``PageClassifier.classify()``: classification degrades to
``unknown`` or empty fields instead.
"""

from __future__ import annotations


class SmartCaptureError(Exception):
    """Base exception for all SmartCapture errors."""


class DocumentError(SmartCaptureError):
    """Input could not be turned into a document (empty or unparseable HTML)."""


class ExtractorError(SmartCaptureError):
    """Type extractor could not produce a usable field record."""

    def __init__(self, message: str, *, extractor: str = "") -> None:
        super().__init__(message)
        self.extractor = extractor


class CaptureNotFoundError(SmartCaptureError):
    """Capture id is not known to the storage backend."""

    def __init__(self, message: str, *, capture_id: str = "") -> None:
        super().__init__(message)
        self.capture_id = capture_id
