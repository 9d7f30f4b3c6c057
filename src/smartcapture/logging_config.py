# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for capture runs.

Library modules only call ``logging.getLogger(__name__)``; the process picks a
renderer once at startup via ``configure()`` (the CLI does this). Terminal use
gets ConsoleRenderer, log pipelines get JSON lines.

Leaf module, no smartcapture imports. Safe to call early in startup.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

_PACKAGE_LOGGER = "smartcapture"


def configure(
    *,
    json_output: bool = False,
    level: str = "INFO",
    component_levels: dict[str, str] | None = None,
) -> None:
    """Configure structlog with stdlib bridge.

    Args:
        json_output: True for JSON lines, False for human-readable console output.
        level: Root logger level (default INFO). Unknown names fall back to INFO.
        component_levels: optional per-module overrides, keyed by the module path
            below ``smartcapture`` (e.g. ``{"classifier": "DEBUG"}``).
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    for component, component_level in (component_levels or {}).items():
        name = f"{_PACKAGE_LOGGER}.{component}" if component else _PACKAGE_LOGGER
        logging.getLogger(name).setLevel(_resolve_level(component_level))


def _resolve_level(level: str) -> int:
    resolved = getattr(logging, str(level).upper(), None)
    return resolved if isinstance(resolved, int) else logging.INFO


@contextmanager
def capture_context(url: str, **extra: str) -> Iterator[None]:
    """Bind ``url`` (and any extra fields) to every log line of one capture run."""
    tokens = structlog.contextvars.bind_contextvars(capture_url=url, **extra)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
