# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Command-line interface for Smart Capture.

Usage:
    smartcapture extract page.html --url https://example.com/post
    curl -s https://example.com | smartcapture extract - --url https://example.com
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from smartcapture import logging_config
from smartcapture.config import SmartCaptureConfig
from smartcapture.errors import DocumentError
from smartcapture.pipeline import extract_page
from smartcapture.serializer import to_json

logger = logging.getLogger(__name__)


def _read_input(path: str) -> str:
    """Read rendered HTML from ``path`` (``-`` for stdin)."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def cmd_extract(args: argparse.Namespace, config: SmartCaptureConfig) -> int:
    """Extract one page and print the result as JSON."""
    try:
        html = _read_input(args.path)
    except OSError as e:
        print(f"ERROR: cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    try:
        result = extract_page(html, args.url, selected_text=args.selected_text, config=config)
    except DocumentError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(to_json(result, indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Smart Capture: typed metadata extraction from rendered web pages",
        prog="smartcapture",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        metavar="LEVEL",
        help="Log level (default: $SMARTCAPTURE_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    _extract_epilog = """\
examples:
  %(prog)s page.html --url https://example.com/post
  %(prog)s - --url https://example.com < page.html
  %(prog)s page.html --url https://example.com --selected-text "quoted passage"
"""
    p_extract = subparsers.add_parser(
        "extract",
        help="Extract basics, summary and classification from a saved HTML page",
        epilog=_extract_epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_extract.add_argument("path", type=str, metavar="PATH", help="Rendered HTML file, or - for stdin")
    p_extract.add_argument("--url", type=str, required=True, metavar="URL", help="URL the page was captured from")
    p_extract.add_argument("--selected-text", type=str, default=None, metavar="TEXT", help="User text selection")
    p_extract.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = SmartCaptureConfig.from_env()
    logging_config.configure(json_output=args.json_logs, level=args.log_level or config.log_level)

    commands = {"extract": cmd_extract}
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
