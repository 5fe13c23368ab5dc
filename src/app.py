"""Command-line entry point: render one message document to HTML."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from logging.handlers import RotatingFileHandler
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rich.console import Console
from rich.syntax import Syntax

import settings
from adapters.json_mapper import build_message, build_render_context
from adapters.renderers import build_default_renderers
from core.message_html import message_as_html

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        # stdout carries the rendered HTML, so console logs go to stderr.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/chatview.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _load_timezone(name: Optional[str]) -> Optional[ZoneInfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unsupported timezone: {name}") from e


def _read_document(path: str) -> dict[str, Any]:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def render_document(document: dict[str, Any], is_brief: Optional[bool] = None) -> str:
    """Render a ``{"context": ..., "message": ...}`` document."""

    if not isinstance(document, dict):
        raise ValueError("Input document must be an object")
    if "message" not in document:
        raise ValueError("Missing required field: message")
    raw_context = document.get("context", {})
    if not isinstance(raw_context, dict):
        raise ValueError("Field context must be an object")
    raw_context = dict(raw_context)
    if "twenty_four_hour_time" not in raw_context and "twentyFourHourTime" not in raw_context:
        raw_context["twenty_four_hour_time"] = settings.TWENTY_FOUR_HOUR_TIME

    context = build_render_context(raw_context)
    message = build_message(document["message"])
    if is_brief is not None:
        message = replace(message, is_brief=is_brief)

    renderers = build_default_renderers(_load_timezone(settings.TIMEZONE))
    return message_as_html(context, message, renderers)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render one chat message as an HTML fragment.")
    parser.add_argument("input", help='JSON file with "context" and "message" ("-" for stdin)')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--brief", dest="is_brief", action="store_const", const=True, help="Force brief mode")
    mode.add_argument("--full", dest="is_brief", action="store_const", const=False, help="Force full mode")
    parser.add_argument("--pretty", action="store_true", help="Syntax-highlight the output")
    args = parser.parse_args(argv)

    _configure_logging()

    try:
        document = _read_document(args.input)
        rendered = render_document(document, is_brief=args.is_brief)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        LOGGER.error("Render failed for %s: %s", args.input, e)
        parser.error(str(e))

    if args.pretty:
        Console().print(Syntax(rendered, "html", word_wrap=True))
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
