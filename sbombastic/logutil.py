"""Parsing of log level names given on the command line."""

from __future__ import annotations

import logging
import re

_NAMED_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_OFFSET = re.compile(r"[+-][0-9]+")


def _parse(text: str) -> int:
    split = next((i for i, ch in enumerate(text) if ch in "+-"), len(text))
    name, offset_text = text[:split], text[split:]
    base = _NAMED_LEVELS.get(name.upper())
    if base is None:
        raise ValueError("unknown name")
    if not offset_text:
        return base
    if not _OFFSET.fullmatch(offset_text):
        raise ValueError(f"bad offset {offset_text!r}")
    return base + int(offset_text)


def parse_log_level(text: str) -> int:
    """Parse a level such as "info", "WARN" or "DEBUG+2" into a logging level.

    Names are case-insensitive; an optional signed offset is added to the
    named level.
    """
    try:
        return _parse(text)
    except ValueError as err:
        raise ValueError(f"unable to parse log level: {text}, error: {err}") from err