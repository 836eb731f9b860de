#!/usr/bin/env python3
# patternshell/ui/ansi.py
from __future__ import annotations

"""ANSI styling helpers for shell output and log records."""

import os
import re
import sys
from typing import Optional

ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_ansi_supported_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def ansi_supported(stream=None) -> bool:
    """
    Return True if escape sequences should be emitted.

    Honors NO_COLOR; otherwise requires a TTY (and, on Windows, a terminal
    known to understand VT sequences).
    """
    global _ansi_supported_cache
    if stream is None and _ansi_supported_cache is not None:
        return _ansi_supported_cache

    target = stream if stream is not None else sys.stderr
    if os.environ.get("NO_COLOR"):
        supported = False
    elif not getattr(target, "isatty", lambda: False)():
        supported = False
    elif os.name == "nt":
        supported = bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
        )
    else:
        supported = True

    if stream is None:
        _ansi_supported_cache = supported
    return supported


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more styles from ANSI (e.g. 'red', 'bold').
    Unknown style names are ignored; always resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
