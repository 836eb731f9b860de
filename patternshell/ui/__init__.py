#!/usr/bin/env python3
# patternshell/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, ansi_supported, colorize, strip_ansi
from .console import PRINT_MUTEX, print_line
from .table import format_table
from .logging import ColorizingStreamHandler, PlainFormatter, init_logger

__all__ = [
    "ANSI",
    "ansi_supported",
    "colorize",
    "strip_ansi",
    "PRINT_MUTEX",
    "print_line",
    "format_table",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "init_logger",
]
