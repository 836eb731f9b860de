#!/usr/bin/env python3
# patternshell/ui/console.py
from __future__ import annotations

import sys
import threading

# Shared by everything that writes to the terminal (shell output and log handlers).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()

