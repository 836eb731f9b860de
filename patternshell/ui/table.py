#!/usr/bin/env python3
# patternshell/ui/table.py
from __future__ import annotations

from typing import List, Optional, Sequence

from .ansi import strip_ansi


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Visual width of each column, ignoring ANSI sequences."""
    widths: List[int] = []
    for row in rows:
        for index, cell in enumerate(row):
            length = len(strip_ansi(cell))
            if index >= len(widths):
                widths.append(length)
            else:
                widths[index] = max(widths[index], length)
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
    border: bool = True,
) -> str:
    """Return an ASCII table string (ANSI-safe width calculation)."""
    body = [[str(cell) for cell in row] for row in rows]
    head = [str(h) for h in headers] if headers is not None else None
    widths = _column_widths(([head] if head else []) + body)
    pad = " " * padding

    def render(row: Sequence[str]) -> str:
        cells = [f"{pad}{cell}{' ' * (widths[i] - len(strip_ansi(cell)))}{pad}" for i, cell in enumerate(row)]
        return "|" + "|".join(cells) + "|"

    rule = "-" * (sum(widths) + padding * 2 * len(widths) + len(widths) + 1)
    lines: List[str] = [rule] if border else []
    if head:
        lines.append(render(head))
        lines.append(render(["-" * w for w in widths]))
    lines.extend(render(row) for row in body)
    if border:
        lines.append(rule)
    return "\n".join(lines)
