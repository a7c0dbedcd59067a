"""Render report rows as aligned text columns."""

from __future__ import annotations

PADDING = 2


def format_columns(rows: list[list[str]], padding: int = PADDING) -> str:
    """Pad every column to its widest cell plus ``padding`` spaces.

    Trailing whitespace is trimmed from each line; the result ends with a
    newline unless there are no rows.
    """
    if not rows:
        return ""

    width = max(len(row) for row in rows)
    widths = [0] * width
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in rows:
        line = "".join(cell.ljust(widths[i] + padding) for i, cell in enumerate(row))
        lines.append(line.rstrip())
    return "\n".join(lines) + "\n"
