"""Render a grid of strings as a fixed-width Markdown table."""

from typing import List, Sequence

MIN_COLUMN_WIDTH = 4


def column_widths(data: Sequence[Sequence[str]], header: Sequence[str]) -> List[int]:
    widths = [max(len(head), MIN_COLUMN_WIDTH) for head in header]
    for row in data:
        for i, val in enumerate(row):
            widths[i] = max(widths[i], len(str(val)))
    return widths


def _render_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    parts = [f" {cell} " + " " * (width - len(str(cell))) for cell, width in zip(cells, widths)]
    return "|" + "|".join(parts) + "|"


def markdown_table(data: Sequence[Sequence[str]], header: Sequence[str]) -> str:
    """Render a GitHub-style Markdown table.

    The first column is left-aligned, the rest are centered. Every column is
    padded to the width of its longest entry (at least 4).

    Args:
        data: Rows of cell strings, each with len(header) entries
        header: Column titles

    Returns:
        Markdown table as string
    """
    for row in data:
        if len(row) != len(header):
            raise ValueError(f"Row has {len(row)} cells, header has {len(header)}")

    widths = column_widths(data, header)

    separator = ["|:---" + "-" * (widths[0] - 2) + "|"]
    for width in widths[1:]:
        separator.append(":---" + "-" * (width - 3) + ":|")

    lines = [
        _render_row(header, widths),
        "".join(separator),
    ]
    lines.extend(_render_row(row, widths) for row in data)

    return "\n".join(lines)
