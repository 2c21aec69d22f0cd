"""Benchmark comparison tables."""

from .formatters import CellFormatter, MemoryFormatter, TimeFormatter, default_formatter, format_memory, format_time
from .render_md import markdown_table
from .table import build_table, collect_row_keys, create_table, format_ratio

__all__ = [
    "CellFormatter",
    "MemoryFormatter",
    "TimeFormatter",
    "default_formatter",
    "format_memory",
    "format_time",
    "markdown_table",
    "build_table",
    "collect_row_keys",
    "create_table",
    "format_ratio",
]
