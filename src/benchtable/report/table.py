"""Combine per-revision benchmark results into a comparison table."""

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

import numpy as np

from benchtable.errors import EmptyResults, RatioColumnCountMismatch
from benchtable.report.formatters import TIME_TO_LOAD, CellFormatter, default_formatter, validate_metric
from benchtable.report.render_md import markdown_table
from benchtable.stats import MISSING, Stat, parse_stat, stat_value

logger = logging.getLogger(__name__)

HEADER_CUTOFF = 14

Formatter = Union[CellFormatter, Callable[[Any, str], str]]


def collect_row_keys(combined_results: Mapping[str, Mapping[str, Any]]) -> List[str]:
    """Union of benchmark names, in first-revision order, time_to_load last."""
    if not combined_results:
        raise EmptyResults("No revisions to build a table from")

    all_keys = []
    seen = set()
    for result in combined_results.values():
        for name in result:
            if name not in seen:
                seen.add(name)
                all_keys.append(name)

    if TIME_TO_LOAD in seen:
        all_keys.remove(TIME_TO_LOAD)
        all_keys.append(TIME_TO_LOAD)

    return all_keys


def truncate_header(label: str, cutoff: int = HEADER_CUTOFF) -> str:
    if len(label) <= cutoff:
        return label
    return label[:cutoff] + "..."


def _apply(formatter: Formatter, stat: Stat, row_name: str) -> str:
    if hasattr(formatter, "format"):
        return formatter.format(stat, row_name)
    return formatter(stat, row_name)


def format_ratio(stats: Sequence[Stat], key: str) -> str:
    """Ratio of the first stat to the second, with propagated uncertainty.

    Returns an empty string when either stat lacks `key` or the ratio is
    not finite.
    """
    if len(stats) != 2:
        raise RatioColumnCountMismatch(f"Expected 2 values for ratio, got {len(stats)}")

    values = [stat_value(s, key) for s in stats]
    if any(v is None for v in values):
        return ""

    vals = np.asarray(values, dtype=np.float64)
    ratio_err = np.nan

    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = vals[0] / vals[1]

        if key == "median" and all(s.has_spread for s in stats):
            errs = np.array([s.spread for s in stats], dtype=np.float64)
            ratio_err = np.abs(ratio) * np.sqrt(np.sum((errs / vals) ** 2))

    text = f"{ratio:.3g}" if np.isfinite(ratio) else ""
    if np.isfinite(ratio_err):
        text += f" ± {ratio_err:.2g}"
    return text


def build_table(
    combined_results: Mapping[str, Mapping[str, Any]],
    key: str = "median",
    add_ratio: bool = True,
    fixed_unit: Optional[str] = None,
    formatter: Optional[Formatter] = None,
) -> str:
    """Create a Markdown table comparing benchmark results across revisions.

    If exactly two revisions are given and `add_ratio` is set, an extra
    column holds the ratio of the first revision to the second.

    Args:
        combined_results: Ordered mapping revision -> benchmark name -> stat
        key: "median" for timings, "memory" for allocations and memory
        add_ratio: Whether to add the ratio column for two revisions
        fixed_unit: Fixed time unit ("ns", "μs", "us", "ms", "s", "h");
            time_to_load always uses an automatic unit
        formatter: Override for the cell formatter

    Returns:
        Markdown table as string
    """
    validate_metric(key)
    if formatter is None:
        formatter = default_formatter(key, time_unit=fixed_unit)

    all_keys = collect_row_keys(combined_results)
    revisions = list(combined_results.keys())
    parsed = [
        {name: parse_stat(stat) for name, stat in result.items()}
        for result in combined_results.values()
    ]

    headers = [truncate_header(str(head)) for head in ["", *revisions]]

    data_columns = []
    for result in parsed:
        data_columns.append([_apply(formatter, result.get(row, MISSING), row) for row in all_keys])

    if len(revisions) == 2 and add_ratio:
        col = []
        for benchmark_name in all_keys:
            if not all(benchmark_name in r for r in parsed):
                col.append("")
                continue
            col.append(format_ratio([r[benchmark_name] for r in parsed], key))
        data_columns.append(col)
        headers.append(f"{headers[1]} / {headers[2]}")

    logger.debug(
        f"Built table with {len(all_keys)} rows and {len(headers)} columns (key={key})"
    )

    rows = [[str(name), *cells] for name, *cells in zip(all_keys, *data_columns)]
    return markdown_table(rows, headers)


create_table = build_table
