"""Cell formatters for benchmark tables."""

from typing import Any, Iterable, Optional

from benchtable.errors import UnknownMetric
from benchtable.stats import Distribution, Missing, Scalar, parse_stat
from benchtable.units import (
    get_reasonable_allocs_unit,
    get_reasonable_memory_unit,
    get_reasonable_time_unit,
    normalize_time_unit,
    select_unit_fixed,
)

TIME_TO_LOAD = "time_to_load"

METRIC_KEYS = ("median", "memory")


class CellFormatter:
    """Turns one (stat, row name) pair into a table cell."""

    def format(self, stat, row_name: str = "") -> str:
        raise NotImplementedError

    def __call__(self, stat: Any, row_name: str = "") -> str:
        return self.format(parse_stat(stat), row_name)


class TimeFormatter(CellFormatter):
    """Median ± interquartile range, in an automatic or fixed time unit.

    Rows named in `auto_unit_rows` always get an automatic unit, even when
    `time_unit` is set.
    """

    def __init__(self, time_unit: Optional[str] = None, auto_unit_rows: Iterable[str] = ()):
        self.time_unit = normalize_time_unit(time_unit) if time_unit else None
        self.auto_unit_rows = frozenset(auto_unit_rows)

    def _fixed_unit(self, row_name: str):
        if self.time_unit is None or row_name in self.auto_unit_rows:
            return None
        return select_unit_fixed(self.time_unit)

    def format(self, stat, row_name: str = "") -> str:
        if isinstance(stat, Missing):
            return ""

        fixed = self._fixed_unit(row_name)

        if isinstance(stat, Scalar):
            scale, unit = fixed or get_reasonable_memory_unit(stat.value)
            return f"{stat.value * scale:.3g} {unit}"

        if isinstance(stat, Distribution):
            if stat.median is None:
                return ""
            scale, unit = fixed or get_reasonable_time_unit(stat.median)
            if stat.has_spread:
                return f"{stat.median * scale:.3g} ± {stat.spread * scale:.2g} {unit}"
            return f"{stat.median * scale:.3g} {unit}"

        raise TypeError(f"Unsupported stat type: {type(stat).__name__}")


class MemoryFormatter(CellFormatter):
    """Allocation count and allocated memory."""

    def format(self, stat, row_name: str = "") -> str:
        if not isinstance(stat, Distribution):
            return ""
        if stat.allocs is None or stat.memory is None:
            return ""

        allocs_scale, allocs_unit = get_reasonable_allocs_unit(stat.allocs)
        memory_scale, memory_unit = get_reasonable_memory_unit(stat.memory)
        return (
            f"{stat.allocs * allocs_scale:.3g} {allocs_unit} allocs: "
            f"{stat.memory * memory_scale:.3g} {memory_unit}"
        )


def validate_metric(key: str) -> str:
    if key not in METRIC_KEYS:
        raise UnknownMetric(f"Unknown metric {key!r}, expected one of {', '.join(METRIC_KEYS)}")
    return key


def default_formatter(key: str = "median", time_unit: Optional[str] = None) -> CellFormatter:
    """Formatter for a metric key.

    Args:
        key: "median" for timings, "memory" for allocations and memory
        time_unit: Fixed time unit for every row except time_to_load

    Returns:
        CellFormatter instance
    """
    validate_metric(key)
    if key == "memory":
        return MemoryFormatter()
    return TimeFormatter(time_unit=time_unit, auto_unit_rows=(TIME_TO_LOAD,))


# Plain-function aliases
def format_time(stat, row_name: str = "", time_unit: Optional[str] = None) -> str:
    return TimeFormatter(time_unit=time_unit)(stat, row_name)


def format_memory(stat, row_name: str = "") -> str:
    return MemoryFormatter()(stat, row_name)
