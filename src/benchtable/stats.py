"""Per-benchmark measurement records."""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Missing:
    """Benchmark absent from a revision, or produced no value."""


MISSING = Missing()


@dataclass(frozen=True)
class Scalar:
    """A bare number, used for memory-only or simple values."""

    value: float


@dataclass(frozen=True)
class Distribution:
    """Summary of a timing distribution with optional memory counters."""

    median: Optional[float] = None
    q25: Optional[float] = None
    q75: Optional[float] = None
    allocs: Optional[float] = None
    memory: Optional[float] = None

    @property
    def has_spread(self) -> bool:
        return self.q25 is not None and self.q75 is not None

    @property
    def spread(self) -> Optional[float]:
        """Interquartile range, never negative."""
        if not self.has_spread:
            return None
        return max(0.0, self.q75 - self.q25)

    def get(self, key: str) -> Optional[float]:
        """Look up a field by its results-file key ("median", "25", "memory", ...)."""
        attr = _FIELD_KEYS.get(key)
        if attr is None:
            return None
        return getattr(self, attr)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    @classmethod
    def from_dict(cls, data: dict) -> "Distribution":
        """Create a Distribution from a results-file entry.

        Keys other than median, quartiles, allocs and memory are ignored.
        """
        return cls(**{attr: data.get(key) for key, attr in _FIELD_KEYS.items()})


_FIELD_KEYS = {
    "median": "median",
    "25": "q25",
    "75": "q75",
    "allocs": "allocs",
    "memory": "memory",
}

Stat = Union[Distribution, Scalar, Missing]


def parse_stat(raw: Any) -> Stat:
    """Convert a raw results value (dict, number or None) to a Stat."""
    if isinstance(raw, (Distribution, Scalar, Missing)):
        return raw
    if raw is None:
        return MISSING
    if isinstance(raw, dict):
        return Distribution.from_dict(raw)
    if isinstance(raw, Real) and not isinstance(raw, bool):
        return Scalar(raw)
    raise TypeError(f"Cannot interpret {type(raw).__name__} as a benchmark stat")


def stat_value(stat: Stat, key: str) -> Optional[float]:
    """Value of `key` in a stat, or None when the stat does not carry it."""
    if isinstance(stat, Distribution):
        return stat.get(key)
    return None
