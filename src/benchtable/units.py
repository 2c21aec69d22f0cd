"""Unit selection for time, memory and allocation counts."""

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Iterable, Tuple, Union

from benchtable.errors import UnknownUnit


class UnitDomain(Enum):
    """Kind of quantity a value measures."""

    TIME = "time"
    MEMORY = "memory"
    ALLOCS = "allocs"


@dataclass(frozen=True)
class UnitStep:
    """One entry of a unit table: values below `upper` use this unit."""

    label: str
    scale: float
    upper: float


# Ordered smallest to largest; the last entry catches everything above.
TIME_UNITS = (
    UnitStep("ns", 1e9, 1e-6),
    UnitStep("μs", 1e6, 1e-3),
    UnitStep("ms", 1e3, 1.0),
    UnitStep("s", 1.0, 3600.0),
    UnitStep("h", 1 / 3600, float("inf")),
)

MEMORY_UNITS = (
    UnitStep("B", 1.0, 1024.0),
    UnitStep("KB", 1 / 1024, 1024.0**2),
    UnitStep("MB", 1 / 1024**2, 1024.0**3),
    UnitStep("GB", 1 / 1024**3, float("inf")),
)

ALLOCS_UNITS = (
    UnitStep("", 1.0, 1e3),
    UnitStep("K", 1e-3, 1e6),
    UnitStep("M", 1e-6, float("inf")),
)

_TABLES = {
    UnitDomain.TIME: TIME_UNITS,
    UnitDomain.MEMORY: MEMORY_UNITS,
    UnitDomain.ALLOCS: ALLOCS_UNITS,
}

TIME_UNIT_ALIASES = {"us": "μs"}

VALID_TIME_UNITS = ("ns", "μs", "us", "ms", "s", "h")


def _as_values(values: Union[Real, Iterable[Real]]) -> list:
    if isinstance(values, Real):
        return [values]
    return list(values)


def select_unit(values: Union[Real, Iterable[Real]], domain: UnitDomain) -> Tuple[float, str]:
    """Pick a human-friendly unit for a set of magnitudes.

    Args:
        values: One value or a sequence of non-negative values
        domain: Which unit table to use

    Returns:
        Tuple of (scale factor, unit label); multiply a raw value by the
        scale factor to express it in the returned unit.
    """
    values = _as_values(values)
    max_value = max(values) if values else 0.0

    table = _TABLES[domain]
    for step in table:
        if max_value < step.upper:
            return step.scale, step.label
    # NaN compares false against every bound
    last = table[-1]
    return last.scale, last.label


def normalize_time_unit(unit_name: str) -> str:
    """Return the canonical label for a fixed time unit token."""
    canonical = TIME_UNIT_ALIASES.get(unit_name, unit_name)
    if canonical not in VALID_TIME_UNITS:
        raise UnknownUnit(
            f"Unknown time unit {unit_name!r}, expected one of {', '.join(VALID_TIME_UNITS)}"
        )
    return canonical


def select_unit_fixed(unit_name: str) -> Tuple[float, str]:
    """Scale factor and label for a caller-specified time unit."""
    label = normalize_time_unit(unit_name)
    for step in TIME_UNITS:
        if step.label == label:
            return step.scale, step.label
    raise UnknownUnit(f"Unknown time unit {unit_name!r}")


def get_reasonable_time_unit(values):
    return select_unit(values, UnitDomain.TIME)


def get_reasonable_memory_unit(values):
    return select_unit(values, UnitDomain.MEMORY)


def get_reasonable_allocs_unit(values):
    return select_unit(values, UnitDomain.ALLOCS)
