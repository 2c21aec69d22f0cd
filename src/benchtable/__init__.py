"""benchtable: compare benchmark results across revisions as Markdown tables."""

from benchtable.errors import (
    BenchTableError,
    EmptyResults,
    RatioColumnCountMismatch,
    ResultsNotFound,
    RevisionError,
    UnknownMetric,
    UnknownUnit,
)
from benchtable.report import build_table, create_table, default_formatter
from benchtable.stats import MISSING, Distribution, Missing, Scalar, parse_stat
from benchtable.units import UnitDomain, select_unit, select_unit_fixed

__version__ = "0.1.0"

__all__ = [
    "BenchTableError",
    "EmptyResults",
    "RatioColumnCountMismatch",
    "ResultsNotFound",
    "RevisionError",
    "UnknownMetric",
    "UnknownUnit",
    "build_table",
    "create_table",
    "default_formatter",
    "MISSING",
    "Distribution",
    "Missing",
    "Scalar",
    "parse_stat",
    "UnitDomain",
    "select_unit",
    "select_unit_fixed",
]
