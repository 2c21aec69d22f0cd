"""Exceptions raised by benchtable."""


class BenchTableError(Exception):
    """Base class for all benchtable errors."""


class UnknownMetric(BenchTableError, ValueError):
    """Formatter key is neither "median" nor "memory"."""


class UnknownUnit(BenchTableError, ValueError):
    """Fixed time unit token is not recognized."""


class EmptyResults(BenchTableError, ValueError):
    """No revisions were supplied, so there are no row keys."""


class RatioColumnCountMismatch(BenchTableError, AssertionError):
    """Ratio computation collected a number of values other than two."""


class ResultsNotFound(BenchTableError, FileNotFoundError):
    """Results file for a revision does not exist."""


class RevisionError(BenchTableError):
    """A symbolic revision could not be resolved."""
