"""
Exception and warning types raised by the k-centroid engine.

Configuration and malformed-data errors abort construction. Dimension
mismatches only fail the single prediction call that triggered them.
"""

from typing import Optional


class KCentroidError(Exception):
    """Base class for all k-centroid errors."""


class InvalidConfigurationError(KCentroidError, ValueError):
    """Raised when a constructor argument violates an engine invariant."""


class MalformedInputError(KCentroidError, ValueError):
    """Raised when the training matrix contains NaN/inf or has a bad shape."""


class DimensionMismatchError(KCentroidError, ValueError):
    """Raised when a query vector does not match the training column count."""

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(f"dimension mismatch: got {actual}, expected {expected}")


class EmptyClusterError(KCentroidError, RuntimeError):
    """Raised under the 'error' empty-cluster policy."""

    def __init__(self, cluster: int, iteration: Optional[int] = None):
        self.cluster = cluster
        self.iteration = iteration
        where = "" if iteration is None else f" at iteration {iteration}"
        super().__init__(f"cluster {cluster} has no members{where}")


class KCentroidWarning(UserWarning):
    """Category for advisory warnings emitted by the engine."""
