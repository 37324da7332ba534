"""Base classes and interfaces for the k-centroid engine."""

from .interfaces import (
    DistanceMetric,
    CentroidStrategy,
    InitializationStrategy
)

from .data_structures import (
    Partition,
    IterationState,
    IterationSummary
)

from .diagnostics import Diagnostics

__all__ = [
    # Interfaces
    'DistanceMetric',
    'CentroidStrategy',
    'InitializationStrategy',

    # Data structures
    'Partition',
    'IterationState',
    'IterationSummary',

    # Diagnostics
    'Diagnostics'
]
