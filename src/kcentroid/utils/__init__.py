"""Utility functions for the k-centroid engine."""

from .convergence import ConvergenceController
from .validation import (
    validate_data,
    validate_vector,
    is_singular,
    check_positive_int,
    check_positive_float,
    check_empty_cluster_policy
)
from .normalization import (
    standard_scale,
    min_max_scale,
    mean_center,
    l2_normalize,
    get_normalizer
)
from .parallel import (
    ParallelPlan,
    available_execution_units,
    resolve_parallelism,
    chunk_ranges
)

__all__ = [
    # Convergence
    'ConvergenceController',

    # Validation
    'validate_data',
    'validate_vector',
    'is_singular',
    'check_positive_int',
    'check_positive_float',
    'check_empty_cluster_policy',

    # Normalization
    'standard_scale',
    'min_max_scale',
    'mean_center',
    'l2_normalize',
    'get_normalizer',

    # Parallel execution
    'ParallelPlan',
    'available_execution_units',
    'resolve_parallelism',
    'chunk_ranges'
]
