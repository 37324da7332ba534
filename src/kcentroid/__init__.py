"""
kcentroid: generalized iterative centroid-based clustering.

One engine runs the assign -> update -> evaluate loop; strategies decide how
a cluster's representative is computed and what its cost is:
- k-means (MeanStrategy)
- k-medoids (MedoidStrategy)
- k-medians (MedianStrategy)

Example usage:
    >>> import torch
    >>> from kcentroid import create_kmeans
    >>>
    >>> X = torch.randn(1000, 10)
    >>> model = create_kmeans(X, n_clusters=5, random_state=0).fit()
    >>> model.labels_[:10]
    >>> model.predict(torch.zeros(10))
"""

__version__ = '0.1.0'

from .algorithms import (
    KCentroidClusterer,
    ClusteringBuilder,
    create_kmeans,
    create_kmedoids,
    create_kmedians
)

from .base import (
    DistanceMetric,
    CentroidStrategy,
    InitializationStrategy,
    Partition,
    IterationState,
    IterationSummary,
    Diagnostics
)

from .distances import (
    EuclideanDistance,
    WeightedEuclideanDistance,
    ManhattanDistance,
    ChebyshevDistance,
    MinkowskiDistance,
    CosineDistance,
    CallableDistance
)

from .updates import MeanStrategy, MedoidStrategy, MedianStrategy
from .initialization import ShuffleInit, FixedIndicesInit, shuffle_indices

from .exceptions import (
    KCentroidError,
    InvalidConfigurationError,
    MalformedInputError,
    DimensionMismatchError,
    EmptyClusterError,
    KCentroidWarning
)

__all__ = [
    # Engine
    'KCentroidClusterer',
    'ClusteringBuilder',
    'create_kmeans',
    'create_kmedoids',
    'create_kmedians',

    # Interfaces and data structures
    'DistanceMetric',
    'CentroidStrategy',
    'InitializationStrategy',
    'Partition',
    'IterationState',
    'IterationSummary',
    'Diagnostics',

    # Metrics
    'EuclideanDistance',
    'WeightedEuclideanDistance',
    'ManhattanDistance',
    'ChebyshevDistance',
    'MinkowskiDistance',
    'CosineDistance',
    'CallableDistance',

    # Strategies
    'MeanStrategy',
    'MedoidStrategy',
    'MedianStrategy',

    # Initialization
    'ShuffleInit',
    'FixedIndicesInit',
    'shuffle_indices',

    # Errors
    'KCentroidError',
    'InvalidConfigurationError',
    'MalformedInputError',
    'DimensionMismatchError',
    'EmptyClusterError',
    'KCentroidWarning',

    # Version
    '__version__'
]
