"""
Builder pattern for constructing k-centroid engines.

Provides a fluent interface for assembling an engine from a strategy, a
metric and the loop configuration, plus shortcuts for the common variants.
"""

from typing import Optional, Union, Callable, Sequence, Any
import torch
from torch import Tensor

from .kcentroid import KCentroidClusterer
from ..base.interfaces import DistanceMetric, CentroidStrategy, InitializationStrategy
from ..distances import EuclideanDistance, ManhattanDistance
from ..initialization import ShuffleInit, FixedIndicesInit
from ..initialization.shuffle import Seed
from ..updates import MeanStrategy, MedoidStrategy, MedianStrategy
from ..utils.normalization import get_normalizer
from ..config import (
    DEFAULT_MAX_ITER, DEFAULT_MIN_CHANGE, DEFAULT_EMPTY_CLUSTER, DEFAULT_DTYPE
)


class ClusteringBuilder:
    """Fluent builder for k-centroid engines.

    Examples
    --------
    >>> model = (ClusteringBuilder()
    ...     .with_medoid_strategy()
    ...     .with_metric(ManhattanDistance())
    ...     .with_max_iter(50)
    ...     .with_random_state(7)
    ...     .build(X, n_clusters=3))
    >>> model.fit().labels_
    """

    def __init__(self):
        """Initialize builder with defaults."""
        self._strategy: CentroidStrategy = MeanStrategy()
        self._metric: Union[DistanceMetric, Callable] = EuclideanDistance()
        self._init: Optional[Union[InitializationStrategy, Sequence[int]]] = None

        # Loop parameters
        self._max_iter = DEFAULT_MAX_ITER
        self._min_change = DEFAULT_MIN_CHANGE
        self._random_state: Seed = None
        self._normalizer: Optional[Callable[[Tensor], Tensor]] = None
        self._empty_cluster = DEFAULT_EMPTY_CLUSTER
        self._parallel = False
        self._n_jobs: Optional[int] = None
        self._min_execution_units: Optional[int] = None
        self._verbose = 0
        self._dtype = DEFAULT_DTYPE

    def with_strategy(self, strategy: CentroidStrategy) -> 'ClusteringBuilder':
        """Set the cost/update strategy."""
        self._strategy = strategy
        return self

    def with_mean_strategy(self) -> 'ClusteringBuilder':
        """Use componentwise means (k-means)."""
        return self.with_strategy(MeanStrategy())

    def with_medoid_strategy(self) -> 'ClusteringBuilder':
        """Use medoids (k-medoids)."""
        return self.with_strategy(MedoidStrategy())

    def with_median_strategy(self) -> 'ClusteringBuilder':
        """Use componentwise medians (k-medians)."""
        return self.with_strategy(MedianStrategy())

    def with_metric(self, metric: Union[DistanceMetric, Callable]) -> 'ClusteringBuilder':
        """Set the distance metric."""
        self._metric = metric
        return self

    def with_initialization(self, init: Union[InitializationStrategy, Sequence[int]]) -> 'ClusteringBuilder':
        """Set the initialization strategy or explicit initial indices."""
        self._init = init
        return self

    def with_shuffle_init(self, seed: Seed = None) -> 'ClusteringBuilder':
        """Use seeded shuffle initialization."""
        return self.with_initialization(ShuffleInit(seed))

    def with_fixed_init(self, indices: Sequence[int]) -> 'ClusteringBuilder':
        """Start from the given record indices."""
        return self.with_initialization(FixedIndicesInit(indices))

    def with_max_iter(self, max_iter: int) -> 'ClusteringBuilder':
        """Set maximum iterations."""
        self._max_iter = max_iter
        return self

    def with_min_change(self, min_change: float) -> 'ClusteringBuilder':
        """Set the absolute cost-change threshold."""
        self._min_change = min_change
        return self

    def with_random_state(self, random_state: Seed) -> 'ClusteringBuilder':
        """Set random seed."""
        self._random_state = random_state
        return self

    def with_normalizer(self, normalizer: Union[str, Callable, None]) -> 'ClusteringBuilder':
        """Set the normalizer by callable or name ('standard', 'minmax', 'center', 'l2')."""
        self._normalizer = get_normalizer(normalizer)
        return self

    def with_empty_cluster(self, policy: str) -> 'ClusteringBuilder':
        """Set the empty-cluster policy."""
        self._empty_cluster = policy
        return self

    def with_parallel(self, parallel: bool = True, n_jobs: Optional[int] = None,
                      min_execution_units: Optional[int] = None) -> 'ClusteringBuilder':
        """Request data-parallel fitting."""
        self._parallel = parallel
        self._n_jobs = n_jobs
        self._min_execution_units = min_execution_units
        return self

    def with_verbose(self, verbose: int) -> 'ClusteringBuilder':
        """Set verbosity level."""
        self._verbose = verbose
        return self

    def with_dtype(self, dtype: torch.dtype) -> 'ClusteringBuilder':
        """Set the storage dtype of the training matrix."""
        self._dtype = dtype
        return self

    def build(self, X: Any, n_clusters: int) -> KCentroidClusterer:
        """Build the engine.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training data
        n_clusters : int
            Number of clusters

        Returns
        -------
        model : KCentroidClusterer
            Validated, unfitted engine
        """
        return KCentroidClusterer(
            X,
            n_clusters=n_clusters,
            strategy=self._strategy,
            metric=self._metric,
            max_iter=self._max_iter,
            min_change=self._min_change,
            init=self._init,
            random_state=self._random_state,
            normalizer=self._normalizer,
            empty_cluster=self._empty_cluster,
            parallel=self._parallel,
            n_jobs=self._n_jobs,
            min_execution_units=self._min_execution_units,
            verbose=self._verbose,
            dtype=self._dtype
        )


def _apply_kwargs(builder: ClusteringBuilder, kwargs: dict) -> ClusteringBuilder:
    for key, value in kwargs.items():
        method = getattr(builder, f'with_{key}', None)
        if method is None:
            raise TypeError(f"Unknown option: {key}")
        method(value)
    return builder


def create_kmeans(X: Any, n_clusters: int, **kwargs) -> KCentroidClusterer:
    """Create a k-means engine (mean strategy, Euclidean metric).

    Extra keyword arguments map to ``with_<name>`` builder methods.
    """
    builder = ClusteringBuilder().with_mean_strategy().with_metric(EuclideanDistance())
    return _apply_kwargs(builder, kwargs).build(X, n_clusters)


def create_kmedoids(X: Any, n_clusters: int, **kwargs) -> KCentroidClusterer:
    """Create a k-medoids engine (medoid strategy, Euclidean metric)."""
    builder = ClusteringBuilder().with_medoid_strategy().with_metric(EuclideanDistance())
    return _apply_kwargs(builder, kwargs).build(X, n_clusters)


def create_kmedians(X: Any, n_clusters: int, **kwargs) -> KCentroidClusterer:
    """Create a k-medians engine (median strategy, Manhattan metric)."""
    builder = ClusteringBuilder().with_median_strategy().with_metric(ManhattanDistance())
    return _apply_kwargs(builder, kwargs).build(X, n_clusters)
