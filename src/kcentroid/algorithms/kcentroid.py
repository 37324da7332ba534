"""
The k-centroid clustering engine.

A single concrete implementation of the alternating optimization loop
(assign -> update -> evaluate) shared by k-means, k-medoids and k-medians.
Everything variant-specific lives in the CentroidStrategy passed in.
"""

from typing import Optional, Dict, Any, List, Callable, Union, Sequence
from concurrent.futures import ThreadPoolExecutor
import time
import torch
from torch import Tensor
import numpy as np

from ..base.interfaces import DistanceMetric, CentroidStrategy, InitializationStrategy
from ..base.data_structures import Partition, IterationSummary
from ..base.diagnostics import Diagnostics
from ..assignments.hard import HardAssignment
from ..distances.euclidean import EuclideanDistance
from ..distances.custom import CallableDistance
from ..initialization.shuffle import ShuffleInit, Seed
from ..initialization.fixed import FixedIndicesInit
from ..updates.mean import MeanStrategy
from ..utils.convergence import ConvergenceController
from ..utils.parallel import resolve_parallelism
from ..utils.validation import (
    validate_data, validate_vector, is_singular,
    check_positive_int, check_positive_float, check_empty_cluster_policy
)
from ..config import (
    DEFAULT_MAX_ITER, DEFAULT_MIN_CHANGE, DEFAULT_EMPTY_CLUSTER,
    DEFAULT_DTYPE, MIN_EXECUTION_UNITS
)
from ..exceptions import EmptyClusterError, MalformedInputError


class KCentroidClusterer:
    """Iterative centroid-based clustering with a pluggable strategy.

    The training matrix is validated, copied and (optionally) normalized at
    construction. All configuration errors surface there; once constructed,
    ``fit`` always returns normally unless the 'error' empty-cluster policy
    is selected.

    Parameters
    ----------
    X : Tensor, ndarray or nested list of shape (n_samples, n_features)
        Training data. Must be finite.
    n_clusters : int
        Number of clusters, 1 <= n_clusters <= n_samples
    strategy : CentroidStrategy, default=MeanStrategy()
        Cost and representative-update rules
    metric : DistanceMetric or callable, default=EuclideanDistance()
        Dissimilarity used for assignment and prediction. Plain callables
        ``f(u, v) -> float`` are wrapped in CallableDistance.
    max_iter : int, default=100
        Iteration budget
    min_change : float, default=0.005
        Convergence threshold on the absolute change in total cost
    init : InitializationStrategy or sequence of int, optional
        Initial representatives. Defaults to a seeded shuffle; a sequence
        of record indices is used as-is.
    random_state : int or torch.Generator, optional
        Seed for the default initialization
    normalizer : callable, optional
        Pure ``Tensor -> Tensor`` transform applied once to the training
        matrix. Leaving it unset is allowed but discouraged.
    empty_cluster : {'freeze', 'farthest', 'error'}, default='freeze'
        What to do with a cluster that receives no members
    parallel : bool, default=False
        Request data-parallel execution
    n_jobs : int, optional
        Worker count for parallel mode; None uses every available core
    min_execution_units : int, optional
        Cores required before parallel mode is enabled
    verbose : int, default=0
        Verbosity level (0=silent, 1=progress, 2=detailed)
    dtype : torch.dtype, default=torch.float64
        Storage dtype of the training matrix

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Final representatives (a copy)
    labels_ : Tensor of shape (n_samples,)
        Cluster of every training record (a copy)
    partition_ : Partition
        Final grouping of record indices by cluster
    inertia_ : float
        Total cost of the last pass
    converged_ : bool
        Whether the loop stopped on ``min_change`` rather than ``max_iter``
    n_iter_ : int
        Iteration counter at termination
    init_indices_ : Tensor of shape (n_clusters,)
        Record indices used as initial representatives
    history_ : list of IterationSummary
        Per-iteration cost and delta
    diagnostics_ : Diagnostics
        Warnings and notices of the last fit (or of construction before fit)
    """

    def __init__(self,
                 X: Union[Tensor, np.ndarray, list],
                 n_clusters: int,
                 strategy: Optional[CentroidStrategy] = None,
                 metric: Optional[Union[DistanceMetric, Callable]] = None,
                 max_iter: int = DEFAULT_MAX_ITER,
                 min_change: float = DEFAULT_MIN_CHANGE,
                 init: Optional[Union[InitializationStrategy, Sequence[int], Tensor]] = None,
                 random_state: Seed = None,
                 normalizer: Optional[Callable[[Tensor], Tensor]] = None,
                 empty_cluster: str = DEFAULT_EMPTY_CLUSTER,
                 parallel: bool = False,
                 n_jobs: Optional[int] = None,
                 min_execution_units: Optional[int] = None,
                 verbose: int = 0,
                 dtype: torch.dtype = DEFAULT_DTYPE):
        self.n_clusters = check_positive_int(n_clusters, 'n_clusters')
        self.max_iter = check_positive_int(max_iter, 'max_iter')
        self.min_change = check_positive_float(min_change, 'min_change')
        self.empty_cluster = check_empty_cluster_policy(empty_cluster)
        self.verbose = verbose
        self.random_state = random_state
        self.dtype = dtype

        self.strategy = strategy if strategy is not None else MeanStrategy()
        if not isinstance(self.strategy, CentroidStrategy):
            raise TypeError(f"strategy must be a CentroidStrategy, got {type(self.strategy)}")

        if metric is None:
            metric = EuclideanDistance()
        elif not isinstance(metric, DistanceMetric):
            metric = CallableDistance(metric)
        self.metric = metric

        self._diagnostics = Diagnostics(verbose, tag=self.strategy.name)

        # Determine whether we should parallelize
        if n_jobs is not None:
            n_jobs = check_positive_int(n_jobs, 'n_jobs')
        if min_execution_units is None:
            min_execution_units = MIN_EXECUTION_UNITS
        self.min_execution_units = check_positive_int(min_execution_units, 'min_execution_units')
        self.n_jobs = n_jobs
        self.parallel_requested = bool(parallel)
        self._plan = resolve_parallelism(self.parallel_requested, self.min_execution_units, n_jobs)
        if self._plan.notice:
            self._diagnostics.info(self._plan.notice)

        if self.metric.expensive:
            self._diagnostics.warn(
                f"running {self.strategy.name} with {self.metric!r} can be an expensive option")

        # Handle data
        self.normalizer = normalizer
        self._data = self._init_data(X)
        self.n_records, self.n_features = self._data.shape

        # Initialization and metric must agree with the data
        if init is None:
            init = ShuffleInit(random_state)
        elif not isinstance(init, InitializationStrategy):
            init = FixedIndicesInit(init)
        init.validate(self.n_records, self.n_clusters)
        self.initialization_strategy = init
        self.metric.validate(self.n_features)

        self.assignment_strategy = HardAssignment(self.metric)

        # Fitted state
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[IterationSummary] = []
        self.diagnostics_ = self._diagnostics
        self._representatives: Optional[Tensor] = None
        self._partition: Optional[Partition] = None
        self._init_indices: Optional[Tensor] = None
        self._cost: Optional[float] = None

    def _init_data(self, X) -> Tensor:
        """Copy, check and optionally normalize the training matrix."""
        data = validate_data(X, dtype=self.dtype)

        if self.normalizer is None:
            self._diagnostics.warn("feature normalization option is set to false; this is discouraged")
        else:
            data = self.normalizer(data)
            if not isinstance(data, Tensor) or data.dim() != 2:
                raise MalformedInputError("Normalizer must return a 2D tensor")
            if not torch.isfinite(data).all():
                raise MalformedInputError("Normalized data contains NaN or infinite values")
            data = data.to(dtype=self.dtype).clone()

        if is_singular(data):
            self._diagnostics.warn(
                f"all elements in input matrix are equal ({data[0, 0].item()})")

        return data

    @property
    def parallel(self) -> bool:
        """Whether fitting actually runs in parallel."""
        return self._plan.parallel

    def fit(self, diagnostics: Optional[Diagnostics] = None) -> 'KCentroidClusterer':
        """Run the clustering loop on the training matrix.

        Args:
            diagnostics: Optional collector owned by this fit; a fresh one is
                created otherwise. Construction-time messages are copied in.

        Returns:
            Self
        """
        if diagnostics is None:
            diagnostics = Diagnostics(self.verbose, tag=self.strategy.name)
        diagnostics.extend(self._diagnostics)

        X = self._data
        plan = self._plan

        if self.verbose:
            mode = f"parallel ({plan.n_workers} workers)" if plan.parallel else "serial"
            print(f"Initializing {self.n_clusters} clusters ({mode})...")

        start_time = time.time()
        init_indices, representatives = self.initialization_strategy.initialize(X, self.n_clusters)

        controller = ConvergenceController(self.max_iter, self.min_change)
        history: List[IterationSummary] = []
        executor = ThreadPoolExecutor(max_workers=plan.n_workers) if plan.parallel else None
        n_chunks = plan.n_workers if plan.parallel else 1

        try:
            while True:
                iter_start_time = time.time()
                iteration = controller.state.iteration

                # Assignment step
                partition, aux_info = self.assignment_strategy.partition(
                    X, representatives, executor, n_chunks
                )
                empty = partition.empty_clusters()

                # Update step
                updated = self._update_representatives(
                    X, partition, representatives, aux_info['min_distances'],
                    iteration, diagnostics, executor
                )

                # Cost is charged against the representatives that produced the partition
                cost = self._evaluate_cost(X, partition, representatives, executor)
                stop = controller.record(cost)
                representatives = updated

                iter_time = time.time() - iter_start_time
                history.append(IterationSummary(
                    iteration=iteration,
                    cost=cost,
                    delta=controller.state.delta,
                    n_empty=len(empty),
                    elapsed=iter_time
                ))

                if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                    print(f"Iteration {iteration:3d}: cost = {cost:.6f} "
                          f"delta = {controller.state.delta:.6f} ({iter_time:.3f}s)")

                if stop:
                    break
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        state = controller.state
        self._init_indices = init_indices
        self._representatives = representatives
        self._partition = partition
        self._cost = state.cost
        self.converged_ = state.converged
        self.n_iter_ = state.iteration
        self.history_ = history
        self.diagnostics_ = diagnostics
        self.fitted_ = True

        if state.converged:
            if self.verbose:
                print(f"Converged at iteration {state.iteration}")
        else:
            diagnostics.warn(f"Failed to converge after {self.max_iter} iterations")

        if self.verbose:
            print(f"Total fitting time: {time.time() - start_time:.3f}s")

        return self

    def _update_representatives(self, X: Tensor, partition: Partition,
                                representatives: Tensor, min_distances: Tensor,
                                iteration: int, diagnostics: Diagnostics,
                                executor: Optional[ThreadPoolExecutor]) -> Tensor:
        """Recompute every representative once from this iteration's partition."""
        updated = representatives.clone()
        counts = partition.counts()
        non_empty = [k for k in range(self.n_clusters) if counts[k] > 0]

        def update_one(k: int) -> Tensor:
            return self.strategy.update(X[partition.members(k)], representatives[k], self.metric)

        if executor is not None:
            results = list(executor.map(update_one, non_empty))
        else:
            results = [update_one(k) for k in non_empty]

        for k, rep in zip(non_empty, results):
            rep = torch.as_tensor(rep, dtype=X.dtype)
            if rep.shape != (self.n_features,):
                raise ValueError(f"{self.strategy!r} returned shape {tuple(rep.shape)} "
                                 f"for cluster {k}, expected ({self.n_features},)")
            if not torch.isfinite(rep).all():
                diagnostics.warn(f"cluster {k} update produced non-finite values at "
                                 f"iteration {iteration}; keeping previous representative")
                continue
            updated[k] = rep

        empty = partition.empty_clusters()
        if empty:
            self._handle_empty_clusters(X, empty, updated, min_distances, iteration, diagnostics)

        return updated

    def _handle_empty_clusters(self, X: Tensor, empty: List[int], updated: Tensor,
                               min_distances: Tensor, iteration: int,
                               diagnostics: Diagnostics) -> None:
        """Apply the configured policy to clusters without members."""
        if self.empty_cluster == 'error':
            raise EmptyClusterError(empty[0], iteration)

        if self.empty_cluster == 'freeze':
            for k in empty:
                diagnostics.warn(f"cluster {k} has no members at iteration {iteration}; "
                                 f"keeping previous representative")
            return

        # 'farthest': reseed from the worst-served records, one record per cluster
        candidates = min_distances.clone()
        for k in empty:
            idx = int(torch.argmax(candidates))
            candidates[idx] = float('-inf')
            updated[k] = X[idx].clone()
            diagnostics.warn(f"cluster {k} has no members at iteration {iteration}; "
                             f"reseeded with record {idx}")

    def _evaluate_cost(self, X: Tensor, partition: Partition, representatives: Tensor,
                       executor: Optional[ThreadPoolExecutor]) -> float:
        """Sum of per-cluster costs in label order."""
        def cost_one(k: int) -> float:
            members = partition.members(k)
            if len(members) == 0:
                return 0.0
            return float(self.strategy.cost(X[members], representatives[k], self.metric))

        if executor is not None:
            costs = list(executor.map(cost_one, range(self.n_clusters)))
        else:
            costs = [cost_one(k) for k in range(self.n_clusters)]

        return float(sum(costs))

    def fit_predict(self, diagnostics: Optional[Diagnostics] = None) -> Tensor:
        """Fit and return the training labels."""
        return self.fit(diagnostics).labels_

    def predict(self, X: Union[Tensor, np.ndarray, list]) -> Union[int, Tensor]:
        """Label of the nearest final representative.

        Queries are compared in the space the model was trained in; apply the
        same normalization to queries yourself if one was used.

        Parameters
        ----------
        X : vector of shape (n_features,) or matrix (n_samples, n_features)

        Returns
        -------
        label : int for a single vector, (n_samples,) Tensor for a matrix

        Raises
        ------
        DimensionMismatchError
            If the query length differs from the training column count
        """
        self._check_fitted()
        x = validate_vector(X, self.n_features, dtype=self.dtype)

        if x.dim() == 1:
            return self.assignment_strategy.nearest(x, self._representatives)

        labels, _ = self.assignment_strategy.assign_block(x, self._representatives)
        return labels

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster representatives (an independent copy)."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._representatives.clone()

    def get_centroids(self) -> List[Tensor]:
        """Final representatives as a list of independent vectors."""
        return [row.clone() for row in self.cluster_centers_]

    @property
    def labels_(self) -> Tensor:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._partition.labels

    @property
    def partition_(self) -> Partition:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._partition

    @property
    def init_indices_(self) -> Tensor:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._init_indices.clone()

    @property
    def inertia_(self) -> float:
        """Get final total cost."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._cost

    def total_cost(self) -> float:
        return self.inertia_

    def summary(self) -> List[Dict[str, Any]]:
        """Per-iteration (iteration, cost, delta, n_empty, elapsed) rows."""
        return [entry.as_row() for entry in self.history_]

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'strategy': self.strategy,
            'metric': self.metric,
            'max_iter': self.max_iter,
            'min_change': self.min_change,
            'init': self.initialization_strategy,
            'random_state': self.random_state,
            'normalizer': self.normalizer,
            'empty_cluster': self.empty_cluster,
            'parallel': self.parallel_requested,
            'n_jobs': self.n_jobs,
            'min_execution_units': self.min_execution_units,
            'verbose': self.verbose,
            'dtype': self.dtype
        }

    def __repr__(self) -> str:
        name = self.__class__.__name__
        if not self.fitted_:
            return (f"{name}(strategy={self.strategy!r}, n_clusters={self.n_clusters}, "
                    f"metric={self.metric!r})")
        centers = ", ".join(str(row.tolist()) for row in self._representatives)
        return f"{name}({self.strategy.name}) centroids: [{centers}]"
