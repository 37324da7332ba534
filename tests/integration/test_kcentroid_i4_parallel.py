# tests/integration/test_kcentroid_i4_parallel.py
"""
Parallel execution is observationally identical to serial execution.

Covers:
- Same centers, labels, cost, iteration count and convergence flag
- Fallback to serial with a notice when too few cores are available
"""

import pytest
import torch

from kcentroid import KCentroidClusterer, MeanStrategy, MedoidStrategy, MedianStrategy
from kcentroid import ManhattanDistance
from data_gen import make_blobs
from utils import time_block


@pytest.mark.parametrize("n_jobs", [2, 4])
@pytest.mark.parametrize("strategy,metric", [
    (MeanStrategy(), None),
    (MedoidStrategy(), None),
    (MedianStrategy(), ManhattanDistance()),
])
def test_parallel_matches_serial(seed_all, n_jobs, strategy, metric):
    X, _, _ = make_blobs(n_per=50, centers=4, dim=3, spread=1.0, separation=5.0, seed=seed_all)
    common = dict(strategy=strategy, metric=metric, random_state=seed_all)

    with time_block("serial", {"n_jobs": n_jobs}):
        serial = KCentroidClusterer(X, 4, **common).fit()
    with time_block("parallel", {"n_jobs": n_jobs}):
        parallel = KCentroidClusterer(X, 4, parallel=True, n_jobs=n_jobs,
                                      min_execution_units=1, **common).fit()

    assert parallel.parallel is True
    assert torch.equal(serial.init_indices_, parallel.init_indices_)
    assert torch.equal(serial.labels_, parallel.labels_)
    assert torch.equal(serial.cluster_centers_, parallel.cluster_centers_)
    assert serial.inertia_ == parallel.inertia_
    assert serial.n_iter_ == parallel.n_iter_
    assert serial.converged_ == parallel.converged_
    assert serial.partition_ == parallel.partition_


def test_parallel_empty_cluster_reporting():
    X = [[0.0, 0.0], [0.0, 0.0], [5.0, 5.0]]
    model = KCentroidClusterer(X, 2, init=[0, 1], parallel=True, n_jobs=2,
                               min_execution_units=1).fit()

    assert ("cluster 1 has no members at iteration 0; keeping previous representative"
            in model.diagnostics_.warnings)


def test_falls_back_to_serial_with_notice(four_points):
    model = KCentroidClusterer(four_points, 2, init=[0, 2], parallel=True,
                               min_execution_units=10 ** 6).fit()

    assert model.parallel is False
    assert any(msg.startswith("min num cores required for parallel: 1000000")
               for msg in model.diagnostics_.infos)
    assert not any("min num cores" in w for w in model.diagnostics_.warnings)
    assert model.labels_.tolist() == [0, 0, 1, 1]
