# tests/test_kcentroid_basic.py
"""
KCentroidClusterer public behaviour

Covers:
- Recovers well-separated blobs
- Construction-time validation (bad k, budget, threshold, data, strategy)
- predict: single vector -> int, matrix -> labels, dimension mismatch
- Accessors return copies; the training matrix is a private copy
- Advisory warnings (no normalizer, singular data, expensive metric)
- Builder and factory shortcuts
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kcentroid import (
    KCentroidClusterer, ClusteringBuilder, create_kmeans, create_kmedoids, create_kmedians,
    MeanStrategy, MedoidStrategy, MedianStrategy, ManhattanDistance,
    InvalidConfigurationError, MalformedInputError, DimensionMismatchError,
)
from kcentroid.utils.normalization import standard_scale
from data_gen import make_blobs
from utils import labels_equal_up_to_perm


@pytest.fixture
def blobs(seed_all):
    X, y, C = make_blobs(n_per=60, centers=3, dim=2, seed=seed_all)
    return X, y, C


@pytest.mark.parametrize("strategy", [MeanStrategy(), MedoidStrategy(), MedianStrategy()])
def test_recovers_blobs(blobs, strategy):
    X, y, C = blobs
    model = KCentroidClusterer(X, 3, strategy=strategy, init=[0, 60, 120]).fit()

    assert model.converged_
    assert labels_equal_up_to_perm(y, model.labels_, 3)
    centers = model.cluster_centers_.numpy()
    assert np.allclose(centers, C, atol=0.5)


def test_mean_cost_never_increases(blobs, seed_all):
    X, _, _ = blobs
    model = KCentroidClusterer(X, 4, random_state=seed_all).fit()

    costs = [row["cost"] for row in model.summary()]
    assert all(b <= a + 1e-9 for a, b in zip(costs, costs[1:]))
    assert model.inertia_ == costs[-1]
    assert model.total_cost() == model.inertia_


@pytest.mark.parametrize("kwargs", [
    {"n_clusters": 0},
    {"n_clusters": 5},
    {"n_clusters": 2, "max_iter": 0},
    {"n_clusters": 2, "min_change": 0.0},
    {"n_clusters": 2, "min_change": -1.0},
    {"n_clusters": 2, "empty_cluster": "drop"},
    {"n_clusters": 2, "init": [0, 0]},
    {"n_clusters": 2, "init": [0, 1, 2]},
])
def test_invalid_configuration(four_points, kwargs):
    with pytest.raises(InvalidConfigurationError):
        KCentroidClusterer(four_points, **kwargs)


@pytest.mark.parametrize("X", [
    [[0.0, 1.0], [float("nan"), 1.0]],
    [[0.0, 1.0], [float("inf"), 1.0]],
    [0.0, 1.0, 2.0],
])
def test_malformed_data(X):
    with pytest.raises(MalformedInputError):
        KCentroidClusterer(X, 1)


def test_strategy_type_checked(four_points):
    with pytest.raises(TypeError):
        KCentroidClusterer(four_points, 2, strategy="kmeans")


def test_predict_before_fit(four_points):
    model = KCentroidClusterer(four_points, 2)
    with pytest.raises(RuntimeError):
        model.predict([0.0, 0.0])
    with pytest.raises(RuntimeError):
        model.cluster_centers_


def test_predict_single_and_batch(four_points):
    model = KCentroidClusterer(four_points, 2, init=[0, 2]).fit()

    label = model.predict([9.0, 0.5])
    assert isinstance(label, int)
    assert label == 1
    assert model.predict(np.array([[0.2, 0.2], [11.0, 3.0]])).tolist() == [0, 1]
    assert model.predict(torch.tensor([[0.0, 0.5]])).tolist() == [0]


def test_dimension_mismatch_leaves_model_usable():
    X = [[0.0, 0.0, 0.0], [0.0, 1.0, 0.0], [10.0, 0.0, 1.0], [10.0, 1.0, 1.0]]
    model = KCentroidClusterer(X, 2, init=[0, 2]).fit()

    with pytest.raises(DimensionMismatchError) as exc:
        model.predict([1.0, 2.0])
    assert exc.value.expected == 3
    assert exc.value.actual == 2

    assert model.predict([10.0, 0.0, 1.0]) == 1


def test_accessors_return_copies(four_points):
    model = KCentroidClusterer(four_points, 2, init=[0, 2]).fit()
    before = model.cluster_centers_

    centers = model.cluster_centers_
    centers[:] = -100.0
    model.get_centroids()[0][:] = -100.0
    model.labels_[:] = 1
    model.init_indices_[:] = 3

    assert torch.equal(model.cluster_centers_, before)
    assert model.labels_.tolist() == [0, 0, 1, 1]
    assert model.init_indices_.tolist() == [0, 2]
    assert model.predict([0.0, 0.0]) == 0


def test_training_matrix_is_private(four_points):
    X = torch.tensor(four_points, dtype=torch.float64)
    model = KCentroidClusterer(X, 2, init=[0, 2])
    X[:] = 50.0

    model.fit()

    assert model.cluster_centers_.tolist() == [[0.0, 0.5], [10.0, 0.5]]


def test_missing_normalizer_is_discouraged(four_points):
    silent = KCentroidClusterer(four_points, 2, init=[0, 2]).fit()
    scaled = KCentroidClusterer(four_points, 2, init=[0, 2], normalizer=standard_scale).fit()

    assert any("normalization" in w for w in silent.diagnostics_.warnings)
    assert not any("normalization" in w for w in scaled.diagnostics_.warnings)
    assert scaled.labels_.tolist() == [0, 0, 1, 1]


def test_singular_matrix_still_fits():
    model = KCentroidClusterer([[1.0, 1.0]] * 3, 2, normalizer=lambda X: X)
    assert model.diagnostics_.warnings == ["all elements in input matrix are equal (1.0)"]

    model.fit()

    assert model.converged_
    assert model.labels_.tolist() == [0, 0, 0]
    assert model.partition_.empty_clusters() == [1]
    assert model.inertia_ == 0.0
    assert torch.isfinite(model.cluster_centers_).all()


def test_callable_metric_is_flagged_expensive(four_points):
    def l1(u, v):
        return float(torch.abs(u - v).sum())

    model = KCentroidClusterer(four_points, 2, metric=l1, init=[0, 2]).fit()

    assert any("expensive" in w for w in model.diagnostics_.warnings)
    assert model.labels_.tolist() == [0, 0, 1, 1]


def test_fit_predict_and_summary(four_points):
    model = KCentroidClusterer(four_points, 2, init=[0, 2])
    labels = model.fit_predict()

    assert labels.tolist() == [0, 0, 1, 1]
    rows = model.summary()
    assert set(rows[0]) == {"iteration", "cost", "delta", "n_empty", "elapsed"}
    assert "centroids" in repr(model)
    assert model.get_params()["n_clusters"] == 2


def test_verbose_fit_prints_progress(four_points, capsys):
    with pytest.warns(UserWarning):
        KCentroidClusterer(four_points, 2, init=[0, 2], verbose=2).fit()

    out = capsys.readouterr().out
    assert "Iteration   0" in out
    assert "Converged at iteration 2" in out


def test_builder(four_points):
    model = (ClusteringBuilder()
             .with_medoid_strategy()
             .with_metric(ManhattanDistance())
             .with_fixed_init([0, 2])
             .with_normalizer("minmax")
             .with_max_iter(20)
             .build(four_points, 2)
             .fit())

    assert model.labels_.tolist() == [0, 0, 1, 1]
    assert isinstance(model.strategy, MedoidStrategy)
    assert model.max_iter == 20


def test_factories(blobs, seed_all):
    X, _, _ = blobs

    assert isinstance(create_kmeans(X, 3).strategy, MeanStrategy)
    assert isinstance(create_kmedoids(X, 3).strategy, MedoidStrategy)
    kmedians = create_kmedians(X, 3, random_state=seed_all, max_iter=5)
    assert isinstance(kmedians.metric, ManhattanDistance)
    assert kmedians.max_iter == 5

    with pytest.raises(TypeError):
        create_kmeans(X, 3, bogus=1)
