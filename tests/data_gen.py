# tests/data_gen.py
"""
Tiny synthetic-data generators reused across the kcentroid test suite.

    >>> X, y, C = make_blobs(n_per=50, centers=3, dim=2, seed=0)
    >>> X.shape, y.shape, C.shape
    ((150, 2), (150,), (3, 2))
"""

from __future__ import annotations

from typing import Tuple, Optional
import numpy as np

NDArray = np.ndarray


def make_blobs(
    n_per: int = 100,
    centers: int = 3,
    dim: int = 2,
    spread: float = 0.3,
    separation: float = 10.0,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Isotropic Gaussian blobs whose centers sit on the coordinate axes.

    Center k is ``separation * e_(k mod dim)`` scaled by ``1 + k // dim`` so
    that every pair of centers is at least ``separation`` apart.

    Returns
    -------
    X : (centers*n_per, dim) float64
        Rows grouped by blob, blob 0 first.
    y : (centers*n_per,) int64
        Ground-truth blob index per row.
    C : (centers, dim) float64
        Blob centers.
    """
    rng = np.random.default_rng(seed)
    C = np.zeros((centers, dim), dtype=np.float64)
    for k in range(centers):
        C[k, k % dim] = separation * (1 + k // dim)

    X = np.concatenate([
        C[k] + spread * rng.standard_normal((n_per, dim)) for k in range(centers)
    ])
    y = np.repeat(np.arange(centers, dtype=np.int64), n_per)
    return X, y, C


def make_grid(n_side: int = 4, step: float = 1.0) -> NDArray:
    """Regular n_side x n_side grid in the plane; every record is distinct."""
    xs = np.arange(n_side, dtype=np.float64) * step
    gx, gy = np.meshgrid(xs, xs, indexing="ij")
    return np.stack([gx.ravel(), gy.ravel()], axis=1)
