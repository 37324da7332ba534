# tests/utils.py
"""
Small, reusable helpers used across the kcentroid test suite.

Functions:
- labels_equal_up_to_perm(y1, y2, K): whether two labelings agree after relabeling.
- assert_partition_covers(partition, m): every record appears in exactly one cluster.
- time_block(label, meta=None): context manager that prints wall-clock time.
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np


def _to_numpy(x: Any) -> np.ndarray:
    if hasattr(x, "detach"):
        x = x.detach().cpu().numpy()
    return np.asarray(x)


def labels_equal_up_to_perm(y1: Any, y2: Any, K: int) -> bool:
    """Return True if y2 can be relabeled to equal y1 exactly."""
    y1, y2 = _to_numpy(y1), _to_numpy(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


def assert_partition_covers(partition, m: int) -> None:
    """Every index in [0, m) appears in exactly one member set."""
    seen = []
    for k in range(partition.n_clusters):
        seen.extend(partition.members(k).tolist())
    assert len(seen) == m, f"Expected {m} memberships, got {len(seen)}"
    assert sorted(seen) == list(range(m)), "Partition omits or repeats records"

    labels = partition.labels.tolist()
    for k in range(partition.n_clusters):
        for i in partition.members(k).tolist():
            assert labels[i] == k, f"Record {i} listed under {k} but labeled {labels[i]}"


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """Print the wall-clock time of the enclosed block."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        extra = f" {json.dumps(meta, sort_keys=True)}" if meta else ""
        print(f"[timing] {label}: {elapsed:.4f}s{extra}")
