"""
Core data structures for the k-centroid engine.

This module provides the partition produced by each assignment pass and the
small records used to track and report the iteration loop.
"""

from typing import Optional, List, Dict, Any
import math
import torch
from torch import Tensor
from dataclasses import dataclass, field, asdict


class Partition:
    """Exhaustive, non-overlapping grouping of records by cluster label.

    Built from a label vector in one reduce step. The label vector and the
    member sets are two views of the same information and cannot disagree.
    """

    def __init__(self, labels: Tensor, n_clusters: int):
        """
        Args:
            labels: (m,) integer tensor, labels[i] is the cluster of record i
            n_clusters: Number of clusters K
        """
        if labels.dim() != 1:
            raise ValueError(f"Expected 1D labels, got {labels.dim()}D")
        if labels.numel() > 0:
            if labels.min() < 0 or labels.max() >= n_clusters:
                raise ValueError(f"Labels must lie in [0, {n_clusters})")

        self.n_clusters = n_clusters
        self._labels = labels.long().clone()

        # Stable sort keeps member indices ascending within each cluster
        order = torch.sort(self._labels, stable=True).indices
        counts = torch.bincount(self._labels, minlength=n_clusters)
        self._members = list(torch.split(order, counts.tolist()))
        self._counts = counts

    @property
    def n_points(self) -> int:
        """Number of records covered."""
        return self._labels.shape[0]

    @property
    def labels(self) -> Tensor:
        """Copy of the label vector."""
        return self._labels.clone()

    def members(self, cluster_idx: int) -> Tensor:
        """Ascending record indices assigned to a cluster."""
        return self._members[cluster_idx].clone()

    def counts(self) -> Tensor:
        """(K,) member count per cluster."""
        return self._counts.clone()

    def empty_clusters(self) -> List[int]:
        """Labels of clusters with no members."""
        return [k for k in range(self.n_clusters) if self._counts[k] == 0]

    def as_dict(self) -> Dict[int, List[int]]:
        """Plain mapping from label to member indices."""
        return {k: self._members[k].tolist() for k in range(self.n_clusters)}

    def __len__(self) -> int:
        return self.n_clusters

    def __eq__(self, other) -> bool:
        if not isinstance(other, Partition):
            return NotImplemented
        return (self.n_clusters == other.n_clusters
                and torch.equal(self._labels, other._labels))

    def __repr__(self) -> str:
        return f"Partition(n_points={self.n_points}, counts={self._counts.tolist()})"


@dataclass
class IterationState:
    """Mutable state of the convergence loop.

    Only the convergence controller writes to it.
    """
    iteration: int = 0
    converged: bool = False
    cost: Optional[float] = None
    previous_cost: Optional[float] = None
    delta: float = math.inf

    @property
    def exhausted(self) -> bool:
        """Whether the loop stopped on its budget rather than converging."""
        return not self.converged


@dataclass
class IterationSummary:
    """One row of the per-iteration fit summary."""
    iteration: int
    cost: float
    delta: float
    n_empty: int = 0
    elapsed: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def as_row(self) -> Dict[str, Any]:
        row = asdict(self)
        row.pop('metadata')
        return row
