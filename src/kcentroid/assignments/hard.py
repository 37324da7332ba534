"""
Hard assignment strategy for the k-centroid engine.

Assigns each point to its nearest representative under the configured
distance metric.
"""

from typing import Optional, Tuple, Dict, Any
from concurrent.futures import Executor
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..base.data_structures import Partition
from ..utils.parallel import chunk_ranges


class HardAssignment:
    """Hard (discrete) assignment to the nearest representative.

    Representatives are scanned left to right and a candidate only replaces
    the current best when it is strictly closer, so ties always go to the
    lowest representative index.
    """

    def __init__(self, metric: DistanceMetric):
        """
        Args:
            metric: Distance used to compare points with representatives
        """
        self.metric = metric

    @property
    def is_soft(self) -> bool:
        """Hard assignments are not soft."""
        return False

    def assign_block(self, points: Tensor, representatives: Tensor) -> Tuple[Tensor, Tensor]:
        """Assign a block of points serially.

        Args:
            points: (n, d) data points
            representatives: (K, d) current representatives

        Returns:
            labels: (n,) long tensor of cluster indices
            min_distances: (n,) distance to the chosen representative
        """
        n_points = points.shape[0]
        best = torch.full((n_points,), float('inf'), dtype=points.dtype, device=points.device)
        labels = torch.zeros(n_points, dtype=torch.long, device=points.device)

        for k in range(representatives.shape[0]):
            distances = self.metric.compute(points, representatives[k])
            closer = distances < best
            best = torch.where(closer, distances, best)
            labels[closer] = k

        return labels, best

    def compute_assignments(self, points: Tensor,
                            representatives: Tensor,
                            executor: Optional[Executor] = None,
                            n_chunks: int = 1) -> Tuple[Tensor, Dict[str, Any]]:
        """Assign every point to its nearest representative.

        Args:
            points: (n, d) data points
            representatives: (K, d) current representatives
            executor: Optional pool; when given, contiguous row blocks are
                assigned concurrently and each block fills only its own slice
            n_chunks: Number of row blocks to submit to the executor

        Returns:
            assignments: (n,) cluster indices
            info: {'min_distances': (n,) distance to the assigned representative}
        """
        if executor is None or n_chunks <= 1:
            labels, min_distances = self.assign_block(points, representatives)
            return labels, {'min_distances': min_distances}

        n_points = points.shape[0]
        labels = torch.empty(n_points, dtype=torch.long, device=points.device)
        min_distances = torch.empty(n_points, dtype=points.dtype, device=points.device)

        blocks = chunk_ranges(n_points, n_chunks)
        futures = [
            executor.submit(self.assign_block, points[start:stop], representatives)
            for start, stop in blocks
        ]

        # Gathering every future is the barrier before the update phase
        for (start, stop), future in zip(blocks, futures):
            block_labels, block_distances = future.result()
            labels[start:stop] = block_labels
            min_distances[start:stop] = block_distances

        return labels, {'min_distances': min_distances}

    def partition(self, points: Tensor, representatives: Tensor,
                  executor: Optional[Executor] = None,
                  n_chunks: int = 1) -> Tuple[Partition, Dict[str, Any]]:
        """Assign points and reduce the labels into a Partition."""
        labels, info = self.compute_assignments(points, representatives, executor, n_chunks)
        return Partition(labels, representatives.shape[0]), info

    def nearest(self, x: Tensor, representatives: Tensor) -> int:
        """Label of the representative nearest to a single vector."""
        labels, _ = self.assign_block(x.unsqueeze(0), representatives)
        return int(labels[0])

    def __repr__(self) -> str:
        return f"HardAssignment(metric={self.metric!r})"
