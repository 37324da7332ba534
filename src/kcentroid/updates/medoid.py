"""
Medoid strategy (k-medoids, Voronoi iteration).

The representative is always an actual record, which makes the strategy
usable with metrics for which a mean is meaningless.
"""

from torch import Tensor

from ..base.interfaces import CentroidStrategy, DistanceMetric


class MedoidStrategy(CentroidStrategy):
    """Representative is the member with the smallest total distance to the others.

    Cost is the within-cluster sum of distances. Candidates are scanned in
    member order and only a strictly smaller total replaces the current
    best, so ties go to the first member.
    """

    name = 'kmedoids'

    def cost(self, points: Tensor, representative: Tensor,
             metric: DistanceMetric) -> float:
        return float(metric.compute(points, representative).sum())

    def update(self, points: Tensor, representative: Tensor,
               metric: DistanceMetric) -> Tensor:
        best_idx = 0
        best_total = float('inf')

        # O(c²) distance evaluations for a cluster of size c
        for j in range(points.shape[0]):
            total = float(metric.compute(points, points[j]).sum())
            if total < best_total:
                best_total = total
                best_idx = j

        return points[best_idx].clone()
