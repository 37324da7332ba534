"""
Mean strategy for centroid-based clustering (k-means).
"""

from torch import Tensor

from ..base.interfaces import CentroidStrategy, DistanceMetric


class MeanStrategy(CentroidStrategy):
    """Representative is the componentwise mean of the members.

    Cost is the within-cluster sum of squared distances.
    """

    name = 'kmeans'

    def cost(self, points: Tensor, representative: Tensor,
             metric: DistanceMetric) -> float:
        distances = metric.compute(points, representative)
        return float((distances * distances).sum())

    def update(self, points: Tensor, representative: Tensor,
               metric: DistanceMetric) -> Tensor:
        return points.mean(dim=0)
