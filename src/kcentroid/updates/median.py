"""
Median strategy (k-medians).
"""

import torch
from torch import Tensor

from ..base.interfaces import CentroidStrategy, DistanceMetric


class MedianStrategy(CentroidStrategy):
    """Representative is the componentwise median of the members.

    For an even number of members torch returns the lower of the two middle
    values, so the representative is always built from observed
    coordinates. Cost is the within-cluster sum of distances; pair with
    ManhattanDistance for the classic k-medians objective.
    """

    name = 'kmedians'

    def cost(self, points: Tensor, representative: Tensor,
             metric: DistanceMetric) -> float:
        return float(metric.compute(points, representative).sum())

    def update(self, points: Tensor, representative: Tensor,
               metric: DistanceMetric) -> Tensor:
        return torch.median(points, dim=0).values.clone()
