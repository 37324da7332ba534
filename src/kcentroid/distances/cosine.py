"""
Angular distance metric.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class CosineDistance(DistanceMetric):
    """1 - cos(x, c), clamped to [0, 2].

    Zero vectors are treated as having zero similarity to everything.
    """

    def __init__(self, eps: float = 1e-12):
        self.eps = eps

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        point_norms = torch.norm(points, dim=1).clamp(min=self.eps)
        center_norm = torch.norm(center).clamp(min=self.eps)
        similarities = (points @ center) / (point_norms * center_norm)
        return torch.clamp(1.0 - similarities, 0.0, 2.0)
