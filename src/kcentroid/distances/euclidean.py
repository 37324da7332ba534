"""
Euclidean distance metrics for clustering.

The default metric of the engine. Unlike the squared form used internally by
many k-means implementations, the default here is the true Euclidean norm;
mean-based cost squares it explicitly.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..exceptions import InvalidConfigurationError


class EuclideanDistance(DistanceMetric):
    """Euclidean distance ||x - c||.

    Args:
        squared: If True, return ||x - c||² instead.
    """

    def __init__(self, squared: bool = False):
        self.squared = squared

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        diff = points - center.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"


class WeightedEuclideanDistance(DistanceMetric):
    """Weighted Euclidean distance with per-feature weights.

    Computes sqrt(sum_i w_i * (x_i - c_i)²).
    """

    def __init__(self, weights, squared: bool = False):
        """
        Args:
            weights: (d,) nonnegative feature weights
            squared: Whether to return squared distances
        """
        weights = torch.as_tensor(weights)
        if weights.dim() != 1:
            raise InvalidConfigurationError(f"Weights must be 1D, got {weights.dim()}D")
        if not torch.isfinite(weights).all() or (weights < 0).any():
            raise InvalidConfigurationError("Weights must be finite and nonnegative")
        self.weights = weights
        self.squared = squared

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        weights = self.weights.to(device=points.device, dtype=points.dtype)

        diff = points - center.unsqueeze(0)
        weighted_sq_diff = weights.unsqueeze(0) * diff * diff
        squared_distances = torch.sum(weighted_sq_diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def validate(self, dimension: int) -> None:
        if self.weights.shape[0] != dimension:
            raise InvalidConfigurationError(
                f"Metric has {self.weights.shape[0]} weights but data has "
                f"{dimension} features")

    def __repr__(self) -> str:
        return f"WeightedEuclideanDistance(d={self.weights.shape[0]}, squared={self.squared})"
