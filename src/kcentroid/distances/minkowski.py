"""
Minkowski-family distance metrics: Manhattan, Chebyshev and general Lp.
"""

import math
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..exceptions import InvalidConfigurationError


class ManhattanDistance(DistanceMetric):
    """L1 distance sum_i |x_i - c_i|."""

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        return torch.sum(torch.abs(points - center.unsqueeze(0)), dim=1)


class ChebyshevDistance(DistanceMetric):
    """L-infinity distance max_i |x_i - c_i|."""

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        diff = torch.abs(points - center.unsqueeze(0))
        if diff.shape[1] == 0:
            return torch.zeros(diff.shape[0], dtype=diff.dtype, device=diff.device)
        return diff.max(dim=1).values


class MinkowskiDistance(DistanceMetric):
    """Lp distance (sum_i |x_i - c_i|^p)^(1/p) for p >= 1."""

    def __init__(self, p: float = 2.0):
        if math.isnan(p) or p < 1.0:
            raise InvalidConfigurationError(f"Minkowski p must be >= 1, got {p}")
        self.p = float(p)

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        diff = torch.abs(points - center.unsqueeze(0))
        if math.isinf(self.p):
            if diff.shape[1] == 0:
                return torch.zeros(diff.shape[0], dtype=diff.dtype, device=diff.device)
            return diff.max(dim=1).values
        return torch.sum(diff ** self.p, dim=1) ** (1.0 / self.p)

    def __repr__(self) -> str:
        return f"MinkowskiDistance(p={self.p})"
