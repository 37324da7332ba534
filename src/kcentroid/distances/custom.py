"""
Adapter turning an arbitrary Python callable into a distance metric.
"""

from typing import Callable
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class CallableDistance(DistanceMetric):
    """Wraps ``fn(u, v) -> float`` evaluated one row at a time.

    The callable must be pure and return nonnegative values. Because every
    pair goes through the Python interpreter this metric is flagged as
    expensive.
    """

    expensive = True

    def __init__(self, fn: Callable[[Tensor, Tensor], float]):
        if not callable(fn):
            raise TypeError(f"Expected a callable, got {type(fn)}")
        self.fn = fn

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        values = [float(self.fn(row, center)) for row in points]
        return torch.tensor(values, dtype=points.dtype, device=points.device)

    def distance(self, u: Tensor, v: Tensor) -> float:
        return float(self.fn(u, v))

    def __repr__(self) -> str:
        name = getattr(self.fn, '__name__', repr(self.fn))
        return f"CallableDistance({name})"
