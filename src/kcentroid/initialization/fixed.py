"""
Initialization from explicit record indices.

Useful for warm starts or when a reproducible starting layout is needed
without searching for a seed.
"""

from typing import Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..exceptions import InvalidConfigurationError
from .shuffle import check_cluster_count


class FixedIndicesInit(InitializationStrategy):
    """Use the given record indices, in order, as initial representatives."""

    def __init__(self, indices: Union[Sequence[int], Tensor]):
        """
        Args:
            indices: k distinct record indices; position is the cluster label
        """
        indices = torch.as_tensor(indices, dtype=torch.long)
        if indices.dim() != 1:
            raise InvalidConfigurationError(
                f"Initial indices must be 1D, got {indices.dim()}D")
        if torch.unique(indices).numel() != indices.numel():
            raise InvalidConfigurationError(
                f"Initial indices must be distinct, got {indices.tolist()}")
        self.indices = indices

    def validate(self, n_points: int, n_clusters: int) -> None:
        check_cluster_count(n_points, n_clusters)
        if self.indices.numel() != n_clusters:
            raise InvalidConfigurationError(
                f"Got {self.indices.numel()} initial indices, but n_clusters={n_clusters}")
        if n_clusters > 0 and (self.indices.min() < 0 or self.indices.max() >= n_points):
            raise InvalidConfigurationError(
                f"Initial indices must lie in [0, {n_points}), got {self.indices.tolist()}")

    def select(self, n_points: int, n_clusters: int) -> Tensor:
        self.validate(n_points, n_clusters)
        return self.indices.clone()

    def __repr__(self) -> str:
        return f"FixedIndicesInit({self.indices.tolist()})"
