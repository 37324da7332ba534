"""
Column and row normalization transforms.

Each function is a pure ``Tensor -> Tensor`` map applied once to the whole
training matrix before fitting. Any callable with the same shape can be
passed as a normalizer instead.
"""

import torch
from torch import Tensor

from ..exceptions import InvalidConfigurationError


def standard_scale(X: Tensor) -> Tensor:
    """Zero mean and unit (population) variance per column.

    Constant columns are centered but not scaled.
    """
    mean = X.mean(dim=0, keepdim=True)
    std = X.std(dim=0, correction=0, keepdim=True)
    std = torch.where(std > 0, std, torch.ones_like(std))
    return (X - mean) / std


def min_max_scale(X: Tensor) -> Tensor:
    """Scale each column to [0, 1]. Constant columns map to 0."""
    lo = X.min(dim=0, keepdim=True).values
    span = X.max(dim=0, keepdim=True).values - lo
    span = torch.where(span > 0, span, torch.ones_like(span))
    return (X - lo) / span


def mean_center(X: Tensor) -> Tensor:
    """Subtract the column means."""
    return X - X.mean(dim=0, keepdim=True)


def l2_normalize(X: Tensor, eps: float = 1e-12) -> Tensor:
    """Scale each row to unit length. Zero rows stay zero."""
    norms = torch.norm(X, dim=1, keepdim=True).clamp(min=eps)
    return X / norms


NORMALIZERS = {
    'standard': standard_scale,
    'minmax': min_max_scale,
    'center': mean_center,
    'l2': l2_normalize,
}


def get_normalizer(name):
    """Resolve a normalizer by name; callables and None pass through."""
    if name is None or callable(name):
        return name
    try:
        return NORMALIZERS[name]
    except KeyError:
        raise InvalidConfigurationError(f"Unknown normalizer: {name}") from None
