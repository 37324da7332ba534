"""
Input validation and preprocessing utilities.

Provides the checks run before an engine is constructed: data conversion,
shape and finiteness checks, and configuration bounds.
"""

from typing import Optional, Union, Any
import torch
from torch import Tensor
import numpy as np

from ..config import EMPTY_CLUSTER_POLICIES
from ..exceptions import (
    InvalidConfigurationError, MalformedInputError, DimensionMismatchError
)


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float64,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate input data and return a private 2D tensor copy.

    Args:
        X: Input data (tensor, numpy array, or nested list)
        dtype: Target data type
        ensure_finite: Whether to reject NaN/inf
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        (m, n) tensor on CPU that shares no storage with ``X``

    Raises:
        MalformedInputError: If validation fails
    """
    # Convert to tensor (always copying)
    if isinstance(X, Tensor):
        X = X.detach().to(device='cpu', dtype=dtype).clone()
    elif isinstance(X, np.ndarray):
        if not np.issubdtype(X.dtype, np.number):
            raise MalformedInputError(f"Expected numeric array, got dtype {X.dtype}")
        X = torch.tensor(X, dtype=dtype)
    elif isinstance(X, (list, tuple)):
        try:
            X = torch.tensor(X, dtype=dtype)
        except (TypeError, ValueError) as e:
            raise MalformedInputError(f"Cannot convert input to a matrix: {e}") from e
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() != 2:
        raise MalformedInputError(f"Expected 2D array, got {X.dim()}D")

    n_samples, n_features = X.shape

    if n_samples < ensure_min_samples:
        raise MalformedInputError(f"Found {n_samples} samples, but need at least "
                                  f"{ensure_min_samples}")

    if n_features < ensure_min_features:
        raise MalformedInputError(f"Found {n_features} features, but need at least "
                                  f"{ensure_min_features}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise MalformedInputError("NaN in input data. Select a matrix imputation "
                                      "method for incomplete records")
        if torch.isinf(X).any():
            raise MalformedInputError("Input contains infinite values")

    return X


def validate_vector(x: Any, n_features: int,
                    dtype: torch.dtype = torch.float64) -> Tensor:
    """Convert a query to a 1D or 2D tensor and check its column count.

    Raises:
        DimensionMismatchError: If the trailing dimension is not ``n_features``
    """
    if isinstance(x, Tensor):
        x = x.detach().to(device='cpu', dtype=dtype)
    else:
        x = torch.as_tensor(np.asarray(x, dtype=np.float64), dtype=dtype)

    if x.dim() not in (1, 2):
        raise ValueError(f"Expected 1D or 2D input, got {x.dim()}D")

    actual = x.shape[-1]
    if actual != n_features:
        raise DimensionMismatchError(actual, n_features)

    return x


def is_singular(X: Tensor) -> bool:
    """Whether every entry of the matrix has the same value."""
    if X.numel() == 0:
        return False
    return bool((X == X.reshape(-1)[0]).all())


def check_positive_int(value: Any, name: str) -> int:
    """Validate a strictly positive integer parameter."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfigurationError(f"{name} must be an int, got {type(value).__name__}")
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value}")
    return int(value)


def check_positive_float(value: Any, name: str) -> float:
    """Validate a strictly positive, finite real parameter."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a real number, got {value!r}")
    if not np.isfinite(value) or value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive and finite, got {value}")
    return value


def check_empty_cluster_policy(policy: Optional[str]) -> str:
    """Validate the empty-cluster policy name."""
    if policy not in EMPTY_CLUSTER_POLICIES:
        raise InvalidConfigurationError(
            f"Unknown empty cluster policy {policy!r}; expected one of "
            f"{', '.join(EMPTY_CLUSTER_POLICIES)}")
    return policy
