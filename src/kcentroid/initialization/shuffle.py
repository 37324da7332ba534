"""
Seeded shuffle initialization.

Shuffles the full record index range under a deterministic seed and takes
the first k positions as the initial representatives.
"""

from typing import Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..config import DEFAULT_RANDOM_STATE
from ..exceptions import InvalidConfigurationError

Seed = Union[int, torch.Generator, None]


def make_generator(seed: Seed = None) -> torch.Generator:
    """Build a fresh CPU generator from an int seed or a generator's state.

    A passed generator is copied, never advanced.
    """
    gen = torch.Generator()
    if seed is None:
        gen.manual_seed(DEFAULT_RANDOM_STATE)
    elif isinstance(seed, torch.Generator):
        gen.set_state(seed.get_state())
    elif isinstance(seed, int) and not isinstance(seed, bool):
        gen.manual_seed(seed)
    else:
        raise InvalidConfigurationError(
            f"Seed must be an int or torch.Generator, got {type(seed)}")
    return gen


def check_cluster_count(n_points: int, n_clusters: int) -> None:
    """Validate 0 < k <= m."""
    if n_clusters <= 0:
        raise InvalidConfigurationError(
            f"n_clusters must be positive, got {n_clusters}")
    if n_clusters > n_points:
        raise InvalidConfigurationError(
            f"Cannot create {n_clusters} clusters from {n_points} points")


def shuffle_indices(n_points: int, n_clusters: int, seed: Seed = None) -> Tensor:
    """Deterministically shuffle 0..m-1 and return the first k indices.

    Args:
        n_points: number of records m
        n_clusters: number of clusters k
        seed: int, torch.Generator or None (package default seed)

    Returns:
        (k,) long tensor of distinct indices; identical inputs always
        produce the identical sequence
    """
    check_cluster_count(n_points, n_clusters)
    gen = make_generator(seed)
    return torch.randperm(n_points, generator=gen)[:n_clusters]


class ShuffleInit(InitializationStrategy):
    """Random initialization by selecting records without replacement."""

    def __init__(self, seed: Seed = None):
        """
        Args:
            seed: Random seed; a generator is snapshotted immediately
        """
        # Snapshot so later use of the caller's generator changes nothing here
        self._seed = make_generator(seed)

    def select(self, n_points: int, n_clusters: int) -> Tensor:
        return shuffle_indices(n_points, n_clusters, self._seed)

    def validate(self, n_points: int, n_clusters: int) -> None:
        check_cluster_count(n_points, n_clusters)

    def __repr__(self) -> str:
        return "ShuffleInit()"
