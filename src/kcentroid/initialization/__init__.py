"""Initialization strategies for clustering algorithms."""

from .shuffle import ShuffleInit, shuffle_indices, make_generator
from .fixed import FixedIndicesInit

__all__ = [
    'ShuffleInit',
    'FixedIndicesInit',
    'shuffle_indices',
    'make_generator'
]
