"""Assignment strategies for the k-centroid engine."""

from .hard import HardAssignment

__all__ = [
    'HardAssignment'
]
