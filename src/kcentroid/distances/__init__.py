"""Distance metrics for clustering algorithms."""

from .euclidean import EuclideanDistance, WeightedEuclideanDistance
from .minkowski import ManhattanDistance, ChebyshevDistance, MinkowskiDistance
from .cosine import CosineDistance
from .custom import CallableDistance

__all__ = [
    'EuclideanDistance',
    'WeightedEuclideanDistance',
    'ManhattanDistance',
    'ChebyshevDistance',
    'MinkowskiDistance',
    'CosineDistance',
    'CallableDistance'
]
