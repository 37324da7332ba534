"""Representative update and cost strategies."""

from .mean import MeanStrategy
from .medoid import MedoidStrategy
from .median import MedianStrategy

__all__ = [
    'MeanStrategy',
    'MedoidStrategy',
    'MedianStrategy'
]
