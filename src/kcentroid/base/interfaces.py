"""
Core interfaces for the k-centroid clustering engine.

The engine is a single concrete loop. Everything variant-specific is
expressed through the abstract classes below, so the loop never depends on
a particular clustering flavour.
"""

from abc import ABC, abstractmethod
from torch import Tensor


class DistanceMetric(ABC):
    """Abstract base class for dissimilarity computations.

    Implementations must be pure and return nonnegative values. Symmetry is
    not required.
    """

    #: Metrics that cannot be vectorized set this so the engine can warn.
    expensive: bool = False

    @abstractmethod
    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        """Compute distances from every point to a single center.

        Args:
            points: (n, d) tensor of points
            center: (d,) tensor

        Returns:
            (n,) tensor of distances
        """
        pass

    def distance(self, u: Tensor, v: Tensor) -> float:
        """Distance between two vectors of equal length."""
        return float(self.compute(u.unsqueeze(0), v)[0])

    def validate(self, dimension: int) -> None:
        """Check that this metric can work on ``dimension``-length vectors.

        Raises:
            InvalidConfigurationError: if it cannot
        """
        pass

    def __call__(self, u: Tensor, v: Tensor) -> float:
        return self.distance(u, v)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CentroidStrategy(ABC):
    """Variant-specific half of the clustering loop.

    A strategy knows how to turn a cluster's members into a representative
    and how much divergence a set of members has from a representative.
    Strategies are only ever called with at least one member.
    """

    #: Short name used in summaries and reprs.
    name: str = 'centroid'

    @abstractmethod
    def cost(self, points: Tensor, representative: Tensor,
             metric: DistanceMetric) -> float:
        """Divergence of a cluster from its representative.

        Args:
            points: (c, d) member points, c >= 1
            representative: (d,) representative the members were assigned to
            metric: distance metric used for assignment

        Returns:
            Nonnegative scalar
        """
        pass

    @abstractmethod
    def update(self, points: Tensor, representative: Tensor,
               metric: DistanceMetric) -> Tensor:
        """Compute the new representative for a cluster.

        Args:
            points: (c, d) member points, c >= 1
            representative: (d,) current representative
            metric: distance metric used for assignment

        Returns:
            (d,) new representative; must not alias ``points``
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class InitializationStrategy(ABC):
    """Abstract base class for choosing the initial representatives."""

    @abstractmethod
    def select(self, n_points: int, n_clusters: int) -> Tensor:
        """Choose the record indices used as initial representatives.

        Args:
            n_points: number of records m
            n_clusters: number of clusters k

        Returns:
            (k,) long tensor of distinct record indices, in label order
        """
        pass

    def initialize(self, points: Tensor, n_clusters: int) -> tuple:
        """Select indices and copy the matching rows.

        Args:
            points: (m, d) data points
            n_clusters: number of clusters k

        Returns:
            indices: (k,) long tensor
            representatives: (k, d) tensor that does not alias ``points``
        """
        indices = self.select(points.shape[0], n_clusters)
        return indices, points[indices].clone()

    def validate(self, n_points: int, n_clusters: int) -> None:
        """Check the strategy can produce ``n_clusters`` indices out of ``n_points``."""
        pass
