"""Clustering engine and factories."""

from .kcentroid import KCentroidClusterer
from .builder import ClusteringBuilder, create_kmeans, create_kmedoids, create_kmedians

__all__ = [
    'KCentroidClusterer',
    'ClusteringBuilder',
    'create_kmeans',
    'create_kmedoids',
    'create_kmedians'
]
