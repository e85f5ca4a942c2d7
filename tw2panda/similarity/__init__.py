"""Pattern similarity clustering.

This package provides the clustering strategy interface and the greedy
Jaccard strategy used for recipe inference.
"""

from .clustering import Cluster, ClusteringStrategy, GreedyJaccardClustering, jaccard_matrix

__all__ = [
    "Cluster",
    "ClusteringStrategy",
    "GreedyJaccardClustering",
    "jaccard_matrix",
]
