"""Clustering of class-set patterns.

The default strategy is greedy and order-dependent: each ungrouped pattern,
in discovery order, seeds a group and absorbs every later ungrouped pattern
whose Jaccard similarity with the seed reaches the threshold. It is a
heuristic and not globally optimal; a pattern joins the first group whose
seed it is close enough to, even if a later seed would fit better.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np


@dataclass
class Cluster:
    """A cluster of similar patterns."""

    cluster_id: int
    items: list[str] = field(default_factory=list)  # Pattern IDs, seed first
    seed: str | None = None
    size: int = 0
    avg_internal_similarity: float = 0.0


def jaccard_matrix(class_sets: Sequence[set[str]]) -> np.ndarray:
    """Pairwise Jaccard similarity of class sets.

    Built from a binary incidence matrix: intersections are ``M @ M.T`` and
    unions follow from the set sizes. Two empty sets count as identical.
    """
    n = len(class_sets)
    vocabulary = sorted(set().union(*class_sets)) if class_sets else []
    index = {cls: i for i, cls in enumerate(vocabulary)}

    incidence = np.zeros((n, len(vocabulary)))
    for row, classes in enumerate(class_sets):
        for cls in classes:
            incidence[row, index[cls]] = 1.0

    intersection = incidence @ incidence.T
    sizes = incidence.sum(axis=1)
    union = sizes[:, None] + sizes[None, :] - intersection

    matrix = np.ones_like(intersection)
    np.divide(intersection, union, out=matrix, where=union > 0)
    return matrix


class ClusteringStrategy(ABC):
    """Interface for grouping patterns by class-set similarity."""

    @abstractmethod
    def cluster(self, item_ids: list[str], class_sets: list[set[str]]) -> list[Cluster]:
        """Group items.

        Args:
            item_ids: Pattern IDs in discovery order.
            class_sets: Class set of each item, aligned with ``item_ids``.

        Returns:
            Clusters of at least the strategy's minimum size.
        """
        ...


class GreedyJaccardClustering(ClusteringStrategy):
    """Single-pass seed clustering on Jaccard similarity."""

    def __init__(self, min_similarity: float = 0.5, min_cluster_size: int = 2):
        """Initialize the strategy.

        Args:
            min_similarity: Similarity to the seed needed to join (inclusive).
            min_cluster_size: Smaller groups are discarded.
        """
        self.min_similarity = min_similarity
        self.min_cluster_size = min_cluster_size

    def cluster(self, item_ids: list[str], class_sets: list[set[str]]) -> list[Cluster]:
        if len(item_ids) != len(class_sets):
            raise ValueError("item_ids and class_sets must have the same length")
        if len(item_ids) < self.min_cluster_size:
            return []

        similarity = jaccard_matrix(class_sets)
        n = len(item_ids)
        grouped = [False] * n
        clusters: list[Cluster] = []

        for seed in range(n):
            if grouped[seed]:
                continue
            grouped[seed] = True
            members = [seed]

            for other in range(n):
                if grouped[other]:
                    continue
                if similarity[seed, other] >= self.min_similarity:
                    members.append(other)
                    grouped[other] = True

            if len(members) < self.min_cluster_size:
                continue

            clusters.append(
                Cluster(
                    cluster_id=len(clusters),
                    items=[item_ids[i] for i in members],
                    seed=item_ids[seed],
                    size=len(members),
                    avg_internal_similarity=self._avg_similarity(members, similarity),
                )
            )

        return clusters

    def _avg_similarity(self, indices: list[int], similarity: np.ndarray) -> float:
        """Average pairwise similarity within a cluster."""
        if len(indices) < 2:
            return 1.0
        block = similarity[np.ix_(indices, indices)]
        count = len(indices) * (len(indices) - 1)
        return float((block.sum() - np.trace(block)) / count)
