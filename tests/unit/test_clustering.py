"""Tests for the clustering module.

Tests the greedy Jaccard strategy that groups repeated class-set patterns
before recipe synthesis.
"""

import numpy as np
import pytest

from tw2panda.normalizers.hashing import class_set_id, compute_content_hash
from tw2panda.similarity import GreedyJaccardClustering, jaccard_matrix


def set_similarity(left: set[str], right: set[str]) -> float:
    """Reference Jaccard similarity computed directly on the sets."""
    union = left | right
    return len(left & right) / len(union) if union else 1.0


def overlapping_sets(shared: int, total: int) -> tuple[set[str], set[str]]:
    """Two sets whose Jaccard similarity is exactly shared / total."""
    only = (total - shared) // 2
    common = {f"c{i}" for i in range(shared)}
    left = common | {f"a{i}" for i in range(only)}
    right = common | {f"b{i}" for i in range(total - shared - only)}
    return left, right


@pytest.fixture
def clustering():
    """Create a clustering instance with the default threshold."""
    return GreedyJaccardClustering(min_similarity=0.5)


class TestHashing:
    """Tests for class-set identity."""

    def test_class_set_id_ignores_order_and_repeats(self):
        """Test identity depends only on the set of classes."""
        assert class_set_id(["b", "a", "a"]) == class_set_id(["a", "b"])
        assert class_set_id(["a"]) != class_set_id(["a", "b"])
        assert len(class_set_id(["a"])) == 16

    def test_content_hash(self):
        """Test SHA256 hex digest."""
        assert len(compute_content_hash("x")) == 64


class TestJaccardMatrix:
    """Tests for the vectorized similarity matrix."""

    def test_matches_pairwise_jaccard(self):
        """Test the matrix equals pairwise set similarity."""
        sets = [{"a", "b"}, {"b", "c"}, {"x"}, set()]
        matrix = jaccard_matrix(sets)
        for i, left in enumerate(sets):
            for j, right in enumerate(sets):
                assert matrix[i, j] == pytest.approx(set_similarity(left, right))

    def test_empty_sets(self):
        """Test two empty sets are identical and an empty set matches nothing else."""
        matrix = jaccard_matrix([set(), set(), {"a"}])
        assert matrix[0, 1] == 1.0
        assert matrix[0, 2] == 0.0

    def test_symmetric_with_unit_diagonal(self):
        """Test basic matrix properties."""
        matrix = jaccard_matrix([{"a"}, {"a", "b"}, {"c"}])
        assert np.allclose(matrix, matrix.T)
        assert np.allclose(np.diag(matrix), 1.0)


class TestGreedyJaccardClustering:
    """Tests for GreedyJaccardClustering."""

    def test_half_overlap_groups(self, clustering):
        """Test similarity of exactly 0.5 joins the seed."""
        left, right = overlapping_sets(50, 100)
        assert set_similarity(left, right) == 0.5
        clusters = clustering.cluster(["p1", "p2"], [left, right])
        assert len(clusters) == 1
        assert clusters[0].items == ["p1", "p2"]

    def test_just_below_threshold_does_not_group(self, clustering):
        """Test similarity of 0.49 stays apart."""
        left, right = overlapping_sets(49, 100)
        assert set_similarity(left, right) == pytest.approx(0.49)
        assert clustering.cluster(["p1", "p2"], [left, right]) == []

    def test_singletons_discarded(self, clustering):
        """Test unmatched patterns produce no cluster."""
        clusters = clustering.cluster(
            ["p1", "p2", "p3"],
            [{"a", "b"}, {"a", "b", "c"}, {"x", "y"}],
        )
        assert [c.items for c in clusters] == [["p1", "p2"]]

    def test_first_seed_claims_members(self, clustering):
        """Test greedy order: a pattern joins the first qualifying seed."""
        a = {"a", "b", "c", "d"}
        b = {"a", "b", "c", "d", "e", "f"}  # 4/6 with a
        c = {"c", "d", "e", "f"}  # 2/6 with a, 4/6 with b
        clusters = clustering.cluster(["a", "b", "c"], [a, b, c])
        assert [cl.items for cl in clusters] == [["a", "b"]]
        assert clusters[0].seed == "a"

    def test_multiple_clusters_in_discovery_order(self, clustering):
        """Test clusters are numbered in seed order."""
        clusters = clustering.cluster(
            ["x1", "y1", "x2", "y2"],
            [{"x", "x1"}, {"y", "y1"}, {"x", "x2", "x1"}, {"y", "y1", "y2"}],
        )
        assert [c.items for c in clusters] == [["x1", "x2"], ["y1", "y2"]]
        assert [c.cluster_id for c in clusters] == [0, 1]
        assert all(c.size == 2 for c in clusters)

    def test_average_similarity(self, clustering):
        """Test average internal similarity of a pair."""
        clusters = clustering.cluster(["p1", "p2"], [{"a", "b"}, {"a", "b", "c"}])
        assert clusters[0].avg_internal_similarity == pytest.approx(2 / 3)

    def test_length_mismatch_raises(self, clustering):
        """Test misaligned inputs are rejected."""
        with pytest.raises(ValueError):
            clustering.cluster(["p1"], [{"a"}, {"b"}])

    def test_too_few_items(self, clustering):
        """Test fewer items than the minimum cluster size."""
        assert clustering.cluster(["p1"], [{"a"}]) == []
        assert clustering.cluster([], []) == []
