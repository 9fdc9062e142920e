"""Tests for the point neighbor graph."""

import numpy as np
from py_hexagrid.core.neighbors import adjacency_matrix, build_neighbors


class TestBuildNeighbors:
    """Test neighbor list construction."""

    def test_single_quad(self):
        neighbors = build_neighbors(4, [(0, 1, 2, 3)])
        assert neighbors == [[1, 3], [0, 2], [1, 3], [2, 0]]

    def test_shared_edge_not_duplicated(self):
        """Test that an edge used by two quads is listed once."""
        neighbors = build_neighbors(6, [(0, 1, 2, 3), (1, 4, 5, 2)])

        assert sorted(neighbors[1]) == [0, 2, 4]
        assert sorted(neighbors[2]) == [1, 3, 5]
        assert all(len(n) == len(set(n)) for n in neighbors)

    def test_isolated_points(self):
        neighbors = build_neighbors(5, [(0, 1, 2, 3)])
        assert neighbors[4] == []

    def test_symmetric(self):
        quads = [(0, 1, 2, 3), (1, 4, 5, 2), (3, 2, 5, 6)]
        neighbors = build_neighbors(7, quads)
        for a, neighbor in enumerate(neighbors):
            for b in neighbor:
                assert a in neighbors[b]


class TestAdjacencyMatrix:
    """Test sparse adjacency export."""

    def test_matrix_matches_lists(self):
        neighbors = build_neighbors(6, [(0, 1, 2, 3), (1, 4, 5, 2)])
        matrix = adjacency_matrix(neighbors)

        assert matrix.shape == (6, 6)
        assert matrix.nnz == sum(len(n) for n in neighbors)
        dense = matrix.toarray()
        np.testing.assert_array_equal(dense, dense.T)
        assert dense[1, 4] == 1
        assert dense[0, 4] == 0
