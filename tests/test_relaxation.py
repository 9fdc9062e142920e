"""Tests for mesh relaxation operators."""

import math

import numpy as np
import pytest
from py_hexagrid.core import AleaPRNG, HexagridConfig, generate_hexagrid, relax_grid
from py_hexagrid.core.hexagrid import Hexagrid
from py_hexagrid.core.mesh_analysis import nominal_hexagon_area, total_area
from py_hexagrid.core.relaxation import force_circle_shape, relax_side


def one_ring(center):
    """One interior point surrounded by six boundary points on the unit circle."""
    angles = [k * math.pi / 3 for k in range(6)]
    points = np.array([center] + [[math.cos(a), math.sin(a)] for a in angles])
    boundary = np.array([False] + [True] * 6)
    neighbors = [list(range(1, 7))] + [[0] for _ in range(6)]
    return Hexagrid(side_size=2, points=points, boundary=boundary,
                    quads=[], neighbors=neighbors)


class TestOneRing:
    """Test sweeps on a hand-built ring."""

    def test_relax_moves_to_mean(self):
        """Test that the interior point moves to the mean of its neighbours."""
        grid = one_ring([0.3, -0.2])
        grid.relax()

        np.testing.assert_allclose(grid.points[0], [0.0, 0.0], atol=1e-9)

    def test_relax_keeps_boundary(self):
        grid = one_ring([0.3, -0.2])
        before = grid.points[1:].copy()
        grid.relax()
        grid.relax_weighted()

        np.testing.assert_array_equal(grid.points[1:], before)

    def test_relax_weighted_at_equilibrium(self):
        """Test that a symmetric ring is a fixed point of the weighted sweep."""
        grid = one_ring([0.0, 0.0])
        grid.relax_weighted()

        np.testing.assert_allclose(grid.points[0], [0.0, 0.0], atol=1e-9)

    def test_relax_weighted_pulls_toward_far_neighbours(self):
        """Test that far neighbours get more weight than near ones."""
        grid = one_ring([0.5, 0.0])
        grid.relax_weighted()

        # the far side of the ring attracts the point past the center
        assert grid.points[0, 0] < 0.0

    def test_point_without_neighbours_stays(self):
        grid = one_ring([0.3, -0.2])
        grid.neighbors[0] = []
        grid.relax()
        grid.relax_weighted()

        np.testing.assert_array_equal(grid.points[0], [0.3, -0.2])

    def test_coincident_neighbours_stay(self):
        """Test that zero total weight leaves the point in place."""
        points = np.array([[0.0, 0.0], [0.0, 0.0]])
        grid = Hexagrid(side_size=2, points=points, boundary=np.array([False, True]),
                        quads=[], neighbors=[[1], [0]])
        grid.relax_weighted()

        assert not np.any(np.isnan(grid.points))


class TestBoundaryOperators:
    """Test side relaxation and the circle snap."""

    def test_relax_side_nudges_toward_circle(self):
        points = np.array([[0.5, 0.0], [0.0, 0.0], [0.0, 1.0]])
        boundary = np.array([True, False, True])
        relax_side(points, boundary)

        np.testing.assert_allclose(points[0], [0.525, 0.0])
        np.testing.assert_allclose(points[1], [0.0, 0.0])
        np.testing.assert_allclose(points[2], [0.0, 1.0])

    def test_relax_side_step_scales_with_radius(self):
        """Test that the radial step is 0.1 * (1 - r) * r."""
        points = np.array([[0.0, 0.25], [0.0, 0.75]])
        relax_side(points, np.array([True, True]))

        np.testing.assert_allclose(points[:, 1], [0.25 + 0.1 * 0.75 * 0.25, 0.75 + 0.1 * 0.25 * 0.75])

    def test_relax_side_outside_circle(self):
        points = np.array([[2.0, 0.0]])
        relax_side(points, np.array([True]))
        np.testing.assert_allclose(points[0], [1.8, 0.0])

    def test_force_circle_shape(self):
        points = np.array([[0.5, 0.0], [0.3, 0.4], [0.1, 0.1]])
        boundary = np.array([True, True, False])
        force_circle_shape(points, boundary)

        np.testing.assert_allclose(points[0], [1.0, 0.0])
        np.testing.assert_allclose(points[1], [0.6, 0.8])
        np.testing.assert_allclose(points[2], [0.1, 0.1])


class TestRelaxGrid:
    """Test relaxation of generated meshes."""

    @pytest.fixture
    def grid(self):
        config = HexagridConfig(side_size=4, search_iteration_count=20)
        return generate_hexagrid(config, random_source=AleaPRNG("relax"))

    def test_topology_unchanged(self, grid):
        quads = list(grid.quads)
        neighbors = [list(n) for n in grid.neighbors]
        n_points = grid.n_points

        relax_grid(grid, 5, weighted=True, relax_sides=True)

        assert grid.quads == quads
        assert grid.neighbors == neighbors
        assert grid.n_points == n_points

    def test_interior_points_move(self, grid):
        before = grid.points.copy()
        relax_grid(grid, 3)

        interior = ~grid.boundary
        assert not np.allclose(grid.points[interior], before[interior])
        np.testing.assert_array_equal(grid.points[grid.boundary], before[grid.boundary])

    @pytest.mark.parametrize("weighted", [False, True])
    def test_area_preserved(self, grid, weighted):
        """Test that smoothing inside a fixed border keeps the covered area."""
        relax_grid(grid, 5, weighted=weighted)
        assert math.isclose(total_area(grid), nominal_hexagon_area(), rel_tol=1e-9)

    def test_points_stay_inside(self, grid):
        relax_grid(grid, 10, weighted=True)
        assert np.all(np.hypot(grid.points[:, 0], grid.points[:, 1]) <= 1.0 + 1e-9)

    def test_returns_grid(self, grid):
        assert relax_grid(grid, 0) is grid
