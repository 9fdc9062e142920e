"""
Diagnostics for generated meshes.

Area and degree statistics used to judge relaxation quality, plus
structural checks of the invariants every generated mesh satisfies.
"""

from collections import Counter
from typing import Dict

import numpy as np
from scipy.sparse.csgraph import connected_components

from .hexagrid import Hexagrid
from .lattice import SIDE_LENGTH


def nominal_hexagon_area(circumradius: float = 1.0) -> float:
    """Area of a regular hexagon: 6 triangles of base r and height r*sqrt(3)/2."""
    return 6 * 0.5 * circumradius * circumradius * SIDE_LENGTH


def quad_areas(grid: Hexagrid) -> np.ndarray:
    """Unsigned area of every final quad (shoelace formula)."""
    if not grid.quads:
        return np.zeros(0)
    corners = grid.points[np.array(grid.quads)]  # (n_quads, 4, 2)
    x = corners[:, :, 0]
    y = corners[:, :, 1]
    x_next = np.roll(x, -1, axis=1)
    y_next = np.roll(y, -1, axis=1)
    return 0.5 * np.abs((x * y_next - x_next * y).sum(axis=1))


def total_area(grid: Hexagrid) -> float:
    return float(quad_areas(grid).sum())


def area_statistics(grid: Hexagrid) -> Dict[str, float]:
    """Summary of quad areas; a lower ``cv`` means more uniform cells."""
    areas = quad_areas(grid)
    if len(areas) == 0:
        return {"count": 0, "total": 0.0, "mean": 0.0, "std": 0.0,
                "min": 0.0, "max": 0.0, "cv": 0.0}
    mean = float(areas.mean())
    std = float(areas.std())
    return {
        "count": int(len(areas)),
        "total": float(areas.sum()),
        "mean": mean,
        "std": std,
        "min": float(areas.min()),
        "max": float(areas.max()),
        "cv": std / mean if mean > 0 else 0.0,
    }


def degree_histogram(grid: Hexagrid, interior_only: bool = False) -> Dict[int, int]:
    """Number of points per neighbor count."""
    counts = Counter(
        len(neighbor) for i, neighbor in enumerate(grid.neighbors)
        if not (interior_only and grid.boundary[i])
    )
    return dict(sorted(counts.items()))


def is_connected(grid: Hexagrid) -> bool:
    n_components, _ = connected_components(grid.adjacency_matrix(), directed=False)
    return n_components == 1


def validate_hexagrid(grid: Hexagrid) -> None:
    """
    Check the structural invariants of a mesh.

    Raises:
        ValueError: Describing the first violated invariant
    """
    n_points = grid.n_points

    if len(grid.boundary) != n_points:
        raise ValueError(
            f"boundary has {len(grid.boundary)} flags for {n_points} points"
        )
    if len(grid.neighbors) != n_points:
        raise ValueError(
            f"neighbors has {len(grid.neighbors)} lists for {n_points} points"
        )

    for i, triangle in enumerate(grid.triangles):
        if len(set(triangle.vertices)) != 3:
            raise ValueError(f"Triangle {i} has repeated vertices {triangle.vertices}")
        if not all(0 <= v < n_points for v in triangle.vertices):
            raise ValueError(f"Triangle {i} references a missing point {triangle.vertices}")

    for i, quad in enumerate(grid.base_quads):
        if not all(0 <= v < n_points for v in quad.vertices):
            raise ValueError(f"Base quad {i} references a missing point {quad.vertices}")

    for i, quad in enumerate(grid.quads):
        if len(set(quad)) != 4:
            raise ValueError(f"Quad {i} has repeated vertices {quad}")
        if not all(0 <= v < n_points for v in quad):
            raise ValueError(f"Quad {i} references a missing point {quad}")

    for a, neighbor in enumerate(grid.neighbors):
        if len(set(neighbor)) != len(neighbor):
            raise ValueError(f"Point {a} has duplicate neighbors")
        for b in neighbor:
            if a not in grid.neighbors[b]:
                raise ValueError(f"Point {a} lists {b} as neighbor, but not vice versa")
