"""
Smoothing operators applied to a finished mesh.

Every operator does exactly one sweep and only moves points; topology is
never touched. Sweeps update points in place, so later points in a sweep
already see the new positions of earlier ones.
"""

from typing import Sequence, TYPE_CHECKING

import numpy as np
import structlog

if TYPE_CHECKING:
    from .hexagrid import Hexagrid

logger = structlog.get_logger()

# Target radius of the boundary circle
RADIUS = 1.0
SIDE_RELAX_FACTOR = 0.1


def relax(points: np.ndarray, boundary: np.ndarray,
          neighbors: Sequence[Sequence[int]]) -> None:
    """Move every interior point to the mean position of its neighbors."""
    for i in range(len(points)):
        if boundary[i]:
            continue
        neighbor = neighbors[i]
        if not neighbor:
            continue
        points[i] = points[neighbor].mean(axis=0)


def relax_weighted(points: np.ndarray, boundary: np.ndarray,
                   neighbors: Sequence[Sequence[int]]) -> None:
    """
    Move every interior point to the distance-weighted mean of its neighbors.

    The further a neighbor is, the more it attracts the point, so long edges
    shrink and short ones grow. Cell areas vary less than with ``relax`` and
    the mesh converges faster.
    """
    for i in range(len(points)):
        if boundary[i]:
            continue
        neighbor = neighbors[i]
        if not neighbor:
            continue
        positions = points[neighbor]
        weights = np.hypot(positions[:, 0] - points[i, 0], positions[:, 1] - points[i, 1])
        total = weights.sum()
        if total == 0.0:
            continue
        points[i] = (positions * weights[:, None]).sum(axis=0) / total


def relax_side(points: np.ndarray, boundary: np.ndarray) -> None:
    """
    Nudge boundary points radially toward the unit circle.

    A point at radius ``r`` moves by ``0.1 * (1 - r) * r`` along its radius,
    outward inside the circle and inward outside it.
    """
    for i in range(len(points)):
        if not boundary[i]:
            continue
        distance = RADIUS - np.hypot(points[i, 0], points[i, 1])
        points[i] += points[i] * distance * SIDE_RELAX_FACTOR


def force_circle_shape(points: np.ndarray, boundary: np.ndarray) -> None:
    """Snap boundary points onto the unit circle."""
    norms = np.hypot(points[boundary, 0], points[boundary, 1])
    points[boundary] /= norms[:, None]


def relax_grid(grid: "Hexagrid", iterations: int, weighted: bool = False,
               relax_sides: bool = False) -> "Hexagrid":
    """
    Run several relaxation sweeps on a grid.

    Args:
        grid: Grid to relax in place
        iterations: Number of sweeps
        weighted: Use distance-weighted sweeps instead of uniform ones
        relax_sides: Follow each sweep with a side sweep

    Returns:
        The same grid, for chaining
    """
    logger.info("Starting relaxation", iterations=iterations,
                weighted=weighted, relax_sides=relax_sides)

    for _ in range(iterations):
        if weighted:
            grid.relax_weighted()
        else:
            grid.relax()
        if relax_sides:
            grid.relax_side()

    logger.info("Relaxation complete", iterations=iterations)
    return grid
