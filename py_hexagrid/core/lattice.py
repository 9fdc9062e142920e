"""
Triangular point lattice filling a regular hexagon.

Points are laid out column by column. Column ``x`` holds
``column_height(x, side_size)`` points, the middle column being the
tallest. Coordinates come straight out of a closed-form formula so the
hexagon always has circumradius 1, corners at (0, +-1), and no
normalization pass is needed afterwards.
"""

import math
from typing import Tuple

import numpy as np
import structlog

logger = structlog.get_logger()

# sqrt(3) / 2, the minimal diameter / maximal diameter ratio of a hexagon
SIDE_LENGTH = math.sqrt(3) / 2


def validate_side_size(side_size: int) -> None:
    """Reject hexagon sizes the lattice cannot be built for."""
    if isinstance(side_size, bool) or not isinstance(side_size, (int, np.integer)):
        raise ValueError(
            f"Hexagrid: side_size must be an integer, got {type(side_size).__name__}"
        )
    if side_size < 2:
        raise ValueError(
            f"Hexagrid: side_size must be greater than or equal to 2, got {side_size}"
        )


def column_count(side_size: int) -> int:
    return side_size * 2 - 1


def column_height(x: int, side_size: int) -> int:
    """Number of lattice points in column ``x``."""
    if x < side_size:
        return side_size + x
    return side_size * 3 - 2 - x


def lattice_point_count(side_size: int) -> int:
    return sum(column_height(x, side_size) for x in range(column_count(side_size)))


def build_lattice(side_size: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the hexagon lattice.

    A point is on the boundary when it sits in the first or last column,
    or at the top or bottom of its column.

    Args:
        side_size: Hexagon radius in lattice rows (>= 2)

    Returns:
        Tuple of ([x, y] coordinates array, boundary flags array)
    """
    validate_side_size(side_size)

    n_columns = column_count(side_size)
    max_height = n_columns
    ratio = side_size - 1

    coordinates = []
    boundary = []
    for x in range(n_columns):
        height = column_height(x, side_size)
        delta_height = side_size - height * 0.5
        for y in range(height):
            coordinates.append([
                (x - side_size + 1) * SIDE_LENGTH / ratio,
                (y + delta_height - max_height / 2) / ratio,
            ])
            boundary.append(
                x == 0 or x == n_columns - 1 or y == 0 or y == height - 1
            )

    logger.debug("Lattice built", side_size=side_size, points=len(coordinates))
    return np.array(coordinates, dtype=np.float64), np.array(boundary, dtype=bool)
