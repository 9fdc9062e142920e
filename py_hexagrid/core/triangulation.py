"""Triangulation of the hexagon lattice."""

from dataclasses import dataclass
from typing import List, Tuple

import structlog

from .lattice import column_height, validate_side_size

logger = structlog.get_logger()


@dataclass
class Triangle:
    """Lattice triangle. ``active`` turns False once paired into a base quad."""
    v0: int
    v1: int
    v2: int
    active: bool = True

    @property
    def vertices(self) -> Tuple[int, int, int]:
        return (self.v0, self.v1, self.v2)

    def shared_vertex_count(self, other: "Triangle") -> int:
        return len(set(self.vertices) & set(other.vertices))

    def is_adjacent(self, other: "Triangle") -> bool:
        """Two triangles are adjacent when they share exactly one edge."""
        return self.shared_vertex_count(other) == 2


def triangulate(side_size: int) -> List[Triangle]:
    """
    Connect each lattice column to the next with alternating up and down triangles.

    Columns grow up to the middle of the hexagon and shrink after it, so the
    left half and the right half use different connectivity patterns.

    Args:
        side_size: Hexagon radius in lattice rows (>= 2)

    Returns:
        List of active triangles, deterministic for a given ``side_size``
    """
    validate_side_size(side_size)

    triangles = []
    offset = 0

    for x in range(side_size * 2 - 2):
        height = column_height(x, side_size)

        if x < side_size - 1:
            # left half: the next column is one point taller
            for y in range(height):
                triangles.append(Triangle(
                    offset + y, offset + y + height, offset + y + height + 1
                ))
                if y >= height - 1:
                    break
                triangles.append(Triangle(
                    offset + y + height + 1, offset + y + 1, offset + y
                ))
        else:
            # right half: the next column is one point shorter
            for y in range(height - 1):
                triangles.append(Triangle(
                    offset + y, offset + y + height, offset + y + 1
                ))
                if y >= height - 2:
                    break
                triangles.append(Triangle(
                    offset + y + 1, offset + y + height, offset + y + height + 1
                ))

        offset += height

    logger.debug("Lattice triangulated", side_size=side_size, triangles=len(triangles))
    return triangles
