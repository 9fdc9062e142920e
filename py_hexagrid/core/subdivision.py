"""
Subdivision of base quads and leftover triangles into final quads.

Every shape gets a centroid point and one midpoint per edge; it is then
fanned into one small quad per edge. Midpoints are shared through an
edge-key map so neighbouring shapes reuse the same point and the final
mesh has no cracks.
"""

from typing import Dict, List, Sequence, Tuple

import structlog

from .quad_pairing import BaseQuad
from .triangulation import Triangle

logger = structlog.get_logger()

Quad = Tuple[int, int, int, int]


def edge_key(index_a: int, index_b: int) -> Tuple[int, int]:
    """Canonical key of an undirected edge."""
    return (index_a, index_b) if index_a < index_b else (index_b, index_a)


class MeshBuilder:
    """
    Growable point store used while subdividing.

    Holds point coordinates and boundary flags as plain lists so that
    centroids and midpoints can be appended cheaply, plus the edge-key map
    from undirected edges to their midpoint index.
    """

    def __init__(self, coordinates: Sequence[Sequence[float]], boundary: Sequence[bool]):
        self.coordinates: List[List[float]] = [[float(x), float(y)] for x, y in coordinates]
        self.boundary: List[bool] = [bool(flag) for flag in boundary]
        self.midpoints: Dict[Tuple[int, int], int] = {}
        self.quads: List[Quad] = []

    def __len__(self):
        return len(self.coordinates)

    def add_point(self, x: float, y: float, is_boundary: bool) -> int:
        self.coordinates.append([x, y])
        self.boundary.append(is_boundary)
        return len(self.coordinates) - 1

    def add_centroid(self, indices: Sequence[int]) -> int:
        count = len(indices)
        x = sum(self.coordinates[i][0] for i in indices) / count
        y = sum(self.coordinates[i][1] for i in indices) / count
        return self.add_point(x, y, False)

    def midpoint(self, index_a: int, index_b: int) -> int:
        """Index of the midpoint of edge (a, b), created on first request."""
        key = edge_key(index_a, index_b)
        index = self.midpoints.get(key)
        if index is None:
            point_a = self.coordinates[index_a]
            point_b = self.coordinates[index_b]
            index = self.add_point(
                (point_a[0] + point_b[0]) / 2.0,
                (point_a[1] + point_b[1]) / 2.0,
                self.boundary[index_a] and self.boundary[index_b],
            )
            self.midpoints[key] = index
        return index

    def subdivide(self, indices: Sequence[int]) -> None:
        """
        Fan a polygon around its centroid into ``len(indices)`` quads.

        Quad ``j`` is (centroid, midpoint of edge j, vertex j+1,
        midpoint of edge j+1).
        """
        count = len(indices)
        center = self.add_centroid(indices)
        middles = [
            self.midpoint(indices[j], indices[(j + 1) % count])
            for j in range(count)
        ]
        for j in range(count):
            next_index = (j + 1) % count
            self.quads.append(
                (center, middles[j], indices[next_index], middles[next_index])
            )


def subdivide_mesh(builder: MeshBuilder, base_quads: List[BaseQuad],
                   triangles: List[Triangle]) -> List[Quad]:
    """
    Subdivide all base quads, then all still-active triangles.

    Args:
        builder: Point store seeded with the lattice points, grown in place
        base_quads: Quads produced by triangle pairing
        triangles: All lattice triangles; only active ones are subdivided

    Returns:
        Final quads in creation order
    """
    for quad in base_quads:
        builder.subdivide(quad.vertices)

    leftover = 0
    for triangle in triangles:
        if triangle.active:
            builder.subdivide(triangle.vertices)
            leftover += 1

    logger.info("Subdivision finished",
                points=len(builder), quads=len(builder.quads),
                midpoints=len(builder.midpoints), leftover_triangles=leftover)
    return builder.quads
