"""
Randomized pairing of adjacent triangles into base quads.

This is a greedy matching over the triangle adjacency graph, not a maximum
matching. A triangle is sampled at random; if it is still active, it is
merged with the first active triangle sharing an edge with it. Pairing
stops once a sampling round spends its whole retry budget, or once every
active triangle left has no active neighbour to pair with.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np
import structlog

from .triangulation import Triangle

logger = structlog.get_logger()

RandomSource = Callable[[], float]


@dataclass
class BaseQuad:
    """Quad made of two merged triangles, vertices in cycle order."""
    v0: int
    v1: int
    v2: int
    v3: int

    @property
    def vertices(self) -> Tuple[int, int, int, int]:
        return (self.v0, self.v1, self.v2, self.v3)


def validate_search_iteration_count(search_iteration_count: int) -> None:
    """Reject retry budgets that are not positive integers."""
    if (isinstance(search_iteration_count, bool)
            or not isinstance(search_iteration_count, (int, np.integer))):
        raise ValueError(
            "Hexagrid: search_iteration_count must be an integer, "
            f"got {type(search_iteration_count).__name__}"
        )
    if search_iteration_count < 1:
        raise ValueError(
            "Hexagrid: search_iteration_count must be a positive integer, "
            f"got {search_iteration_count}"
        )


def build_triangle_adjacency(triangles: List[Triangle]) -> List[List[int]]:
    """
    Build edge-sharing adjacency between triangles.

    Returns:
        ``adjacency[i]`` = sorted indices of triangles sharing an edge with i
    """
    edge_triangles = defaultdict(list)
    for i, triangle in enumerate(triangles):
        a, b, c = triangle.vertices
        for u, v in ((a, b), (b, c), (c, a)):
            edge_triangles[(min(u, v), max(u, v))].append(i)

    adjacency = [set() for _ in range(len(triangles))]
    for sharing in edge_triangles.values():
        for i in sharing:
            adjacency[i].update(j for j in sharing if j != i)

    return [sorted(neighbors) for neighbors in adjacency]


def find_adjacent_triangles(triangles: List[Triangle], tri_index: int,
                            adjacency: Optional[List[List[int]]] = None) -> List[int]:
    """
    Find active triangles sharing an edge with ``triangles[tri_index]``.

    Args:
        triangles: All triangles
        tri_index: Triangle to find neighbours for
        adjacency: Precomputed ``build_triangle_adjacency`` result; without
            it every triangle is scanned

    Returns:
        Indices in ascending order, so the first entry is the first match
        in scan order
    """
    if adjacency is not None:
        return [i for i in adjacency[tri_index] if triangles[i].active]

    triangle = triangles[tri_index]
    adjacents = []
    for i, other in enumerate(triangles):
        if i == tri_index or not other.active:
            continue
        if triangle.is_adjacent(other):
            adjacents.append(i)
    return adjacents


def merge_triangles(first: Triangle, second: Triangle) -> BaseQuad:
    """
    Merge two adjacent triangles into a base quad.

    The four distinct vertex indices are sorted and visited as 0, 2, 3, 1.
    On the hexagon lattice the shared edge always lands on positions
    (0, 3) or (1, 2) of the sorted list, so that visiting order alternates
    shared and exclusive vertices and walks the quad boundary.
    """
    indices = sorted(set(first.vertices) | set(second.vertices))
    if len(indices) != 4:
        raise ValueError(
            f"Triangles {first.vertices} and {second.vertices} do not share exactly one edge"
        )
    return BaseQuad(indices[0], indices[2], indices[3], indices[1])


def sample_active_triangle(triangles: List[Triangle], random_source: RandomSource,
                           search_iteration_count: int) -> int:
    """
    Sample triangles until an active one comes up or the budget runs out.

    Returns:
        Index of the sampled triangle, or -1 when the round used up all
        ``search_iteration_count`` attempts
    """
    n_triangles = len(triangles)
    search_count = 0
    while True:
        tri_index = int(random_source() * n_triangles)
        search_count += 1
        if search_count >= search_iteration_count or triangles[tri_index].active:
            break

    # reaching the budget ends pairing even when the last draw was active
    if search_count >= search_iteration_count:
        return -1
    return tri_index


def pair_triangles(triangles: List[Triangle], random_source: RandomSource,
                   search_iteration_count: int) -> List[BaseQuad]:
    """
    Pair adjacent active triangles into base quads.

    Paired triangles are marked inactive in place. Triangles left active
    are subdivided on their own later.

    Args:
        triangles: Lattice triangles, mutated in place
        random_source: Callable returning floats in [0, 1)
        search_iteration_count: Retry budget per sampling round (> 0)

    Returns:
        Base quads in creation order
    """
    validate_search_iteration_count(search_iteration_count)

    base_quads = []
    if not triangles:
        return base_quads

    adjacency = build_triangle_adjacency(triangles)
    active_count = sum(1 for triangle in triangles if triangle.active)
    # active triangles whose neighbours are all consumed; they stay unpaired for good
    isolated = set()
    rounds = 0

    while len(isolated) < active_count:
        rounds += 1
        tri_index = sample_active_triangle(triangles, random_source, search_iteration_count)
        if tri_index < 0:
            break

        adjacents = find_adjacent_triangles(triangles, tri_index, adjacency)
        if not adjacents:
            isolated.add(tri_index)
            continue

        first = triangles[tri_index]
        second = triangles[adjacents[0]]
        base_quads.append(merge_triangles(first, second))
        first.active = False
        second.active = False
        active_count -= 2

    logger.info("Triangle pairing finished",
                base_quads=len(base_quads), leftover_triangles=active_count,
                rounds=rounds)
    return base_quads
