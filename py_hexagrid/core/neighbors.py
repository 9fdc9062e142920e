"""Point adjacency derived from the final quads."""

from typing import List, Sequence

import numpy as np
import structlog
from scipy.sparse import coo_matrix, csr_matrix

logger = structlog.get_logger()


def build_neighbors(n_points: int, quads: Sequence[Sequence[int]]) -> List[List[int]]:
    """
    Build the symmetric neighbor lists of every point.

    Each cyclic pair of consecutive quad vertices is an edge. Neighbors are
    kept in first-seen order without duplicates.

    Args:
        n_points: Number of points in the mesh
        quads: Final quads as 4-tuples of point indices

    Returns:
        ``neighbors[i]`` = list of points sharing a quad edge with point i
    """
    neighbors = [[] for _ in range(n_points)]
    seen = [set() for _ in range(n_points)]

    for quad in quads:
        for j in range(4):
            index1 = quad[j]
            index2 = quad[(j + 1) & 3]
            if index2 not in seen[index1]:
                seen[index1].add(index2)
                neighbors[index1].append(index2)
            if index1 not in seen[index2]:
                seen[index2].add(index1)
                neighbors[index2].append(index1)

    logger.debug("Neighbors built", points=n_points,
                 edges=sum(len(n) for n in neighbors) // 2)
    return neighbors


def adjacency_matrix(neighbors: Sequence[Sequence[int]]) -> csr_matrix:
    """Sparse 0/1 adjacency matrix of the neighbor graph."""
    n_points = len(neighbors)
    rows = [i for i, neighbor in enumerate(neighbors) for _ in neighbor]
    cols = [j for neighbor in neighbors for j in neighbor]
    data = np.ones(len(rows), dtype=np.int8)
    return coo_matrix((data, (rows, cols)), shape=(n_points, n_points)).tocsr()
