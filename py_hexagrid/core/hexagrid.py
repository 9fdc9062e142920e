"""Hexagon quad mesh generation."""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

import numpy as np
import structlog
from scipy.sparse import csr_matrix

from ..config import Settings, settings
from . import relaxation
from .alea_prng import AleaPRNG
from .lattice import build_lattice, validate_side_size
from .neighbors import adjacency_matrix, build_neighbors
from .quad_pairing import BaseQuad, RandomSource, pair_triangles, validate_search_iteration_count
from .subdivision import MeshBuilder, Quad, subdivide_mesh
from .triangulation import Triangle, triangulate

logger = structlog.get_logger()


class HexagridConfig(NamedTuple):
    """Configuration for hexagon mesh generation."""
    side_size: int
    search_iteration_count: int = 100
    force_circle_shape: bool = False

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None,
                      side_size: Optional[int] = None) -> "HexagridConfig":
        """Build a config from application settings, optionally overriding the size."""
        config = config or settings
        return cls(
            side_size=config.default_side_size if side_size is None else side_size,
            search_iteration_count=config.search_iteration_count,
            force_circle_shape=config.force_circle_shape,
        )


@dataclass
class Hexagrid:
    """
    Quad mesh filling a hexagon.

    Points are identified by their index. ``points`` and ``boundary`` are
    parallel arrays; every other structure references points by index.
    After construction only the relaxation methods change anything, and
    they only move points.
    """
    side_size: int
    points: np.ndarray                # points[i] = [x, y]
    boundary: np.ndarray              # boundary[i] = True if on the hexagon perimeter
    quads: List[Quad]                 # final quads: center, midpoint, vertex, midpoint
    neighbors: List[List[int]]        # neighbors[i] = points sharing a quad edge with i

    # Intermediate structures, kept for introspection
    triangles: List[Triangle] = field(default_factory=list)
    base_quads: List[BaseQuad] = field(default_factory=list)
    edge_midpoints: Dict[Tuple[int, int], int] = field(default_factory=dict)
    search_iteration_count: int = 0

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_quads(self) -> int:
        return len(self.quads)

    def relax(self) -> None:
        """One uniform smoothing sweep over interior points."""
        relaxation.relax(self.points, self.boundary, self.neighbors)

    def relax_weighted(self) -> None:
        """One distance-weighted smoothing sweep over interior points."""
        relaxation.relax_weighted(self.points, self.boundary, self.neighbors)

    def relax_side(self) -> None:
        """One soft correction of boundary points toward the unit circle."""
        relaxation.relax_side(self.points, self.boundary)

    def force_circle_shape(self) -> None:
        relaxation.force_circle_shape(self.points, self.boundary)

    def adjacency_matrix(self) -> csr_matrix:
        return adjacency_matrix(self.neighbors)


def resolve_random_source(random_source: Optional[RandomSource] = None,
                          seed: Any = None) -> RandomSource:
    """
    Pick the random source used for triangle pairing.

    An explicit source wins, then a seed (or the configured default seed)
    for a reproducible Alea generator, then the platform generator.
    """
    if random_source is not None:
        return random_source
    if seed is None:
        seed = settings.default_seed
    if seed is not None:
        return AleaPRNG(seed)
    return random.random


def generate_hexagrid(config: HexagridConfig,
                      random_source: Optional[RandomSource] = None,
                      seed: Any = None) -> Hexagrid:
    """
    Generate a hexagon-shaped quad mesh.

    Pipeline: lattice, triangulation, random pairing of adjacent triangles
    into base quads, subdivision of every base quad and leftover triangle
    into small quads, neighbor graph, and the optional circle snap.

    Args:
        config: Mesh configuration
        random_source: Callable returning floats in [0, 1)
        seed: Seed for an Alea generator when no random source is given

    Returns:
        The finished mesh

    Raises:
        ValueError: If ``side_size < 2`` or ``search_iteration_count < 1``
    """
    validate_side_size(config.side_size)
    validate_search_iteration_count(config.search_iteration_count)

    logger.info("Generating hexagrid",
                side_size=config.side_size,
                search_iteration_count=config.search_iteration_count,
                force_circle_shape=config.force_circle_shape,
                seed=seed)

    rng = resolve_random_source(random_source, seed)

    coordinates, boundary = build_lattice(config.side_size)
    triangles = triangulate(config.side_size)
    logger.info("Lattice triangulated",
                lattice_points=len(coordinates), triangles=len(triangles))

    base_quads = pair_triangles(triangles, rng, config.search_iteration_count)

    builder = MeshBuilder(coordinates, boundary)
    quads = subdivide_mesh(builder, base_quads, triangles)

    neighbors = build_neighbors(len(builder), quads)

    grid = Hexagrid(
        side_size=config.side_size,
        points=np.array(builder.coordinates, dtype=np.float64),
        boundary=np.array(builder.boundary, dtype=bool),
        quads=quads,
        neighbors=neighbors,
        triangles=triangles,
        base_quads=base_quads,
        edge_midpoints=builder.midpoints,
        search_iteration_count=config.search_iteration_count,
    )

    if config.force_circle_shape:
        grid.force_circle_shape()

    logger.info("Hexagrid generated", points=grid.n_points, quads=grid.n_quads)
    return grid


def generate_from_settings(side_size: Optional[int] = None, config: Optional[Settings] = None,
                           random_source: Optional[RandomSource] = None) -> Hexagrid:
    """Generate a mesh using the application settings for every unset option."""
    config = config or settings
    grid_config = HexagridConfig.from_settings(config, side_size)
    return generate_hexagrid(grid_config, random_source=random_source,
                             seed=config.default_seed)
