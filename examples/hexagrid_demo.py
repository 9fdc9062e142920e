#!/usr/bin/env python3
"""
Demonstration of hexagon quad mesh generation.

This script shows:
1. Seeded, reproducible generation
2. How the retry budget changes pairing density
3. Uniform and weighted relaxation
4. The circle snap and the soft side relaxation
"""

from py_hexagrid.config import configure_logging, settings
from py_hexagrid.core import AleaPRNG, HexagridConfig, generate_hexagrid, relax_grid
from py_hexagrid.core.mesh_analysis import area_statistics, degree_histogram, validate_hexagrid


def main():
    configure_logging(settings)

    print("=== Hexagrid Demo ===\n")

    # 1. Seeded generation
    print("1. Generating a seeded grid...")
    config = HexagridConfig(side_size=6, search_iteration_count=30)
    grid = generate_hexagrid(config, random_source=AleaPRNG("demo_seed"))
    validate_hexagrid(grid)
    print(f"   - Triangles: {len(grid.triangles)}")
    print(f"   - Base quads: {len(grid.base_quads)}")
    print(f"   - Leftover triangles: {sum(1 for t in grid.triangles if t.active)}")
    print(f"   - Points: {grid.n_points}, quads: {grid.n_quads}")
    print(f"   - Degrees: {degree_histogram(grid)}")

    # 2. Retry budget
    print("\n2. Comparing retry budgets...")
    for budget in (1, 3, 10, 100):
        budget_grid = generate_hexagrid(
            HexagridConfig(side_size=6, search_iteration_count=budget),
            random_source=AleaPRNG("budget"),
        )
        print(f"   - budget={budget:>3}: {len(budget_grid.base_quads)} base quads")

    # 3. Relaxation
    print("\n3. Relaxing...")
    before = area_statistics(grid)
    relax_grid(grid, 20, weighted=True)
    after = area_statistics(grid)
    print(f"   - Area cv before: {before['cv']:.4f}")
    print(f"   - Area cv after 20 weighted sweeps: {after['cv']:.4f}")

    # 4. Circular border
    print("\n4. Circular border...")
    circle = generate_hexagrid(
        HexagridConfig(side_size=6, search_iteration_count=30, force_circle_shape=True),
        seed="demo_seed",
    )
    relax_grid(circle, 20, weighted=True)
    soft = generate_hexagrid(config, seed="demo_seed")
    relax_grid(soft, 20, weighted=True, relax_sides=True)
    print(f"   - Hard snap total area: {area_statistics(circle)['total']:.4f}")
    print(f"   - Soft side relaxation total area: {area_statistics(soft)['total']:.4f}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
