"""Procedural hexagon-shaped quad mesh generation."""

from .core import AleaPRNG, Hexagrid, HexagridConfig, generate_hexagrid, relax_grid

__version__ = "0.1.0"

__all__ = ['AleaPRNG', 'Hexagrid', 'HexagridConfig', 'generate_hexagrid', 'relax_grid']
