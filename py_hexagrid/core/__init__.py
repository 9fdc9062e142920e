"""
Core mesh generation functionality.
"""

from .alea_prng import AleaPRNG
from .hexagrid import Hexagrid, HexagridConfig, generate_hexagrid, generate_from_settings
from .relaxation import relax_grid
from .mesh_analysis import validate_hexagrid, quad_areas, total_area, nominal_hexagon_area

__all__ = ['AleaPRNG', 'Hexagrid', 'HexagridConfig', 'generate_hexagrid',
           'generate_from_settings', 'relax_grid', 'validate_hexagrid',
           'quad_areas', 'total_area', 'nominal_hexagon_area']
