"""
Core territory map generation functionality.
"""

from .alea_prng import AleaPRNG
from .seeds import SeedPoint, generate_seed_points, seed_points_from_string, validate_zone_count
from .partition import Region, label_grid, partition_grid
from .boundary import is_on_map, is_edge, edge_count, trace_boundary
from .simplify import simplify_edges, find_vertices
from .triangulate import triangulate, signed_area
from .territory import MapConfig, RegionMesh, TerritoryMap, generate_territory_map, to_world

__all__ = ['AleaPRNG', 'SeedPoint', 'generate_seed_points', 'seed_points_from_string',
           'validate_zone_count', 'Region', 'label_grid', 'partition_grid',
           'is_on_map', 'is_edge', 'edge_count', 'trace_boundary',
           'simplify_edges', 'find_vertices', 'triangulate', 'signed_area',
           'MapConfig', 'RegionMesh', 'TerritoryMap', 'generate_territory_map', 'to_world']
