"""
Territory map generation.

Ties the pipeline together: seed placement, nearest-seed partitioning,
boundary tracing, vertex simplification and triangulation. The result is
one mesh per region, expressed in a world frame centred on the grid.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .boundary import trace_all
from .partition import UNASSIGNED, Region, label_grid, partition_grid
from .seeds import SeedPoint, generate_seed_points, validate_grid_size, validate_zone_count
from .simplify import simplify_all
from .triangulate import triangulate_all

logger = structlog.get_logger()


class MapConfig(NamedTuple):
    """Configuration for territory map generation."""
    width: int
    height: int
    zone_count: int = 10
    seed: str = ""


def to_world(x: float, y: float, width: int, height: int, depth: float = 0.0) -> Tuple[float, float, float]:
    """
    Map a grid coordinate into the world frame.

    The grid is centred on the origin; half dimensions use integer
    division, so odd sizes are offset by half a cell.
    """
    return x - width // 2, y - height // 2, depth


@dataclass
class RegionMesh:
    """Renderable output for one region."""
    index: int
    color: Tuple[float, float, float]
    seed: Tuple[int, int]
    world_seed: Tuple[float, float, float]
    vertices: np.ndarray   # (V, 3) float32 world coordinates
    outline: np.ndarray    # (2V,) float32 x/y pairs for collision shapes
    triangles: np.ndarray  # (3T,) int32 indices into vertices

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3


class TerritoryMap:
    """
    Generates a territory map from a seed string.

    Each call to ``generate`` discards previous results and rebuilds every
    region from scratch.
    """

    def __init__(self, config: MapConfig, counter_clockwise: bool = True):
        validate_zone_count(config.zone_count)
        validate_grid_size(config.width, config.height)

        self.config = config
        self.counter_clockwise = counter_clockwise
        self.seeds: List[SeedPoint] = []
        self.regions: List[Region] = []
        self.labels: Optional[np.ndarray] = None

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def generate(self, prng: Optional[AleaPRNG] = None) -> List[Region]:
        """
        Run the full pipeline.

        Args:
            prng: Generator to draw seed points from; defaults to one
                seeded with ``config.seed``

        Returns:
            Regions in seed order with edges, vertices and triangles filled in
        """
        config = self.config
        logger.info("Generating territory map", width=config.width, height=config.height,
                    zone_count=config.zone_count, seed=config.seed)

        if prng is None:
            prng = AleaPRNG(config.seed)

        self.seeds = generate_seed_points(config.width, config.height, config.zone_count, prng)
        self.build_regions(self.seeds)
        return self.regions

    def build_regions(self, seeds: List[SeedPoint]) -> List[Region]:
        """Run every stage after seed placement for the given seeds."""
        self.seeds = list(seeds)
        self.labels = label_grid(self.seeds, self.width, self.height)
        self.regions = partition_grid(self.seeds, self.width, self.height, self.labels)

        trace_all(self.regions)
        simplify_all(self.regions)
        triangulate_all(self.regions, self.counter_clockwise)

        logger.info("Territory map generated", regions=len(self.regions))
        return self.regions

    def label_grid(self) -> np.ndarray:
        """Owning region index per cell, shape (width, height)."""
        if self.labels is None:
            raise ValueError("Map not generated. Call generate() first!")
        return self.labels

    def region_at(self, x: int, y: int) -> Optional[Region]:
        """Region owning cell (x, y), or None off the map or when unassigned."""
        labels = self.label_grid()
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        index = labels[x, y]
        if index == UNASSIGNED:
            return None
        return self.regions[index]

    def build_mesh(self, region: Region, depth: float = 0.0) -> RegionMesh:
        """Convert a region's polygon into world-space mesh buffers."""
        world = [to_world(x, y, self.width, self.height, depth) for x, y in region.vertices]
        vertices = np.array(world, dtype=np.float32).reshape(-1, 3)
        outline = vertices[:, :2].reshape(-1).copy()

        return RegionMesh(
            index=region.index,
            color=region.color,
            seed=(region.seed.x, region.seed.y),
            world_seed=to_world(region.seed.x, region.seed.y, self.width, self.height, depth),
            vertices=vertices,
            outline=outline,
            triangles=np.array(region.triangles, dtype=np.int32),
        )

    def meshes(self, depth: float = 0.0) -> List[RegionMesh]:
        """Mesh buffers for every generated region."""
        return [self.build_mesh(region, depth) for region in self.regions]


def generate_territory_map(config: MapConfig) -> TerritoryMap:
    """Build and generate a territory map in one call."""
    territory = TerritoryMap(config)
    territory.generate()
    return territory
