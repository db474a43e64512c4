"""
Nearest-seed grid partitioning.

Every cell of the grid is assigned to the seed closest to it by Manhattan
distance. Ties go to the seed with the lowest index.

Grids are numpy arrays of shape ``(width, height)`` indexed ``[x, y]``.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

import numpy as np
import structlog

from .seeds import SeedPoint, validate_grid_size

logger = structlog.get_logger()

UNASSIGNED = -1

Coord = Tuple[int, int]


@dataclass
class Region:
    """
    One territory of the map.

    Created by the partitioner and then filled in place by the later
    stages: the boundary tracer appends ``edges``, the simplifier writes
    ``vertices`` and the triangulator writes ``triangles``.
    """
    index: int
    seed: SeedPoint
    membership: np.ndarray  # uint8 (width, height), 1 where the cell belongs here

    edges: List[Coord] = field(default_factory=list)
    vertices: List[Coord] = field(default_factory=list)
    triangles: List[int] = field(default_factory=list)

    # Mirrors ``edges`` for constant-time membership checks during tracing
    _edge_set: Set[Coord] = field(default_factory=set, repr=False)

    @property
    def width(self) -> int:
        return self.membership.shape[0]

    @property
    def height(self) -> int:
        return self.membership.shape[1]

    @property
    def color(self) -> Tuple[float, float, float]:
        return self.seed.color

    @property
    def cell_count(self) -> int:
        return int(self.membership.sum())

    def contains(self, x: int, y: int) -> bool:
        """Check if an in-bounds cell belongs to this region."""
        return self.membership[x, y] == 1

    def has_edge(self, x: int, y: int) -> bool:
        return (x, y) in self._edge_set

    def add_edge(self, x: int, y: int) -> None:
        """Append a boundary cell to the trace."""
        coord = (x, y)
        if coord in self._edge_set:
            raise ValueError(f"Edge {coord} already recorded for region {self.index}")
        self.edges.append(coord)
        self._edge_set.add(coord)

    def reset_geometry(self) -> None:
        """Drop traced edges and everything derived from them."""
        self.edges = []
        self._edge_set = set()
        self.vertices = []
        self.triangles = []


def label_grid(seeds: Sequence[SeedPoint], width: int, height: int) -> np.ndarray:
    """
    Compute the owning seed index of every cell.

    Args:
        seeds: Seed points in index order
        width: Grid width
        height: Grid height

    Returns:
        int32 array of shape (width, height); ``UNASSIGNED`` everywhere
        when there are no seeds
    """
    validate_grid_size(width, height)
    labels = np.full((width, height), UNASSIGNED, dtype=np.int32)
    if not seeds or width == 0 or height == 0:
        return labels

    xs = np.arange(width, dtype=np.int64)[:, None]
    ys = np.arange(height, dtype=np.int64)[None, :]

    best = np.full((width, height), np.iinfo(np.int64).max, dtype=np.int64)
    for i, seed in enumerate(seeds):
        distance = np.abs(xs - seed.x) + np.abs(ys - seed.y)
        # Strict less-than keeps the earlier seed on ties
        closer = distance < best
        best[closer] = distance[closer]
        labels[closer] = i

    return labels


def partition_grid(seeds: Sequence[SeedPoint], width: int, height: int,
                   labels: Optional[np.ndarray] = None) -> List[Region]:
    """
    Split the grid into one region per seed.

    Args:
        seeds: Seed points in index order
        width: Grid width
        height: Grid height
        labels: Precomputed output of ``label_grid`` for the same inputs

    Returns:
        Regions in seed order, each with its membership grid
    """
    if labels is None:
        labels = label_grid(seeds, width, height)

    regions = []
    if width == 0 or height == 0:
        logger.info("Grid has no cells, no regions created", width=width, height=height)
        return regions

    for i, seed in enumerate(seeds):
        membership = (labels == i).astype(np.uint8)
        regions.append(Region(index=i, seed=seed, membership=membership))

    logger.info("Grid partitioned", regions=len(regions), width=width, height=height)
    return regions
