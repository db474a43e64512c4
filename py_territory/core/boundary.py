"""
Boundary tracing for grid regions.

A region's boundary cells are its member cells with at least one
orthogonal neighbour that is off the map or owned by another region. The
tracer finds one such cell and greedily walks from boundary cell to
boundary cell, producing the ordered edge list the polygon is built from.

The walk is a heuristic. It does not check that it returned to its start,
so thin or branching shapes can yield an open or partial contour. That
output is accepted as-is by the rest of the pipeline.
"""

from typing import List, Optional, Tuple

import numpy as np
import structlog

from .partition import Coord, Region

logger = structlog.get_logger()

# Neighbour offsets in scan order: x from left to right, y from low to high
ORTHOGONAL_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)
                      if (dx == 0) != (dy == 0)]
DIAGONAL_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)
                    if dx != 0 and dy != 0]

# Candidates with more open sides than this are corner or cul-de-sac cells
CORNER_EDGE_COUNT = 2


def is_on_map(x: int, y: int, width: int, height: int) -> bool:
    """Check if a coordinate lies inside the grid."""
    return 0 <= x < width and 0 <= y < height


def edge_count(membership: np.ndarray, x: int, y: int) -> int:
    """
    Count the orthogonal neighbours of (x, y) outside the region.

    A neighbour counts when it is off the map or not a member.
    """
    width, height = membership.shape
    count = 0
    for dx, dy in ORTHOGONAL_OFFSETS:
        nx, ny = x + dx, y + dy
        if not is_on_map(nx, ny, width, height) or membership[nx, ny] == 0:
            count += 1
    return count


def is_edge(membership: np.ndarray, x: int, y: int) -> bool:
    """Check if (x, y) touches the outside of its region orthogonally."""
    return edge_count(membership, x, y) > 0


def find_start_cell(region: Region) -> Optional[Coord]:
    """
    Find the cell the boundary walk starts from.

    Scans columns from the seed's x to the right edge and, within each
    column, rows from the seed's y upward. Cells before the seed position
    are never visited, so a region whose boundary lies entirely below or
    left of its seed yields no start cell.

    Returns:
        First unrecorded boundary cell, or None
    """
    membership = region.membership
    width, height = membership.shape
    for x in range(region.seed.x, width):
        for y in range(region.seed.y, height):
            if (membership[x, y] == 1 and not region.has_edge(x, y)
                    and is_edge(membership, x, y)):
                return x, y
    return None


def _scan(region: Region, x: int, y: int, offsets: List[Tuple[int, int]],
          best: Optional[Coord]) -> Optional[Coord]:
    """
    Pick a candidate among one ring of neighbours.

    The first candidate found wins unless a later one has more than
    ``CORNER_EDGE_COUNT`` open sides, in which case it takes over.
    """
    membership = region.membership
    width, height = membership.shape
    for dx, dy in offsets:
        nx, ny = x + dx, y + dy
        if not is_on_map(nx, ny, width, height):
            continue
        if membership[nx, ny] != 1 or region.has_edge(nx, ny):
            continue
        count = edge_count(membership, nx, ny)
        if count == 0:
            continue
        if best is None or count > CORNER_EDGE_COUNT:
            best = (nx, ny)
    return best


def next_edge_cell(region: Region, x: int, y: int) -> Optional[Coord]:
    """
    Choose the boundary cell the walk moves to from (x, y).

    Orthogonal neighbours are scanned first, then diagonal ones. A diagonal
    neighbour only displaces an orthogonal choice through the corner rule.
    """
    best = _scan(region, x, y, ORTHOGONAL_OFFSETS, None)
    return _scan(region, x, y, DIAGONAL_OFFSETS, best)


def trace_boundary(region: Region) -> List[Coord]:
    """
    Walk the boundary of a region and record it in ``region.edges``.

    Iterates with an explicit current cell rather than recursing, so long
    boundaries do not hit the interpreter's recursion limit.

    Args:
        region: Region with its membership grid populated

    Returns:
        The region's edge list
    """
    region.reset_geometry()

    start = find_start_cell(region)
    if start is None:
        logger.debug("No boundary start cell", region=region.index,
                     seed=(region.seed.x, region.seed.y))
        return region.edges

    current = start
    while current is not None:
        region.add_edge(*current)
        current = next_edge_cell(region, *current)

    last = region.edges[-1]
    closed = abs(last[0] - start[0]) <= 1 and abs(last[1] - start[1]) <= 1
    if not closed:
        logger.debug("Boundary walk ended away from its start", region=region.index,
                     start=start, end=last, edges=len(region.edges))

    return region.edges


def trace_all(regions: List[Region]) -> None:
    """Trace the boundary of every region."""
    for region in regions:
        trace_boundary(region)
        logger.debug("Boundary traced", region=region.index, edges=len(region.edges))

    logger.info("Boundaries traced", regions=len(regions),
                edges=sum(len(r.edges) for r in regions))
