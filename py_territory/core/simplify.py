"""Reduce traced edge lists to polygon vertices."""

from typing import List, Sequence

import structlog

from .partition import Coord, Region

logger = structlog.get_logger()


def _step(a: Coord, b: Coord) -> Coord:
    return b[0] - a[0], b[1] - a[1]


def simplify_edges(edges: Sequence[Coord]) -> List[Coord]:
    """
    Keep only the cells where the walk changes direction.

    The first and last cells are always kept. A cell in between is kept when
    the step into it differs from the step out of it. Afterwards the first
    vertex is dropped if it sits exactly halfway along the line from the
    last cell to the second cell, since the closing segment passes through it.

    Args:
        edges: Ordered boundary cells

    Returns:
        Ordered polygon vertices, a subsequence of ``edges``
    """
    n = len(edges)
    if n <= 1:
        return list(edges)

    vertices = [edges[0]]
    for i in range(1, n - 1):
        if _step(edges[i - 1], edges[i]) != _step(edges[i], edges[i + 1]):
            vertices.append(edges[i])
    vertices.append(edges[n - 1])

    if len(vertices) > 2 and _step(edges[0], edges[n - 1]) == _step(edges[1], edges[0]):
        del vertices[0]

    return vertices


def find_vertices(region: Region) -> List[Coord]:
    """Simplify a region's edge list into ``region.vertices``."""
    region.vertices = simplify_edges(region.edges)
    return region.vertices


def simplify_all(regions: List[Region]) -> None:
    for region in regions:
        find_vertices(region)
        logger.debug("Vertices found", region=region.index,
                     edges=len(region.edges), vertices=len(region.vertices))

    logger.info("Polygons simplified", regions=len(regions),
                vertices=sum(len(r.vertices) for r in regions))
