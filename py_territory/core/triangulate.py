"""
Ear-clipping triangulation of simple polygons.

Works on polygons in either winding order. Output is a flat index buffer
with three indices per triangle, all referring to positions in the input
vertex sequence.
"""

from typing import List, Sequence, Tuple

import structlog

from .partition import Region

logger = structlog.get_logger()

EPSILON = 1e-9

Point = Tuple[float, float]


def signed_area(points: Sequence[Point]) -> float:
    """
    Calculate signed area of a polygon.

    Positive for counter-clockwise order (y axis pointing up).
    """
    n = len(points)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i][0] * points[j][1] - points[j][0] * points[i][1]
    return area / 2.0


def _cross(o: Point, a: Point, b: Point) -> float:
    """Cross product of OA and OB; positive for a left (CCW) turn."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _point_in_triangle(p: Point, a: Point, b: Point, c: Point) -> bool:
    """Check if p is inside triangle abc or on its border."""
    d1 = _cross(a, b, p)
    d2 = _cross(b, c, p)
    d3 = _cross(c, a, p)

    has_neg = d1 < -EPSILON or d2 < -EPSILON or d3 < -EPSILON
    has_pos = d1 > EPSILON or d2 > EPSILON or d3 > EPSILON
    return not (has_neg and has_pos)


def _is_ear(points: Sequence[Point], ring: List[int], k: int, orientation: int) -> bool:
    m = len(ring)
    prev_i, curr_i, next_i = ring[k - 1], ring[k], ring[(k + 1) % m]
    a, b, c = points[prev_i], points[curr_i], points[next_i]

    # Ear tip must be strictly convex with respect to the polygon's winding
    if _cross(a, b, c) * orientation <= EPSILON:
        return False

    for other in ring:
        if other in (prev_i, curr_i, next_i):
            continue
        if _point_in_triangle(points[other], a, b, c):
            return False
    return True


def triangulate(vertices: Sequence[Sequence[float]], counter_clockwise: bool = True) -> List[int]:
    """
    Triangulate a simple polygon by ear clipping.

    Args:
        vertices: Ordered polygon vertices, no closing duplicate
        counter_clockwise: Winding of the emitted triangles

    Returns:
        Flat list of vertex indices, 3 per triangle. Empty for fewer than
        three vertices or a polygon without area.
    """
    n = len(vertices)
    if n < 3:
        return []

    points = [(float(v[0]), float(v[1])) for v in vertices]
    area = signed_area(points)
    if abs(area) < EPSILON:
        logger.debug("Degenerate polygon skipped", vertices=n)
        return []

    orientation = 1 if area > 0 else -1
    flip = counter_clockwise != (orientation > 0)

    indices: List[int] = []

    def emit(a: int, b: int, c: int) -> None:
        if flip:
            indices.extend((a, c, b))
        else:
            indices.extend((a, b, c))

    ring = list(range(n))
    while len(ring) > 3:
        m = len(ring)
        ear = next((k for k in range(m) if _is_ear(points, ring, k, orientation)), None)
        if ear is None:
            # Only reachable for self-touching outlines from an open trace
            logger.debug("No ear found, clipping first vertex", remaining=m)
            ear = 0
        emit(ring[ear - 1], ring[ear], ring[(ear + 1) % m])
        ring.pop(ear)

    emit(*ring)
    return indices


def triangulate_region(region: Region, counter_clockwise: bool = True) -> List[int]:
    """Triangulate ``region.vertices`` into ``region.triangles``."""
    region.triangles = triangulate(region.vertices, counter_clockwise)
    if len(region.vertices) >= 3 and not region.triangles:
        logger.warning("Region polygon has no area", region=region.index,
                       vertices=len(region.vertices))
    return region.triangles


def triangulate_all(regions: List[Region], counter_clockwise: bool = True) -> None:
    for region in regions:
        triangulate_region(region, counter_clockwise)
        logger.debug("Region triangulated", region=region.index,
                     triangles=len(region.triangles) // 3)

    logger.info("Regions triangulated", regions=len(regions),
                triangles=sum(len(r.triangles) for r in regions) // 3)
