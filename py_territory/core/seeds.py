"""Seed point generation for territory maps."""

from typing import List, NamedTuple, Tuple

import structlog

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

MIN_ZONE_COUNT = 1
MAX_ZONE_COUNT = 100


class SeedPoint(NamedTuple):
    """Grid cell a region grows from, with the region's color tag."""
    x: int
    y: int
    color: Tuple[float, float, float]


def validate_zone_count(zone_count: int) -> None:
    """Reject zone counts outside the supported range."""
    if not MIN_ZONE_COUNT <= zone_count <= MAX_ZONE_COUNT:
        raise ValueError(
            f"zone_count must be between {MIN_ZONE_COUNT} and {MAX_ZONE_COUNT}, "
            f"got {zone_count}"
        )


def validate_grid_size(width: int, height: int) -> None:
    """Reject negative grid dimensions. Zero-area grids are allowed."""
    if width < 0 or height < 0:
        raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")


def generate_seed_points(width: int, height: int, zone_count: int,
                         prng: AleaPRNG) -> List[SeedPoint]:
    """
    Place ``zone_count`` seed points on a ``width`` x ``height`` grid.

    Each zone consumes five draws in a fixed order: x, y, then the red,
    green and blue color channels. Keeping that order is what makes a seed
    string reproduce the same map.

    Args:
        width: Grid width in cells
        height: Grid height in cells
        zone_count: Number of seeds, 1..100
        prng: Generator to draw from

    Returns:
        Seed points in generation order
    """
    validate_zone_count(zone_count)
    validate_grid_size(width, height)

    seeds = []
    for _ in range(zone_count):
        x = prng.range(0, width)
        y = prng.range(0, height)
        color = (prng.value(), prng.value(), prng.value())
        seeds.append(SeedPoint(x, y, color))

    logger.info("Seed points generated", count=len(seeds), width=width,
                height=height, seed=prng.seed)
    return seeds


def seed_points_from_string(width: int, height: int, zone_count: int,
                            seed: str) -> List[SeedPoint]:
    """Generate seed points from a seed string."""
    return generate_seed_points(width, height, zone_count, AleaPRNG(seed))
