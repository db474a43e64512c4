"""FastAPI main application."""

import logging
from typing import List, Optional, Tuple

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.seeds import MAX_ZONE_COUNT, MIN_ZONE_COUNT
from ..core.territory import MapConfig, RegionMesh, TerritoryMap

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(
    title="Territory Map Generator API",
    description="Grid territory partitioning with per-region outlines and meshes",
    version=__version__,
)


# Request/Response models
class MapGenerationRequest(BaseModel):
    """Request to generate a territory map."""

    width: int = Field(settings.default_grid_width, ge=1, le=settings.max_grid_width,
                       description="Grid width in cells")
    height: int = Field(settings.default_grid_height, ge=1, le=settings.max_grid_height,
                        description="Grid height in cells")
    zone_count: int = Field(settings.default_zone_count, ge=MIN_ZONE_COUNT, le=MAX_ZONE_COUNT,
                            description="Number of regions")
    seed: Optional[str] = Field(None, description="Seed string for reproducible generation")
    depth: float = Field(0.0, description="Depth coordinate of emitted vertices")


class RegionResponse(BaseModel):
    """Mesh data for one region."""

    index: int
    color: Tuple[float, float, float]
    seed: Tuple[int, int]
    world_seed: Tuple[float, float, float]
    vertices: List[Tuple[float, float, float]]
    outline: List[float]
    triangles: List[int]


class MapResponse(BaseModel):
    """Generated territory map."""

    width: int
    height: int
    zone_count: int
    seed: str
    regions: List[RegionResponse]


def _region_response(mesh: RegionMesh) -> RegionResponse:
    return RegionResponse(
        index=mesh.index,
        color=mesh.color,
        seed=mesh.seed,
        world_seed=mesh.world_seed,
        vertices=[tuple(v) for v in mesh.vertices.tolist()],
        outline=mesh.outline.tolist(),
        triangles=mesh.triangles.tolist(),
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Territory Map Generator API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/maps/generate", response_model=MapResponse)
def generate_map(request: MapGenerationRequest):
    """Generate a territory map and return every region's mesh."""
    logger.info("Map generation requested", request=request.model_dump())

    seed = request.seed if request.seed is not None else settings.default_seed
    config = MapConfig(
        width=request.width,
        height=request.height,
        zone_count=request.zone_count,
        seed=seed,
    )

    try:
        territory = TerritoryMap(config)
        territory.generate()
    except ValueError as e:
        logger.error("Map generation rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return MapResponse(
        width=config.width,
        height=config.height,
        zone_count=config.zone_count,
        seed=seed,
        regions=[_region_response(mesh) for mesh in territory.meshes(request.depth)],
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
