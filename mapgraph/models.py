"""
Pydantic models for map query requests and results
Field names match the JSON the map front end consumes
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============================================================
# Raster Models
# ============================================================

class BoundingBox(BaseModel):
    """Geographic box given by its upper-left and lower-right corners"""
    ullon: float
    ullat: float
    lrlon: float
    lrlat: float


class RasterResult(BaseModel):
    render_grid: List[List[str]] = Field(default_factory=list)
    raster_ul_lon: float
    raster_ul_lat: float
    raster_lr_lon: float
    raster_lr_lat: float
    depth: int = 0
    query_success: bool = False

    # Inclusive tile column (x) and row (y) bounds of render_grid
    start_x: int = 0
    end_x: int = -1
    start_y: int = 0
    end_y: int = -1


# ============================================================
# Search Models
# ============================================================

class LocationRecord(BaseModel):
    lat: float
    lon: float
    name: Optional[str] = None  # Display name from the point's "name" tag
    id: int


# ============================================================
# Summary Models
# ============================================================

class GraphSummary(BaseModel):
    points: int
    ways: int
    valid_ways: int
    location_names: int
    prefixes: int
