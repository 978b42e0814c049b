"""
mapgraph - road graph, tile selection and location search for a map viewer
"""

from .config import MapConfig, RasterConfig, get_config, validate_config
from .graph import GeoGraph, PriorityAdapter, PointNotFoundError, EmptyGraphError
from .models import BoundingBox, RasterResult, LocationRecord
from .raster import Rasterer
from .search import NameIndex, PrefixIndex
from .pipeline import MapDatabase

__version__ = "1.0.0"

__all__ = [
    "MapConfig",
    "RasterConfig",
    "get_config",
    "validate_config",
    "GeoGraph",
    "PriorityAdapter",
    "PointNotFoundError",
    "EmptyGraphError",
    "BoundingBox",
    "RasterResult",
    "LocationRecord",
    "Rasterer",
    "NameIndex",
    "PrefixIndex",
    "MapDatabase",
]
