"""
Road graph module

- Models: Point and Way data structures
- Geodesy: haversine distance and initial bearing
- GeoGraph: vertices, edges, nearest-vertex search
- PriorityAdapter: min-queue of point ids for graph searches
"""

from .models import Point, Way
from .errors import PointNotFoundError, EmptyGraphError
from .graph_db import GeoGraph
from .priority import PriorityAdapter

__all__ = [
    "Point",
    "Way",
    "PointNotFoundError",
    "EmptyGraphError",
    "GeoGraph",
    "PriorityAdapter",
]
