"""
OpenStreetMap ingestion module

- API client: Overpass API communication
- Cache: Caching of raw Overpass responses
- Parser: Overpass JSON / OSM XML parsing into points and ways
- Builder: Populates the graph and location indexes
"""

from .api_client import OverpassAPIClient
from .cache import OSMCache
from .parser import OSMResponseParser
from .builder import GraphBuilder

__all__ = [
    "OverpassAPIClient",
    "OSMCache",
    "OSMResponseParser",
    "GraphBuilder",
]
