"""
Graph builder

Runs the one-time ingestion pass: feeds parsed OSM points and ways into the
road graph and the location indexes, then cleans the graph exactly once.
"""

import json
from typing import Dict, List, Optional, Tuple

from loguru import logger

from .api_client import OverpassAPIClient
from .cache import OSMCache
from .parser import OSMResponseParser
from ..config import MapConfig, get_config
from ..graph import GeoGraph, Point, Way
from ..models import BoundingBox
from ..search import NameIndex, PrefixIndex

BuildResult = Tuple[GeoGraph, NameIndex, PrefixIndex]


class GraphBuilder:
    """
    Builds a GeoGraph, NameIndex and PrefixIndex from OSM data

    Sources:
        - OSM XML extract (.osm / .xml)
        - Overpass JSON dump (.json)
        - Live Overpass query for a bounding box (cached to disk when a
          cache directory is configured)
    """

    def __init__(self, config: Optional[MapConfig] = None, cache_dir: Optional[str] = None):
        self.config = config or get_config()
        self.allowed_highway_types = set(self.config.allowed_highway_types)
        self.parser = OSMResponseParser()
        self.cache = OSMCache(cache_dir or self.config.cache_dir)
        self._api_client: Optional[OverpassAPIClient] = None

    @property
    def api_client(self) -> OverpassAPIClient:
        if self._api_client is None:
            self._api_client = OverpassAPIClient(self.config.api)
        return self._api_client

    def from_file(self, path: str) -> BuildResult:
        """Build from a local OSM XML or Overpass JSON file"""
        logger.info(f"Loading OSM data from {path}")
        if path.lower().endswith(".json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise RuntimeError(f"Could not read OSM JSON file {path}: {e}") from e
            points, ways = self.parser.parse_elements(data)
        else:
            points, ways = self.parser.parse_xml(path)
        return self.build(points, ways)

    def from_overpass(self, box: BoundingBox) -> BuildResult:
        """Fetch the road network inside box from Overpass and build from it"""
        data = self.cache.load(box)

        if data is None:
            logger.info(f"Fetching road network for {box} from Overpass")
            query = self.api_client.road_network_query(
                south=box.lrlat, west=box.ullon, north=box.ullat, east=box.lrlon
            )
            data = self.api_client.query(query)
            self.cache.save(box, data)

        points, ways = self.parser.parse_elements(data)
        return self.build(points, ways)

    def build(self, points: Dict[int, Point], ways: List[Way]) -> BuildResult:
        """
        Populate the graph and indexes, then run cleanup once

        Args:
            points: Parsed points keyed by id
            ways: Parsed ways in document order

        Returns:
            Tuple of (graph, name index, prefix index)
        """
        graph = GeoGraph()
        names = NameIndex()
        prefixes = PrefixIndex()

        for point in points.values():
            stored = graph.add_point(point.id, point.lat, point.lon, point.tags)
            name = stored.name
            if name:
                names.add_location(name, stored)
                prefixes.add_word(name)

        missing_refs = 0
        for way in ways:
            way.valid = way.tags.get("highway") in self.allowed_highway_types
            graph.add_way(way)
            if not way.valid:
                continue
            for a, b in way.segments():
                if a in graph and b in graph:
                    graph.add_edge(a, b)
                else:
                    missing_refs += 1

        if missing_refs:
            logger.warning(f"Dropped {missing_refs} road segments referencing unknown nodes")

        valid_ways = sum(1 for w in ways if w.valid)
        logger.info(f"Ingested {len(points)} points, {len(ways)} ways ({valid_ways} roads), "
                    f"{len(names)} location names")

        graph.cleanup()
        return graph, names, prefixes
