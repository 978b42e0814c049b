"""
Map database facade

Bundles the road graph, the location indexes and the tile rasterer behind the
query interface used by the map viewer's service layer:

  - vertices / adjacent / distance / bearing / closest / lon / lat
  - raster: tile grid for a viewport
  - locations: exact-name lookup
  - locations_by_prefix: autocomplete
"""

from typing import List, Optional, Set

from loguru import logger

from .config import MapConfig, get_config, validate_config
from .graph import GeoGraph
from .models import BoundingBox, GraphSummary, LocationRecord, RasterResult
from .osm import GraphBuilder
from .raster import Rasterer
from .search import NameIndex, PrefixIndex


class MapDatabase:
    """
    Read-only view over a fully built map

    Usage:
        db = MapDatabase.load("data/berkeley.osm")
        node = db.closest(lon=-122.26, lat=37.87)
        tiles = db.raster(BoundingBox(ullon=..., ullat=..., lrlon=..., lrlat=...), width=1024)
    """

    def __init__(
        self,
        graph: GeoGraph,
        names: NameIndex,
        prefixes: PrefixIndex,
        rasterer: Optional[Rasterer] = None,
    ):
        self.graph = graph
        self.names = names
        self.prefixes = prefixes
        self.rasterer = rasterer or Rasterer()

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        config: Optional[MapConfig] = None,
        cache_dir: Optional[str] = None,
    ) -> "MapDatabase":
        """
        Build a map database from a local OSM file, or from Overpass

        Args:
            path: OSM XML / Overpass JSON file (defaults to config.osm_path)
            config: Configuration (defaults to the global config)
            cache_dir: Overpass response cache directory

        Returns:
            Built MapDatabase. With no file configured the road network for
            the raster root box is fetched from Overpass.
        """
        config = config or get_config()
        validate_config(config)

        builder = GraphBuilder(config, cache_dir=cache_dir)
        path = path or config.osm_path
        if path:
            graph, names, prefixes = builder.from_file(path)
        else:
            raster = config.raster
            root = BoundingBox(
                ullon=raster.root_ullon, ullat=raster.root_ullat,
                lrlon=raster.root_lrlon, lrlat=raster.root_lrlat,
            )
            graph, names, prefixes = builder.from_overpass(root)

        db = cls(graph, names, prefixes, Rasterer(config.raster))
        logger.info(f"Map database ready: {db.summary()}")
        return db

    # ------------------------------------------------------------------
    # Graph queries
    # ------------------------------------------------------------------

    def vertices(self) -> Set[int]:
        return self.graph.vertices()

    def adjacent(self, v: int) -> Set[int]:
        return self.graph.adjacent(v)

    def distance(self, v: int, w: int) -> float:
        return self.graph.distance(v, w)

    def bearing(self, v: int, w: int) -> float:
        return self.graph.bearing(v, w)

    def closest(self, lon: float, lat: float) -> int:
        return self.graph.closest(lon, lat)

    def lon(self, v: int) -> float:
        return self.graph.lon(v)

    def lat(self, v: int) -> float:
        return self.graph.lat(v)

    # ------------------------------------------------------------------
    # Tiles and search
    # ------------------------------------------------------------------

    def raster(self, box: BoundingBox, width: float) -> RasterResult:
        return self.rasterer.get_map_raster(box, width)

    def locations(self, name: Optional[str]) -> List[LocationRecord]:
        return self.names.lookup(name)

    def locations_by_prefix(self, prefix: Optional[str]) -> List[str]:
        return self.prefixes.lookup(prefix)

    def summary(self) -> GraphSummary:
        ways = list(self.graph.ways())
        return GraphSummary(
            points=len(self.graph),
            ways=len(ways),
            valid_ways=sum(1 for w in ways if w.valid),
            location_names=len(self.names),
            prefixes=len(self.prefixes),
        )
