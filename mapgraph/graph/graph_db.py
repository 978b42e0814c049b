"""
Road graph

Stores every intersection/road point as a vertex and every road segment as an
undirected edge, and answers geodesic and nearest-vertex queries over it.
"""

import math
import threading
from typing import Dict, Iterator, List, Optional, Set, Tuple

import numpy as np
from loguru import logger

from .errors import EmptyGraphError, PointNotFoundError
from .geodesy import haversine_miles, haversine_miles_many, initial_bearing_deg
from .models import Point, Way

# Relative slack, in miles per mile, within which vectorized distances are
# re-checked with the scalar formula
CLOSEST_TOLERANCE = 1e-9


class GeoGraph:
    """
    Graph of map points and the roads connecting them

    Built once by an ingestion pass (add_point / add_edge / add_way, then a
    single cleanup()) and read-only afterwards.

    Usage:
        graph = GeoGraph()
        graph.add_point(1, 37.87, -122.26)
        graph.add_point(2, 37.88, -122.26)
        graph.add_edge(1, 2)
        graph.cleanup()
        graph.closest(-122.26, 37.875)
    """

    def __init__(self):
        self._points: Dict[int, Point] = {}
        self._live: Set[int] = set()
        self._ways: Dict[int, Way] = {}

        # Sorted id/lon/lat arrays used by closest(); rebuilt after mutation
        self._index_lock = threading.Lock()
        self._index: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add_point(self, point_id: int, lat: float, lon: float, tags: Optional[Dict[str, str]] = None) -> Point:
        """
        Insert or overwrite a point and mark it live

        Overwriting keeps the neighbors already recorded for the id.
        """
        existing = self._points.get(point_id)
        point = Point(id=point_id, lat=lat, lon=lon, tags=dict(tags or {}))
        if existing is not None:
            point.neighbors = existing.neighbors
        self._points[point_id] = point
        self._live.add(point_id)
        self._index = None
        return point

    def add_edge(self, id1: int, id2: int) -> None:
        """Connect two points with an undirected edge (idempotent)"""
        p1 = self.point(id1)
        p2 = self.point(id2)
        p1.neighbors.add(id2)
        p2.neighbors.add(id1)

    def add_way(self, way: Way) -> None:
        self._ways[way.id] = way

    def cleanup(self) -> List[int]:
        """
        Remove every live point that has no neighbors

        Does not guarantee the remaining graph is connected, only that no
        retained point is isolated.

        Returns:
            Ids of the removed points
        """
        isolated = [v for v in self._live if not self._points[v].neighbors]
        for v in isolated:
            del self._points[v]
            self._live.discard(v)
        self._index = None

        logger.info(f"Graph cleanup removed {len(isolated)} isolated points, {len(self._live)} remain")
        return isolated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def vertices(self) -> Set[int]:
        """Ids of all live vertices"""
        return set(self._live)

    def point(self, v: int) -> Point:
        try:
            return self._points[v]
        except KeyError:
            raise PointNotFoundError(v) from None

    def adjacent(self, v: int) -> Set[int]:
        """Ids of the neighbors of v"""
        return set(self.point(v).neighbors)

    def distance(self, v: int, w: int) -> float:
        """Great-circle distance between vertices v and w in miles"""
        pv = self.point(v)
        pw = self.point(w)
        return haversine_miles(pv.lon, pv.lat, pw.lon, pw.lat)

    def bearing(self, v: int, w: int) -> float:
        """Initial bearing from v to w in degrees, in (-180, 180]"""
        pv = self.point(v)
        pw = self.point(w)
        return initial_bearing_deg(pv.lon, pv.lat, pw.lon, pw.lat)

    def closest(self, lon: float, lat: float) -> int:
        """
        Find the live vertex nearest to a location

        Linear scan over the stored coordinates. The vectorized pass only
        narrows the search; candidates within rounding of the minimum are
        re-ranked with haversine_miles, the formula distance() uses, so the
        result agrees with a scalar scan. On an exact distance tie the
        smaller id wins.

        Args:
            lon: Target longitude
            lat: Target latitude

        Returns:
            Id of the nearest live vertex

        Raises:
            EmptyGraphError: If the graph has no live vertices
            ValueError: If lon or lat is not finite
        """
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise ValueError(f"Location must be finite, got ({lon}, {lat})")
        ids, lons, lats = self._coordinate_index()
        if ids.size == 0:
            raise EmptyGraphError("Cannot find the closest vertex in an empty graph")

        distances = haversine_miles_many(lon, lat, lons, lats)
        best = float(np.nanmin(distances))
        near = ids[distances <= best + CLOSEST_TOLERANCE * max(best, 1.0)]
        return min(
            (int(v) for v in near),
            key=lambda v: (haversine_miles(lon, lat, self._points[v].lon, self._points[v].lat), v),
        )

    def lon(self, v: int) -> float:
        return self.point(v).lon

    def lat(self, v: int) -> float:
        return self.point(v).lat

    def way(self, way_id: int) -> Way:
        return self._ways[way_id]

    def ways(self) -> Iterator[Way]:
        return iter(self._ways.values())

    def _coordinate_index(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        index = self._index
        if index is not None:
            return index
        with self._index_lock:
            if self._index is None:
                ids = np.array(sorted(self._live), dtype=np.int64)
                lons = np.array([self._points[v].lon for v in ids.tolist()], dtype=float)
                lats = np.array([self._points[v].lat for v in ids.tolist()], dtype=float)
                self._index = (ids, lons, lats)
            return self._index

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, v) -> bool:
        return v in self._live

    def __repr__(self) -> str:
        return f"GeoGraph(points={len(self._points)}, live={len(self._live)}, ways={len(self._ways)})"
