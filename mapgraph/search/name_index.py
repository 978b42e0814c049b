"""
Exact-name index of map locations
"""

from typing import Dict, List, Optional

from ..graph.models import Point
from ..models import LocationRecord


class NameIndex:
    """Maps a location name to the points registered under it, newest first"""

    def __init__(self):
        self._locations: Dict[str, List[Point]] = {}

    def add_location(self, name: str, point: Point) -> None:
        self._locations.setdefault(name, []).insert(0, point)

    def lookup(self, name: Optional[str]) -> List[LocationRecord]:
        """
        Records for every point stored under name

        The record's display name comes from the point's "name" tag and may
        differ from the lookup key. Unknown or missing names give an empty list.
        """
        if name is None:
            return []
        return [
            LocationRecord(lat=p.lat, lon=p.lon, name=p.name, id=p.id)
            for p in self._locations.get(name, ())
        ]

    def names(self) -> List[str]:
        return sorted(self._locations)

    def __len__(self) -> int:
        return len(self._locations)
