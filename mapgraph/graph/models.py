"""
Graph data models

Data classes for representing map points (vertices) and ways (roads)
"""

import math
from typing import Dict, List, Set
from dataclasses import dataclass, field


@dataclass
class Point:
    """Represents a graph vertex built from an OSM node"""
    id: int
    lat: float
    lon: float
    tags: Dict[str, str] = field(default_factory=dict)
    neighbors: Set[int] = field(default_factory=set)
    priority: float = math.inf

    @property
    def name(self):
        return self.tags.get("name")


@dataclass
class Way:
    """Represents an OSM way (an ordered run of point ids along a road)"""
    id: int
    tags: Dict[str, str] = field(default_factory=dict)
    valid: bool = False
    node_ids: List[int] = field(default_factory=list)

    def segments(self):
        """Yield consecutive (a, b) id pairs along the way"""
        for a, b in zip(self.node_ids, self.node_ids[1:]):
            yield a, b
