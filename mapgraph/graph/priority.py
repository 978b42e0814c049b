"""
Min-priority queue over graph points

Priorities are held in the queue's own mapping rather than written onto the
shared Point objects, so independent searches over the same graph never see
each other's state.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Tuple

from .graph_db import GeoGraph


class PriorityAdapter:
    """Min-ordering of point ids keyed by a per-queue priority"""

    def __init__(self, graph: GeoGraph):
        self.graph = graph
        self._priorities: Dict[int, float] = {}
        self._heap: List[Tuple[float, int, int]] = []
        self._counter = itertools.count()

    def push(self, point_id: int, priority: Optional[float] = None) -> None:
        """
        Add a point, or change its priority if already queued

        Args:
            point_id: Id of a point in the graph
            priority: Queue key; defaults to the point's stored priority (+inf)

        Raises:
            PointNotFoundError: If the point is not in the graph
        """
        point = self.graph.point(point_id)
        if priority is None:
            priority = point.priority
        self._priorities[point_id] = priority
        heapq.heappush(self._heap, (priority, point_id, next(self._counter)))

    def update(self, point_id: int, priority: float) -> None:
        self.push(point_id, priority)

    def priority(self, point_id: int) -> float:
        return self._priorities[point_id]

    def pop(self) -> Tuple[int, float]:
        """
        Remove and return the queued point with the smallest priority

        Ties are broken by the smaller point id.

        Raises:
            IndexError: If the queue is empty
        """
        self._discard_stale()
        if not self._heap:
            raise IndexError("pop from an empty PriorityAdapter")
        priority, point_id, _ = heapq.heappop(self._heap)
        del self._priorities[point_id]
        return point_id, priority

    def peek(self) -> Tuple[int, float]:
        self._discard_stale()
        if not self._heap:
            raise IndexError("peek into an empty PriorityAdapter")
        priority, point_id, _ = self._heap[0]
        return point_id, priority

    def _discard_stale(self) -> None:
        # Entries superseded by a later push/update, or already popped
        while self._heap:
            priority, point_id, _ = self._heap[0]
            if self._priorities.get(point_id) == priority:
                return
            heapq.heappop(self._heap)

    def __len__(self) -> int:
        return len(self._priorities)

    def __bool__(self) -> bool:
        return bool(self._priorities)

    def __contains__(self, point_id) -> bool:
        return point_id in self._priorities
