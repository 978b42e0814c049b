"""
Graph lookup errors
"""


class PointNotFoundError(KeyError):
    """Raised when a point id is not present in the graph"""

    def __init__(self, point_id):
        super().__init__(point_id)
        self.point_id = point_id

    def __str__(self):
        return f"Point {self.point_id} not found in graph"


class EmptyGraphError(ValueError):
    """Raised when a nearest-vertex query runs against a graph with no live points"""
