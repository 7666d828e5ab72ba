import math

from signal_route.app.protocols import NodeLocator
from signal_route.domain.entities.geography import NodeId, RoadGraph
from signal_route.domain.mechanics.mechanics_geodesy import haversine_m

SNAP_TOLERANCE_M = 20.0


class NearestNodeLocator(NodeLocator):
    """Linear scan; exact ties resolve to the first node in graph order."""

    def __init__(self, graph: RoadGraph, snap_tolerance_m: float = SNAP_TOLERANCE_M):
        self.G, self.snap_tolerance_m = graph, snap_tolerance_m

    def nearest_with_distance(self, lat: float, lon: float) -> tuple[NodeId | None, float]:
        best, best_d = None, math.inf
        for n in self.G.nodes.values():
            d = haversine_m(lat, lon, n.lat, n.lon)
            if d < best_d:
                best, best_d = n.id, d
        return best, best_d

    def nearest(self, lat: float, lon: float) -> NodeId | None:
        best, d = self.nearest_with_distance(lat, lon)
        return best if d <= self.snap_tolerance_m else None
