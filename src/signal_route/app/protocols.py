from typing import Protocol, runtime_checkable

from signal_route.domain.entities.geography import DirectedEdge, NodeId, RoadGraph
from signal_route.domain.entities.results import (
    NoPath,
    RouteFound,
    SampleFound,
    SamplerExhausted,
)


# ------------- Mechanics --------------------
@runtime_checkable
class NodeLocator(Protocol):
    """Snap a free (lat, lon) coordinate to the closest graph node, or None if too far."""

    snap_tolerance_m: float

    def nearest(self, lat: float, lon: float) -> NodeId | None: ...


@runtime_checkable
class CostModel(Protocol):
    """
    Incremental cost of traversing one directed edge.
    arrival_cost is the best known cost at edge.source; policies may ignore it.
    Must return a value >= 0.
    Units: meters for distance policies, seconds for time policies.
    """

    unit: str

    def __call__(self, edge: DirectedEdge, arrival_cost: float) -> float: ...


@runtime_checkable
class ShortestPathEngine(Protocol):
    def shortest(
        self, graph: RoadGraph, start: NodeId, goal: NodeId, cost: CostModel
    ) -> RouteFound | NoPath: ...
    def search(
        self, graph: RoadGraph, start: NodeId, goal: NodeId, cost: CostModel
    ) -> tuple[RouteFound | NoPath, int]:
        """Like shortest(), also returning how many nodes were settled."""


@runtime_checkable
class PathSampler(Protocol):
    """Best-effort path from bounded random walks; never claims optimality."""

    def sample(
        self, graph: RoadGraph, start: NodeId, goal: NodeId, rng
    ) -> SampleFound | SamplerExhausted: ...
