# signal_route/domain/mechanics/mechanics_core.py
import time
from dataclasses import dataclass, field

from signal_route.app.protocols import CostModel, NodeLocator, PathSampler, ShortestPathEngine
from signal_route.domain.entities.geography import NodeId, RoadGraph
from signal_route.domain.entities.results import (
    Comparison,
    NoPath,
    RouteFound,
    SampleResult,
    ShortestResult,
    UnresolvedNode,
)
from signal_route.sim.hooks import NoopHooks, SearchHooks
from signal_route.sim.rng import RNGRegistry


@dataclass
class Mechanics:
    """
    Query façade over one read-only graph: resolves endpoints, runs the
    shortest-path engine and the random-walk baseline, reports to hooks.
    """

    graph: RoadGraph
    locator: NodeLocator
    cost: CostModel
    router: ShortestPathEngine
    sampler: PathSampler
    rng: RNGRegistry = field(default_factory=RNGRegistry)
    hooks: SearchHooks = field(default_factory=NoopHooks)

    # ---------- endpoint resolution

    def resolve_id(self, node_id: NodeId) -> NodeId | UnresolvedNode:
        if node_id in self.graph:
            return node_id
        self.hooks.unresolved(query=node_id, reason="unknown_id")
        return UnresolvedNode(node_id, "unknown_id")

    def resolve_coord(self, lat: float, lon: float) -> NodeId | UnresolvedNode:
        query = f"{lat},{lon}"
        if len(self.graph) == 0:
            self.hooks.unresolved(query=query, reason="empty_graph")
            return UnresolvedNode(query, "empty_graph")
        n = self.locator.nearest(lat, lon)
        if n is None:
            self.hooks.unresolved(query=query, reason="beyond_snap_tolerance")
            return UnresolvedNode(query, "beyond_snap_tolerance")
        return n

    def _resolve_pair(self, start, goal):
        s, g = self.resolve_id(start), self.resolve_id(goal)
        return s if isinstance(s, UnresolvedNode) else g if isinstance(g, UnresolvedNode) else None

    def _resolve_coords(self, start_lat, start_lon, goal_lat, goal_lon):
        s = self.resolve_coord(start_lat, start_lon)
        if isinstance(s, UnresolvedNode):
            return s, None
        g = self.resolve_coord(goal_lat, goal_lon)
        if isinstance(g, UnresolvedNode):
            return g, None
        return s, g

    # ---------- queries by node id

    def shortest(self, start: NodeId, goal: NodeId, *, cost: CostModel | None = None) -> ShortestResult:
        bad = self._resolve_pair(start, goal)
        if bad is not None:
            return bad
        return self._shortest(start, goal, cost or self.cost)

    def sample(self, start: NodeId, goal: NodeId, *, rng=None) -> SampleResult:
        bad = self._resolve_pair(start, goal)
        if bad is not None:
            return bad
        return self._sample(start, goal, rng)

    def compare(self, start: NodeId, goal: NodeId, *, rng=None) -> Comparison | UnresolvedNode:
        """Random-walk baseline and exact shortest path for the same endpoints."""
        bad = self._resolve_pair(start, goal)
        if bad is not None:
            return bad
        result = Comparison(
            start=start,
            goal=goal,
            sampled=self._sample(start, goal, rng),
            shortest=self._shortest(start, goal, self.cost),
        )
        self.hooks.record(result)
        return result

    # ---------- queries by coordinate

    def shortest_between(self, start_lat, start_lon, goal_lat, goal_lon, *, cost=None) -> ShortestResult:
        s, g = self._resolve_coords(start_lat, start_lon, goal_lat, goal_lon)
        if g is None:
            return s
        return self._shortest(s, g, cost or self.cost)

    def compare_between(self, start_lat, start_lon, goal_lat, goal_lon, *, rng=None):
        s, g = self._resolve_coords(start_lat, start_lon, goal_lat, goal_lon)
        if g is None:
            return s
        return self.compare(s, g, rng=rng)

    # ---------- internals

    def _shortest(self, start: NodeId, goal: NodeId, cost: CostModel) -> RouteFound | NoPath:
        kind = type(cost).__name__
        self.hooks.search_start(start=start, goal=goal, cost=kind)
        t0 = time.perf_counter()
        result, settled = self.router.search(self.graph, start, goal, cost)
        self.hooks.search_end(
            start=start,
            goal=goal,
            cost=kind,
            outcome="found" if result.ok else "no_path",
            settled=settled,
            wall_ms=(time.perf_counter() - t0) * 1000.0,
            total=result.cost if result.ok else None,
        )
        return result

    def _sample(self, start: NodeId, goal: NodeId, rng):
        rng = rng if rng is not None else self.rng.substream("sampler", start, goal)
        t0 = time.perf_counter()
        result = self.sampler.sample(self.graph, start, goal, rng)
        self.hooks.sample_end(
            start=start,
            goal=goal,
            trials=result.trials,
            hits=getattr(result, "hits", 0),
            outcome="found" if result.ok else "exhausted",
            wall_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return result
