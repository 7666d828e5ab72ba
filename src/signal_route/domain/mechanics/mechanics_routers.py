import heapq
import math

from signal_route.app.protocols import CostModel, ShortestPathEngine
from signal_route.domain.entities.geography import DirectedEdge, NodeId, RoadGraph
from signal_route.domain.entities.results import NoPath, RouteFound


def _reconstruct(prev: dict[NodeId, DirectedEdge], start: NodeId, goal: NodeId):
    nodes, edges = [goal], []
    cur = goal
    while cur != start:
        e = prev[cur]
        edges.append(e)
        cur = e.source
        nodes.append(cur)
    nodes.reverse()
    edges.reverse()
    return nodes, edges


class DijkstraRouter(ShortestPathEngine):
    """
    Single-pair Dijkstra with lazy deletion and early exit on the goal.
    All per-query state is local, so one router can serve any number of
    queries over the same read-only graph.
    """

    def shortest(
        self, graph: RoadGraph, start: NodeId, goal: NodeId, cost: CostModel
    ) -> RouteFound | NoPath:
        return self.search(graph, start, goal, cost)[0]

    def search(
        self, graph: RoadGraph, start: NodeId, goal: NodeId, cost: CostModel
    ) -> tuple[RouteFound | NoPath, int]:
        """Like shortest(), also returning how many nodes were settled."""
        for n in (start, goal):
            if n not in graph:
                raise KeyError(f"node {n!r} is not in the graph")

        dist: dict[NodeId, float] = {start: 0.0}
        prev: dict[NodeId, DirectedEdge] = {}
        frontier: list[tuple[float, NodeId]] = [(0.0, start)]
        settled = 0

        while frontier:
            d, u = heapq.heappop(frontier)
            if d > dist.get(u, math.inf):
                continue  # stale entry
            settled += 1
            if u == goal:
                break
            for edge in graph.neighbors(u):
                w = cost(edge, d)
                if w < 0:
                    raise ValueError(f"negative edge cost {w} on {edge.source}->{edge.target}")
                cand = d + w
                if cand < dist.get(edge.target, math.inf):
                    dist[edge.target] = cand
                    prev[edge.target] = edge
                    heapq.heappush(frontier, (cand, edge.target))

        total = dist.get(goal, math.inf)
        if math.isinf(total):
            return NoPath(start, goal), settled

        nodes, edges = _reconstruct(prev, start, goal)
        return (
            RouteFound(
                nodes=tuple(nodes),
                cost=total,
                unit=cost.unit,
                length_m=sum(e.length_m for e in edges),
            ),
            settled,
        )
