import math

from signal_route.app.protocols import PathSampler
from signal_route.domain.entities.geography import NodeId, RoadGraph
from signal_route.domain.entities.results import SampleFound, SamplerExhausted


class RandomWalkSampler(PathSampler):
    """
    Monte Carlo comparison baseline: `trials` independent walks of at most
    `max_steps` uniformly random edges each. Among walks that reach the goal,
    keep the one with the fewest nodes, then the shortest length. The result
    is a best effort, not a shortest path.
    """

    def __init__(self, *, trials: int = 2000, max_steps: int = 1000):
        if trials < 0 or max_steps < 0:
            raise ValueError("trials and max_steps must be >= 0")
        self.trials, self.max_steps = trials, max_steps

    def _walk(self, graph: RoadGraph, start: NodeId, goal: NodeId, rng):
        nodes, length = [start], 0.0
        cur = start
        for _ in range(self.max_steps):
            if cur == goal:
                break
            out = graph.neighbors(cur)
            if not out:
                break
            edge = out[int(rng.integers(0, len(out)))]
            nodes.append(edge.target)
            length += edge.length_m
            cur = edge.target
        return nodes, length, cur == goal

    def sample(
        self, graph: RoadGraph, start: NodeId, goal: NodeId, rng
    ) -> SampleFound | SamplerExhausted:
        best, best_len, hits = None, math.inf, 0
        if self.max_steps > 0:
            for _ in range(self.trials):
                nodes, length, hit = self._walk(graph, start, goal, rng)
                if not hit:
                    continue
                hits += 1
                if best is None or (len(nodes), length) < (len(best), best_len):
                    best, best_len = nodes, length

        if best is None:
            return SamplerExhausted(trials=self.trials, max_steps=self.max_steps)
        return SampleFound(nodes=tuple(best), length_m=best_len, trials=self.trials, hits=hits)
