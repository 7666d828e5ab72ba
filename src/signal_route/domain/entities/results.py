from dataclasses import dataclass
from typing import Literal

from signal_route.domain.entities.geography import NodeId

CostUnit = Literal["m", "s"]


# Query outcomes. Failures are values here, never exceptions.
@dataclass(frozen=True)
class RouteFound:
    nodes: tuple[NodeId, ...]
    cost: float  # meters or seconds, see unit
    unit: CostUnit
    length_m: float
    ok = True


@dataclass(frozen=True)
class NoPath:
    start: NodeId
    goal: NodeId
    ok = False


@dataclass(frozen=True)
class UnresolvedNode:
    query: str  # the id or "lat,lon" that could not be resolved
    reason: Literal["unknown_id", "beyond_snap_tolerance", "empty_graph"]
    ok = False


@dataclass(frozen=True)
class SampleFound:
    nodes: tuple[NodeId, ...]
    length_m: float
    trials: int
    hits: int
    ok = True


@dataclass(frozen=True)
class SamplerExhausted:
    trials: int
    max_steps: int
    ok = False


ShortestResult = RouteFound | NoPath | UnresolvedNode
SampleResult = SampleFound | SamplerExhausted | UnresolvedNode


@dataclass(frozen=True)
class Comparison:
    start: NodeId
    goal: NodeId
    sampled: SampleFound | SamplerExhausted
    shortest: RouteFound | NoPath
