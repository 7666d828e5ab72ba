# io/formatting.py
from collections.abc import Sequence

from signal_route.domain.entities.geography import NodeId, RoadGraph


def to_dash(nodes: Sequence[NodeId]) -> str:
    """["a", "b", "c"] -> "a-b-c"."""
    return "-".join(nodes)


def path_length_m(graph: RoadGraph, nodes: Sequence[NodeId]) -> float:
    return sum(e.length_m for e in graph.iter_route_edges(nodes))


def road_names(graph: RoadGraph, nodes: Sequence[NodeId]) -> list[str]:
    # consecutive duplicates collapsed, unnamed segments skipped
    out: list[str] = []
    for e in graph.iter_route_edges(nodes):
        if e.road_name and (not out or out[-1] != e.road_name):
            out.append(e.road_name)
    return out
