from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

NodeId = str


# Core graph types used by mechanics
@dataclass(frozen=True)
class Node:
    id: NodeId
    lat: float  # degrees
    lon: float


@dataclass(frozen=True)
class DirectedEdge:
    source: NodeId
    target: NodeId
    length_m: float
    road_name: str = ""


class RoadGraph:
    """
    Read-only road network: nodes, adjacency keyed by source id, and per
    directed edge metadata. Produced by RoadGraphBuilder.freeze(); shared by
    every query of a run.
    """

    def __init__(
        self,
        nodes: Mapping[NodeId, Node],
        adjacency: Mapping[NodeId, tuple[DirectedEdge, ...]],
    ):
        self._nodes = MappingProxyType(dict(nodes))
        self._adj = MappingProxyType(dict(adjacency))
        # (u, v) -> edge; the last inserted wins when a pair repeats
        self._edges = MappingProxyType(
            {(e.source, e.target): e for edges in self._adj.values() for e in edges}
        )

    @property
    def nodes(self) -> Mapping[NodeId, Node]:
        return self._nodes

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def neighbors(self, node_id: NodeId) -> tuple[DirectedEdge, ...]:
        return self._adj.get(node_id, ())

    def edge(self, u: NodeId, v: NodeId) -> DirectedEdge | None:
        return self._edges.get((u, v))

    def iter_edges(self) -> Iterator[DirectedEdge]:
        for edges in self._adj.values():
            yield from edges

    def iter_route_edges(self, nodes: Iterable[NodeId]) -> Iterator[DirectedEdge]:
        """Yield the edge between each consecutive pair of a node sequence."""
        it = iter(nodes)
        prev = next(it, None)
        for cur in it:
            e = self.edge(prev, cur)
            if e is None:
                raise KeyError(f"no edge {prev!r} -> {cur!r}")
            yield e
            prev = cur

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adj.values())


@dataclass
class RoadGraphBuilder:
    """Mutable staging area filled during ingestion, then frozen into a RoadGraph."""

    nodes: dict[NodeId, Node] = field(default_factory=dict)
    adj: dict[NodeId, list[DirectedEdge]] = field(default_factory=dict)
    dropped_edges: int = 0

    def add_node(self, node: Node) -> None:
        self.nodes[node.id] = node
        self.adj.setdefault(node.id, [])

    def add_edge(
        self,
        source: NodeId,
        target: NodeId,
        length_m: float,
        road_name: str = "",
        *,
        oneway: bool = False,
    ) -> None:
        if source not in self.nodes or target not in self.nodes:
            self.dropped_edges += 1
            return
        self.adj[source].append(DirectedEdge(source, target, length_m, road_name))
        if not oneway:
            self.adj[target].append(DirectedEdge(target, source, length_m, road_name))

    def freeze(self) -> RoadGraph:
        return RoadGraph(self.nodes, {k: tuple(v) for k, v in self.adj.items()})
