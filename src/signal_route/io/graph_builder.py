# io/graph_builder.py
from dataclasses import dataclass
from math import isfinite

from signal_route.domain.entities.geography import Node, RoadGraph, RoadGraphBuilder
from signal_route.domain.errors import AttributeParseError
from signal_route.domain.mechanics.mechanics_geodesy import haversine_m
from signal_route.io.graph_source import GraphSource
from signal_route.sim.hooks import NoopHooks

ONEWAY_TOKENS = frozenset({"true", "yes", "1"})


@dataclass(frozen=True)
class AttributeTable:
    """
    Semantic attribute names the builder looks for, plus positional key ids
    accepted as a compatibility fallback, only for data keys that have no
    declared attr.name. A declared name always decides.
    """

    lat: frozenset[str] = frozenset({"lat", "y"})
    lon: frozenset[str] = frozenset({"lon", "x"})
    length: frozenset[str] = frozenset({"length"})
    name: frozenset[str] = frozenset({"name"})
    oneway: frozenset[str] = frozenset({"oneway"})
    lat_key: str | None = "d4"
    lon_key: str | None = "d5"
    length_key: str | None = "d16"
    name_key: str | None = "d13"

    @classmethod
    def from_model(cls, m) -> "AttributeTable":
        return cls(
            lat=frozenset(m.lat),
            lon=frozenset(m.lon),
            length=frozenset(m.length),
            name=frozenset(m.name),
            oneway=frozenset(m.oneway),
            lat_key=m.lat_key,
            lon_key=m.lon_key,
            length_key=m.length_key,
            name_key=m.name_key,
        )

    def is_lat(self, attr: str, key: str) -> bool:
        return attr in self.lat or (not attr and key == self.lat_key)

    def is_lon(self, attr: str, key: str) -> bool:
        return attr in self.lon or (not attr and key == self.lon_key)

    def is_length(self, attr: str, key: str) -> bool:
        return attr in self.length or (not attr and key == self.length_key)

    def is_name(self, attr: str, key: str) -> bool:
        return attr in self.name or (not attr and key == self.name_key)

    def is_oneway(self, attr: str, key: str) -> bool:
        return attr in self.oneway


def _number(element_id: str, attr: str, raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        raise AttributeParseError(element_id, attr, raw) from None


def _coordinate(element_id: str, attr: str, raw: str) -> float:
    v = _number(element_id, attr, raw)
    if not isfinite(v):
        raise AttributeParseError(element_id, attr, raw)
    return v


def is_oneway(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in ONEWAY_TOKENS


def build_graph(source: GraphSource, attrs: AttributeTable | None = None, *, hooks=None) -> RoadGraph:
    """
    Turn an attributed tree into a RoadGraph.

    Nodes are registered first (each with an empty adjacency entry); edges
    then get their declared length, or the great-circle distance between
    their endpoints when the length is missing or unusable. Non-oneway
    edges also get the reverse edge with the same length and name. Edges
    that reference undeclared nodes are dropped.
    """
    attrs = attrs or AttributeTable()
    hooks = hooks or NoopHooks()
    names = source.key_names()
    g = RoadGraphBuilder()

    for el in source.nodes:
        lat = lon = 0.0
        for key, raw in el.data:
            attr = names.get(key, "")
            if attrs.is_lat(attr, key):
                lat = _coordinate(el.id, attr or key, raw)
            elif attrs.is_lon(attr, key):
                lon = _coordinate(el.id, attr or key, raw)
        g.add_node(Node(el.id, lat, lon))

    for el in source.edges:
        length = float("nan")
        road, oneway = "", None
        for key, raw in el.data:
            attr = names.get(key, "")
            if attrs.is_length(attr, key):
                length = _number(f"{el.source}->{el.target}", attr or key, raw)
            elif attrs.is_name(attr, key):
                road = raw
            elif attrs.is_oneway(attr, key):
                oneway = raw

        if not isfinite(length) or length < 0:
            a, b = g.nodes.get(el.source), g.nodes.get(el.target)
            length = haversine_m(a.lat, a.lon, b.lat, b.lon) if a and b else 0.0

        g.add_edge(el.source, el.target, length, road, oneway=is_oneway(oneway))

    graph = g.freeze()
    hooks.graph_loaded(
        origin=source.origin,
        nodes=len(graph),
        edges=graph.edge_count,
        dropped_edges=g.dropped_edges,
    )
    return graph
