# tests/conftest.py
import pytest

from signal_route.io.graph_builder import build_graph
from signal_route.io.graph_source import EdgeElement, GraphSource, KeyDef, NodeElement

# Square A-B-C-D-A, 100 m per side (declared length), roughly in central Seoul
CYCLE_COORDS = {
    "A": (37.5700, 126.9800),
    "B": (37.5700, 126.9811),
    "C": (37.5709, 126.9811),
    "D": (37.5709, 126.9800),
}


def make_source(coords, edges, *, lengths=None, oneway=(), names=None):
    keys = (
        KeyDef("d4", "y"),
        KeyDef("d5", "x"),
        KeyDef("d13", "name"),
        KeyDef("d16", "length"),
        KeyDef("d20", "oneway"),
    )
    nodes = tuple(
        NodeElement(n, (("d4", str(lat)), ("d5", str(lon)))) for n, (lat, lon) in coords.items()
    )
    els = []
    for u, v in edges:
        data = []
        if lengths is not None:
            data.append(("d16", str(lengths[(u, v)] if isinstance(lengths, dict) else lengths)))
        if names and (u, v) in names:
            data.append(("d13", names[(u, v)]))
        data.append(("d20", "True" if (u, v) in oneway else "False"))
        els.append(EdgeElement(u, v, tuple(data)))
    return GraphSource(keys, nodes, tuple(els))


@pytest.fixture
def cycle_graph():
    edges = [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A")]
    return build_graph(make_source(CYCLE_COORDS, edges, lengths=100.0))
