# tests/ingest/test_graph_builder.py
import math

import pytest

from conftest import CYCLE_COORDS, make_source
from signal_route.domain.errors import AttributeParseError
from signal_route.domain.mechanics.mechanics_geodesy import haversine_m
from signal_route.io.graph_builder import AttributeTable, build_graph, is_oneway
from signal_route.io.graph_source import EdgeElement, GraphSource, KeyDef, NodeElement


def test_every_node_has_adjacency_and_edges_are_finite(cycle_graph):
    g = cycle_graph
    assert set(g.nodes) == {"A", "B", "C", "D"}
    for e in g.iter_edges():
        assert e.source in g and e.target in g
        assert math.isfinite(e.length_m) and e.length_m >= 0


def test_two_way_edges_get_reverse_with_same_length_and_name():
    src = make_source(
        CYCLE_COORDS, [("A", "B")], lengths=42.5, names={("A", "B"): "Jong-ro"}
    )
    g = build_graph(src)
    fwd, rev = g.edge("A", "B"), g.edge("B", "A")
    assert fwd is not None and rev is not None
    assert fwd.length_m == rev.length_m == 42.5
    assert fwd.road_name == rev.road_name == "Jong-ro"
    assert g.edge_count == 2


def test_oneway_edge_is_forward_only():
    src = make_source(CYCLE_COORDS, [("A", "B")], lengths=10.0, oneway={("A", "B")})
    g = build_graph(src)
    assert g.edge("A", "B") is not None
    assert g.edge("B", "A") is None
    assert g.edge_count == 1
    assert g.neighbors("B") == ()


@pytest.mark.parametrize("raw", ["true", "True", "YES", " 1 "])
def test_oneway_tokens(raw):
    assert is_oneway(raw)


@pytest.mark.parametrize("raw", [None, "", "false", "no", "0", "-1", "reversible"])
def test_not_oneway_tokens(raw):
    assert not is_oneway(raw)


def test_missing_length_falls_back_to_haversine():
    g = build_graph(make_source(CYCLE_COORDS, [("A", "B")]))
    a, b = CYCLE_COORDS["A"], CYCLE_COORDS["B"]
    assert g.edge("A", "B").length_m == pytest.approx(haversine_m(*a, *b))
    assert g.edge("A", "B").length_m > 0


def test_nan_length_falls_back_to_haversine():
    g = build_graph(make_source(CYCLE_COORDS, [("A", "C")], lengths="nan"))
    a, c = CYCLE_COORDS["A"], CYCLE_COORDS["C"]
    assert g.edge("A", "C").length_m == pytest.approx(haversine_m(*a, *c))


def test_edges_to_unknown_nodes_are_dropped():
    src = GraphSource(
        nodes=(NodeElement("A"), NodeElement("B")),
        edges=(EdgeElement("A", "B"), EdgeElement("A", "Z"), EdgeElement("Q", "B")),
    )
    g = build_graph(src)
    assert g.edge_count == 2
    assert "Z" not in g and "Q" not in g


def test_unresolved_coordinates_default_to_zero():
    g = build_graph(GraphSource(nodes=(NodeElement("lonely"),)))
    n = g.node("lonely")
    assert (n.lat, n.lon) == (0.0, 0.0)
    assert g.neighbors("lonely") == ()


def test_positional_key_fallback_without_key_declarations():
    # no <key> elements: d4/d5/d16/d13 still resolve
    src = GraphSource(
        nodes=(
            NodeElement("1", (("d4", "37.5"), ("d5", "127.0"))),
            NodeElement("2", (("d4", "37.6"), ("d5", "127.0"))),
        ),
        edges=(EdgeElement("1", "2", (("d16", "12.0"), ("d13", "Sejong-daero"))),),
    )
    g = build_graph(src)
    assert g.node("1").lat == 37.5 and g.node("1").lon == 127.0
    assert g.edge("2", "1").length_m == 12.0
    assert g.edge("1", "2").road_name == "Sejong-daero"


def test_fallback_can_be_disabled():
    attrs = AttributeTable(lat_key=None, lon_key=None)
    src = GraphSource(nodes=(NodeElement("1", (("d4", "37.5"), ("d5", "127.0"))),))
    n = build_graph(src, attrs).node("1")
    assert (n.lat, n.lon) == (0.0, 0.0)


def test_custom_attribute_names():
    attrs = AttributeTable(lat=frozenset({"latitude"}), lon=frozenset({"longitude"}))
    src = GraphSource(
        keys=(KeyDef("k0", "latitude"), KeyDef("k1", "longitude")),
        nodes=(NodeElement("n", (("k0", "1.5"), ("k1", "2.5"))),),
    )
    n = build_graph(src, attrs).node("n")
    assert (n.lat, n.lon) == (1.5, 2.5)


def test_non_numeric_coordinate_is_an_explicit_error():
    src = GraphSource(
        keys=(KeyDef("d4", "y"),),
        nodes=(NodeElement("7", (("d4", "north-ish"),)),),
    )
    with pytest.raises(AttributeParseError) as ei:
        build_graph(src)
    assert ei.value.element_id == "7"
    assert ei.value.raw == "north-ish"


def test_non_numeric_length_is_an_explicit_error():
    src = make_source(CYCLE_COORDS, [("A", "B")], lengths="far")
    with pytest.raises(AttributeParseError):
        build_graph(src)


def test_graph_is_read_only(cycle_graph):
    with pytest.raises(TypeError):
        cycle_graph.nodes["E"] = None


def osmnx_style_source(edge_osmid="987654"):
    # every key declared; the old positional ids mean something else here
    keys = (
        KeyDef("d4", "street_count"),
        KeyDef("d10", "y"),
        KeyDef("d11", "x"),
        KeyDef("d13", "highway"),
        KeyDef("d14", "name"),
        KeyDef("d15", "length"),
        KeyDef("d16", "osmid"),
    )
    nodes = (
        NodeElement("1", (("d10", "37.5"), ("d11", "127.0"), ("d4", "3"))),
        NodeElement("2", (("d10", "37.6"), ("d11", "127.0"), ("d4", "4"))),
    )
    edges = (
        EdgeElement(
            "1",
            "2",
            (("d15", "12"), ("d14", "Sejong-daero"), ("d16", edge_osmid), ("d13", "primary")),
        ),
    )
    return GraphSource(keys, nodes, edges)


def test_declared_names_win_over_positional_key_ids():
    g = build_graph(osmnx_style_source())
    assert g.node("1").lat == 37.5
    assert g.node("2").lat == 37.6
    assert g.edge("1", "2").length_m == 12.0
    assert g.edge("1", "2").road_name == "Sejong-daero"


def test_non_numeric_value_on_a_declared_unrelated_key_is_ignored():
    g = build_graph(osmnx_style_source(edge_osmid="[1, 2]"))
    assert g.edge("2", "1").length_m == 12.0


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
def test_non_finite_coordinate_is_an_explicit_error(raw):
    src = GraphSource(
        keys=(KeyDef("d4", "y"), KeyDef("d5", "x")),
        nodes=(
            NodeElement("1", (("d4", raw), ("d5", "127.0"))),
            NodeElement("2", (("d4", "37.5"), ("d5", "127.0"))),
        ),
        edges=(EdgeElement("1", "2"),),
    )
    with pytest.raises(AttributeParseError) as ei:
        build_graph(src)
    assert ei.value.element_id == "1"
