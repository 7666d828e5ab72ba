# tests/domain/test_routers.py
import itertools

import pytest

from conftest import CYCLE_COORDS, make_source
from signal_route.domain.entities.results import NoPath, RouteFound
from signal_route.domain.entities.signals import SignalDelayTable
from signal_route.domain.mechanics.mechanics_costs import DistanceOnlyCost, TimeWithSignalDelayCost
from signal_route.domain.mechanics.mechanics_routers import DijkstraRouter
from signal_route.io.graph_builder import build_graph


@pytest.fixture
def router():
    return DijkstraRouter()


def test_cycle_distance_only_costs_200(router, cycle_graph):
    r = router.shortest(cycle_graph, "A", "C", DistanceOnlyCost())
    assert isinstance(r, RouteFound)
    assert r.cost == pytest.approx(200.0)
    assert r.unit == "m"
    assert r.nodes in (("A", "B", "C"), ("A", "D", "C"))
    assert r.length_m == pytest.approx(200.0)


@pytest.mark.parametrize("delay_key", ["origin", "destination"])
def test_signal_at_b_pushes_route_through_d(router, cycle_graph, delay_key):
    cost = TimeWithSignalDelayCost(
        SignalDelayTable.from_entries([("B", 10.0)]), avg_speed_mps=13.9, delay_key=delay_key
    )
    r = router.shortest(cycle_graph, "A", "C", cost)
    assert r.nodes == ("A", "D", "C")
    assert r.cost == pytest.approx(200.0 / 13.9)
    assert r.length_m == pytest.approx(200.0)

    # forced through B, the wait is counted exactly once
    via_b = router.shortest(cycle_graph, "A", "B", cost).cost + router.shortest(
        cycle_graph, "B", "C", cost
    ).cost
    assert via_b == pytest.approx(200.0 / 13.9 + 10.0)


def test_pair_delay_only_on_its_edge(router, cycle_graph):
    cost = TimeWithSignalDelayCost(SignalDelayTable.from_entries([("A", "D", 60.0)]))
    r = router.shortest(cycle_graph, "A", "C", cost)
    assert r.nodes == ("A", "B", "C")


def test_start_equals_goal(router, cycle_graph):
    r = router.shortest(cycle_graph, "B", "B", DistanceOnlyCost())
    assert r.nodes == ("B",)
    assert r.cost == 0.0


def test_disconnected_components_give_no_path(router):
    coords = {**CYCLE_COORDS, "X": (37.58, 126.99), "Y": (37.581, 126.99)}
    g = build_graph(make_source(coords, [("A", "B"), ("X", "Y")], lengths=50.0))
    r = router.shortest(g, "A", "Y", DistanceOnlyCost())
    assert r == NoPath("A", "Y")
    assert not r.ok


def test_oneway_respected(router):
    g = build_graph(
        make_source(CYCLE_COORDS, [("A", "B"), ("B", "C")], lengths=10.0, oneway={("A", "B"), ("B", "C")})
    )
    assert router.shortest(g, "A", "C", DistanceOnlyCost()).ok
    assert isinstance(router.shortest(g, "C", "A", DistanceOnlyCost()), NoPath)


def test_prefers_longer_hop_count_when_cheaper(router):
    lengths = {("A", "C"): 500.0, ("A", "B"): 100.0, ("B", "D"): 100.0, ("D", "C"): 100.0}
    g = build_graph(make_source(CYCLE_COORDS, list(lengths), lengths=lengths))
    r = router.shortest(g, "A", "C", DistanceOnlyCost())
    assert r.nodes == ("A", "B", "D", "C")
    assert r.cost == pytest.approx(300.0)


def test_triangle_inequality_and_determinism(router):
    lengths = {
        ("A", "B"): 120.0,
        ("B", "C"): 80.0,
        ("C", "D"): 95.0,
        ("D", "A"): 60.0,
        ("A", "C"): 210.0,
        ("B", "D"): 150.0,
    }
    g = build_graph(make_source(CYCLE_COORDS, list(lengths), lengths=lengths))
    cost = DistanceOnlyCost()
    d = {(u, v): router.shortest(g, u, v, cost).cost for u, v in itertools.product(g.nodes, repeat=2)}
    for a, b, c in itertools.product(g.nodes, repeat=3):
        assert d[a, c] <= d[a, b] + d[b, c] + 1e-9
    for u, v in d:
        assert router.shortest(g, u, v, cost).cost == d[u, v]


def test_negative_cost_rejected(router, cycle_graph):
    with pytest.raises(ValueError):
        router.shortest(cycle_graph, "A", "C", lambda e, _: -1.0)


def test_unknown_node_is_a_precondition_error(router, cycle_graph):
    with pytest.raises(KeyError):
        router.shortest(cycle_graph, "A", "Z", DistanceOnlyCost())


def test_search_reports_settled_nodes(router, cycle_graph):
    r, settled = router.search(cycle_graph, "A", "B", DistanceOnlyCost())
    assert r.nodes == ("A", "B")
    assert 1 <= settled <= len(cycle_graph)
