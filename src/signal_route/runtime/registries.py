# runtime/registries.py
from collections.abc import Callable
from typing import Any

from signal_route.app.protocols import CostModel, NodeLocator, PathSampler, ShortestPathEngine
from signal_route.config.models import (
    CostDistanceModel,
    CostTimeWithDelayModel,
    CostUnion,
    GraphByPath,
    LocatorNearestModel,
    LocatorUnion,
    RouterDijkstraModel,
    RouterUnion,
    SamplerRandomWalkModel,
    SamplerUnion,
)
from signal_route.domain.entities.geography import RoadGraph
from signal_route.domain.entities.signals import SignalDelayTable
from signal_route.domain.errors import GraphLoadError
from signal_route.domain.mechanics.mechanics_costs import DistanceOnlyCost, TimeWithSignalDelayCost
from signal_route.domain.mechanics.mechanics_locators import NearestNodeLocator
from signal_route.domain.mechanics.mechanics_routers import DijkstraRouter
from signal_route.domain.mechanics.mechanics_samplers import RandomWalkSampler
from signal_route.io.graph_builder import AttributeTable
from signal_route.runtime.resources import load_graph_from_path

LocatorFactory = Callable[[LocatorUnion, dict], NodeLocator]
CostFactory = Callable[[CostUnion, dict], CostModel]
RouterFactory = Callable[[RouterUnion, dict], ShortestPathEngine]
SamplerFactory = Callable[[SamplerUnion, dict], PathSampler]

_locator_registry: dict[str, LocatorFactory] = {}
_cost_registry: dict[str, CostFactory] = {}
_router_registry: dict[str, RouterFactory] = {}
_sampler_registry: dict[str, SamplerFactory] = {}


def _make(registry: dict[str, Any], what: str, cfg, deps: dict):
    try:
        factory = registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown {what} kind {cfg.kind!r}") from None
    return factory(cfg, deps)


def resolve_graph(ref: GraphByPath | None, *, deps: dict) -> RoadGraph:
    """
    deps can include:
      - 'graph': RoadGraph   # prebuilt graph, used when no file is configured
      - 'hooks': SearchHooks # receives graph_loaded
    """
    if ref is None:
        if deps.get("graph") is not None:
            return deps["graph"]
        raise GraphLoadError("no graph configured")
    return load_graph_from_path(
        ref.file, ref.fmt, AttributeTable.from_model(ref.attributes), hooks=deps.get("hooks")
    )


# ------------------- Locators ---------------------------


def register_locator(kind: str):
    def deco(fn: LocatorFactory):
        _locator_registry[kind] = fn
        return fn

    return deco


def make_locator(cfg: LocatorUnion, *, deps: dict) -> NodeLocator:
    return _make(_locator_registry, "locator", cfg, deps)


@register_locator("nearest")
def _make_nearest(cfg: LocatorNearestModel, deps):
    return NearestNodeLocator(deps["graph"], snap_tolerance_m=cfg.snap_tolerance_m)


# ------------------- Cost models ---------------------------


def register_cost(kind: str):
    def deco(fn: CostFactory):
        _cost_registry[kind] = fn
        return fn

    return deco


def make_cost(cfg: CostUnion, *, deps: dict) -> CostModel:
    return _make(_cost_registry, "cost", cfg, deps)


@register_cost("distance")
def _make_distance(cfg: CostDistanceModel, deps):
    return DistanceOnlyCost()


@register_cost("time_with_delay")
def _make_time_with_delay(cfg: CostTimeWithDelayModel, deps):
    delays = deps.get("delays") or SignalDelayTable.empty()
    return TimeWithSignalDelayCost(delays, avg_speed_mps=cfg.avg_speed_mps, delay_key=cfg.delay_key)


# --------------------- Routers / Samplers ---------------------


def register_router(kind: str):
    def deco(fn: RouterFactory):
        _router_registry[kind] = fn
        return fn

    return deco


def make_router(cfg: RouterUnion, *, deps: dict) -> ShortestPathEngine:
    return _make(_router_registry, "router", cfg, deps)


@register_router("dijkstra")
def _make_dijkstra(cfg: RouterDijkstraModel, deps):
    return DijkstraRouter()


def register_sampler(kind: str):
    def deco(fn: SamplerFactory):
        _sampler_registry[kind] = fn
        return fn

    return deco


def make_sampler(cfg: SamplerUnion, *, deps: dict) -> PathSampler:
    return _make(_sampler_registry, "sampler", cfg, deps)


@register_sampler("random_walk")
def _make_random_walk(cfg: SamplerRandomWalkModel, deps):
    return RandomWalkSampler(trials=cfg.trials, max_steps=cfg.max_steps)
