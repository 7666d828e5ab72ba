# signal_route/domain/mechanics/mechanics_factory.py

from signal_route.config.models import MechanicsModel
from signal_route.domain.entities.geography import RoadGraph
from signal_route.domain.entities.signals import SignalDelayTable
from signal_route.domain.mechanics.mechanics_core import Mechanics
from signal_route.runtime.registries import make_cost, make_locator, make_router, make_sampler
from signal_route.sim.hooks import NoopHooks
from signal_route.sim.rng import RNGRegistry


def build_mechanics(
    cfg: MechanicsModel,
    graph: RoadGraph,
    *,
    delays: SignalDelayTable | None = None,
    rng_registry: RNGRegistry | None = None,
    hooks=None,
) -> Mechanics:
    deps = {"graph": graph, "delays": delays or SignalDelayTable.empty()}

    return Mechanics(
        graph=graph,
        locator=make_locator(cfg.locator, deps=deps),
        cost=make_cost(cfg.cost, deps=deps),
        router=make_router(cfg.router, deps=deps),
        sampler=make_sampler(cfg.sampler, deps=deps),
        rng=rng_registry or RNGRegistry(cfg.seed),
        hooks=hooks or NoopHooks(),
    )
