# signal_route/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from signal_route.config.models import RoutingModel
from signal_route.domain.entities.geography import RoadGraph
from signal_route.domain.entities.signals import SignalDelayTable
from signal_route.domain.errors import GraphLoadError
from signal_route.domain.mechanics.mechanics_core import Mechanics
from signal_route.domain.mechanics.mechanics_factory import build_mechanics
from signal_route.io.query_logging import QueryLogging  # JSON logs
from signal_route.io.recorder import Recorder, Sink
from signal_route.runtime.registries import resolve_graph
from signal_route.sim.hooks import NoopHooks
from signal_route.sim.rng import RNGRegistry


@dataclass
class App:
    config: RoutingModel
    graph: RoadGraph
    delays: SignalDelayTable
    rng: RNGRegistry
    mechanics: Mechanics
    hooks: object


def build(
    cfg: RoutingModel | Mapping,
    *,
    graph: RoadGraph | None = None,
    use_logging: bool = True,
    sinks: tuple[Sink, ...] = (),
) -> App:
    """
    Raises GraphLoadError when the configured graph file cannot be read;
    nothing is built in that case.
    """
    # 0) Validate config
    model = cfg if isinstance(cfg, RoutingModel) else RoutingModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=Recorder(*sinks) if sinks else None,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Graph (file wins over a prebuilt one) and signal table
    try:
        g = resolve_graph(model.graph, deps={"graph": graph, "hooks": hooks})
    except GraphLoadError as e:
        hooks.error(where="load_graph", exc=e, file=model.graph.file if model.graph else None)
        raise
    delays = SignalDelayTable.from_entries(s.as_entry() for s in model.signals)

    # 3) Mechanics
    rng_registry = RNGRegistry(model.mechanics.seed)
    mechanics = build_mechanics(
        model.mechanics, g, delays=delays, rng_registry=rng_registry, hooks=hooks
    )

    return App(model, g, delays, rng_registry, mechanics, hooks)
