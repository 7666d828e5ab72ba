from signal_route.app.protocols import CostModel
from signal_route.domain.entities.geography import DirectedEdge
from signal_route.domain.entities.signals import DelayKey, SignalDelayTable

AVG_SPEED_MPS = 13.9


class DistanceOnlyCost(CostModel):
    unit = "m"

    def __call__(self, edge: DirectedEdge, arrival_cost: float = 0.0) -> float:
        return edge.length_m


class TimeWithSignalDelayCost(CostModel):
    """Seconds to drive the edge at a constant average speed plus any signal wait on it."""

    unit = "s"

    def __init__(
        self,
        delays: SignalDelayTable | None = None,
        *,
        avg_speed_mps: float = AVG_SPEED_MPS,
        delay_key: DelayKey = "destination",
    ):
        if avg_speed_mps <= 0:
            raise ValueError("avg_speed_mps must be > 0")
        self.delays = delays or SignalDelayTable.empty()
        self.v, self.delay_key = avg_speed_mps, delay_key

    def __call__(self, edge: DirectedEdge, arrival_cost: float = 0.0) -> float:
        return edge.length_m / self.v + self.delays.delay_s(edge, self.delay_key)
