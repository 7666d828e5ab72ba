from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from math import isfinite
from types import MappingProxyType
from typing import Literal

from signal_route.domain.entities.geography import DirectedEdge, NodeId

DelayKey = Literal["origin", "destination"]


def _check_delay(delay_s: float) -> float:
    d = float(delay_s)
    if not isfinite(d) or d < 0:
        raise ValueError(f"signal delay must be finite and >= 0, got {delay_s!r}")
    return d


@dataclass(frozen=True)
class SignalDelayTable:
    """
    Traffic-signal waits in seconds.
      • by_node: wait charged on an edge whose origin or destination (see DelayKey) is the node.
      • by_pair: wait charged on the exact directed edge (from, to); wins over by_node.
    Read-only once built.
    """

    by_node: Mapping[NodeId, float] = field(default_factory=dict)
    by_pair: Mapping[tuple[NodeId, NodeId], float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "by_node", MappingProxyType({k: _check_delay(v) for k, v in self.by_node.items()})
        )
        object.__setattr__(
            self, "by_pair", MappingProxyType({k: _check_delay(v) for k, v in self.by_pair.items()})
        )

    @classmethod
    def empty(cls) -> "SignalDelayTable":
        return cls()

    @classmethod
    def from_entries(cls, entries: Iterable[tuple]) -> "SignalDelayTable":
        """Entries are (node, delay_s) or (from, to, delay_s). Later entries overwrite earlier ones."""
        by_node: dict[NodeId, float] = {}
        by_pair: dict[tuple[NodeId, NodeId], float] = {}
        for entry in entries:
            if len(entry) == 2:
                node, delay = entry
                by_node[str(node)] = delay
            elif len(entry) == 3:
                u, v, delay = entry
                by_pair[(str(u), str(v))] = delay
            else:
                raise ValueError(f"signal entry must have 2 or 3 fields, got {entry!r}")
        return cls(by_node=by_node, by_pair=by_pair)

    def delay_s(self, edge: DirectedEdge, key: DelayKey = "destination") -> float:
        pair = self.by_pair.get((edge.source, edge.target))
        if pair is not None:
            return pair
        node = edge.target if key == "destination" else edge.source
        return self.by_node.get(node, 0.0)

    def __len__(self) -> int:
        return len(self.by_node) + len(self.by_pair)
