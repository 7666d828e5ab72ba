# signal_route/runtime/resources.py
from functools import lru_cache

from signal_route.domain.entities.geography import RoadGraph
from signal_route.io.graph_builder import AttributeTable, build_graph
from signal_route.io.graph_source import GraphSource, read_graphml


@lru_cache(maxsize=8)
def load_source_from_path(file: str, fmt: str) -> GraphSource:
    if fmt == "graphml":
        return read_graphml(file)
    # add other formats you support
    raise ValueError(f"Unsupported graph fmt {fmt!r}")


def load_graph_from_path(
    file: str, fmt: str = "graphml", attrs: AttributeTable | None = None, *, hooks=None
) -> RoadGraph:
    return build_graph(load_source_from_path(file, fmt), attrs, hooks=hooks)
