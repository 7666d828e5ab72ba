# io/graph_source.py
"""
Generic attributed-element tree consumed by the graph builder, plus a GraphML
adapter producing it. Values stay raw strings here; typing happens once, in
the builder.
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from signal_route.domain.errors import GraphLoadError


@dataclass(frozen=True)
class KeyDef:
    id: str  # opaque key id, e.g. "d4"
    attr_name: str  # semantic name, e.g. "lat"


@dataclass(frozen=True)
class NodeElement:
    id: str
    data: tuple[tuple[str, str], ...] = ()  # (key id, raw text)


@dataclass(frozen=True)
class EdgeElement:
    source: str
    target: str
    data: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class GraphSource:
    keys: tuple[KeyDef, ...] = ()
    nodes: tuple[NodeElement, ...] = ()
    edges: tuple[EdgeElement, ...] = ()
    origin: str = "<memory>"

    def key_names(self) -> dict[str, str]:
        return {k.id: k.attr_name for k in self.keys}


def _local(tag: str) -> str:
    # "{http://graphml.graphdrawing.org/xmlns}node" -> "node"
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _data(el: ET.Element) -> tuple[tuple[str, str], ...]:
    out = []
    for d in el:
        if _local(d.tag) != "data":
            continue
        key, text = d.get("key"), d.text
        if key is None or text is None:
            continue
        out.append((key, text))
    return tuple(out)


def _from_root(root: ET.Element, origin: str) -> GraphSource:
    keys = []
    graph = None
    for child in root:
        name = _local(child.tag)
        if name == "key":
            kid, attr = child.get("id"), child.get("attr.name")
            if kid and attr:
                keys.append(KeyDef(kid, attr))
        elif name == "graph":
            graph = child
    if graph is None:
        graph = root

    nodes, edges = [], []
    for el in graph:
        name = _local(el.tag)
        if name == "node":
            nid = el.get("id")
            if nid:
                nodes.append(NodeElement(nid, _data(el)))
        elif name == "edge":
            s, t = el.get("source"), el.get("target")
            if s and t:
                edges.append(EdgeElement(s, t, _data(el)))
    return GraphSource(tuple(keys), tuple(nodes), tuple(edges), origin=origin)


def parse_graphml(text: str | bytes, *, origin: str = "<memory>") -> GraphSource:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise GraphLoadError(f"{origin}: not well-formed GraphML ({e})") from e
    return _from_root(root, origin)


def read_graphml(path: str | Path) -> GraphSource:
    p = Path(path)
    try:
        tree = ET.parse(p)
    except OSError as e:
        raise GraphLoadError(f"cannot read graph file {str(p)!r}: {e}") from e
    except ET.ParseError as e:
        raise GraphLoadError(f"{str(p)!r}: not well-formed GraphML ({e})") from e
    return _from_root(tree.getroot(), str(p))
