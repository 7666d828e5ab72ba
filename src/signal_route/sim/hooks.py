# sim/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def graph_loaded(self, *, origin, nodes, edges, dropped_edges): ...
    def search_start(self, *, start, goal, cost): ...
    def search_end(self, *, start, goal, cost, outcome, settled, wall_ms, **kw): ...
    def sample_end(self, *, start, goal, trials, hits, outcome, wall_ms, **kw): ...
    def unresolved(self, *, query: str, reason: str): ...
    def error(self, *, where: str, exc: BaseException, **kw): ...
    def record(self, result): ...


class NoopHooks:
    def graph_loaded(self, **_):
        pass

    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def sample_end(self, **_):
        pass

    def unresolved(self, **_):
        pass

    def error(self, **_):
        pass

    def record(self, *_):
        pass
