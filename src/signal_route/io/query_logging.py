# io/query_logging.py
import json
import logging
import sys

from signal_route.io.recorder import Recorder
from signal_route.sim.hooks import NoopHooks


def _default_json_logger(name="signal_route", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class QueryLogging(NoopHooks):
    """
    Structured logs for graph loading and route queries.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level="DEBUG" if debug else level)
        self._searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------------------------------------------------

    def graph_loaded(self, *, origin, nodes, edges, dropped_edges):
        level = "WARNING" if dropped_edges else "INFO"
        self._emit(
            level, "graph_loaded", origin=origin, nodes=nodes, edges=edges, dropped_edges=dropped_edges
        )

    def search_start(self, *, start, goal, cost):
        self._searches += 1
        if self.debug:
            self._emit("DEBUG", "search_start", start=start, goal=goal, cost=cost, seq=self._searches)

    def search_end(self, *, start, goal, cost, outcome, settled, wall_ms, **extra):
        self._emit(
            "INFO",
            "search_end",
            start=start,
            goal=goal,
            cost=cost,
            outcome=outcome,
            settled=settled,
            wall_ms=round(wall_ms, 3),
            **extra,
        )

    def sample_end(self, *, start, goal, trials, hits, outcome, wall_ms, **extra):
        self._emit(
            "INFO",
            "sample_end",
            start=start,
            goal=goal,
            trials=trials,
            hits=hits,
            outcome=outcome,
            wall_ms=round(wall_ms, 3),
            **extra,
        )

    def unresolved(self, *, query: str, reason: str):
        self._emit("WARNING", "unresolved", query=query, reason=reason)

    def error(self, *, where: str, exc: BaseException, **extra):
        self._emit("ERROR", "routing_error", where=where, error=str(exc), **extra)

    # ------------- Result Reporting --------------------------

    def record(self, result):
        if self.recorder:
            self.recorder.emit(result)
