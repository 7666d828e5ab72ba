# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from typing import Protocol

log = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, rec) -> None: ...


def _as_record(rec) -> dict:
    if is_dataclass(rec):
        return {"type": type(rec).__name__, **asdict(rec)}
    return dict(rec)


class JsonlSink:
    def __init__(self, fp=None):
        self.fp = fp or sys.stdout

    def write(self, rec) -> None:
        self.fp.write(json.dumps(_as_record(rec)) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list = []

    def write(self, rec) -> None:
        self.records.append(rec)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, rec):
        for s in self.sinks:
            try:
                s.write(rec)
            except (OSError, TypeError, ValueError):
                # a broken sink must not fail the query
                log.exception("sink %s failed", type(s).__name__)
