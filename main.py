# main.py
import argparse
import json
import sys

from pydantic import ValidationError

from signal_route.app.build import build
from signal_route.domain.entities.results import Comparison
from signal_route.domain.errors import GraphLoadError
from signal_route.io.formatting import road_names, to_dash


def _coord(s: str) -> tuple[float, float]:
    lat, lon = s.split(",")
    return float(lat), float(lon)


def _signal(s: str) -> dict:
    # NODE=SECONDS or FROM:TO=SECONDS
    key, delay = s.rsplit("=", 1)
    if ":" in key:
        u, v = key.split(":", 1)
        return {"from_node": u, "to_node": v, "delay_s": float(delay)}
    return {"node": key, "delay_s": float(delay)}


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Shortest route vs. random-walk baseline on a road graph")
    p.add_argument("--config", help="JSON config file")
    p.add_argument("--graph", help="GraphML file (overrides config)")
    p.add_argument("--start", help="start node id")
    p.add_argument("--goal", help="goal node id")
    p.add_argument("--from-coord", type=_coord, help="start as LAT,LON")
    p.add_argument("--to-coord", type=_coord, help="goal as LAT,LON")
    p.add_argument("--signal", type=_signal, action="append", default=[], help="NODE=SECONDS or FROM:TO=SECONDS")
    p.add_argument("--seed", type=int)
    return p.parse_args(argv)


def run(argv=None) -> int:
    args = parse_args(argv)
    cfg = {}
    if args.config:
        try:
            with open(args.config, encoding="utf-8") as f:
                cfg = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Cannot read config {args.config}: {e}", file=sys.stderr)
            return 2
        if not isinstance(cfg, dict):
            print(f"Cannot read config {args.config}: top level must be an object", file=sys.stderr)
            return 2
    if args.graph:
        cfg["graph"] = {**cfg.get("graph", {}), "file": args.graph}
    if args.signal:
        cfg["signals"] = [*cfg.get("signals", []), *args.signal]
    if args.seed is not None:
        cfg.setdefault("mechanics", {})["seed"] = args.seed

    try:
        app = build(cfg)
    except GraphLoadError as e:
        print(f"Graph load failed: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 2

    m = app.mechanics
    if args.from_coord and args.to_coord:
        res = m.compare_between(*args.from_coord, *args.to_coord)
    elif args.start and args.goal:
        res = m.compare(args.start, args.goal)
    else:
        print("give --start/--goal or --from-coord/--to-coord", file=sys.stderr)
        return 2

    if not isinstance(res, Comparison):
        print(f"Node not found: {res.query} ({res.reason})")
        return 1

    unit = {"m": "distance (m)", "s": "travel time + signal delay (s)"}
    if res.sampled.ok:
        print(f"[Random Sampling] Path distance (m): {res.sampled.length_m:.6f}")
        print(f"[Random Sampling] Vehicle route: {to_dash(res.sampled.nodes)}")
    else:
        print("[Random Sampling] no path found within budget")
    if res.shortest.ok:
        print(f"[Dijkstra] Total {unit[res.shortest.unit]}: {res.shortest.cost:.6f}")
        print(f"[Dijkstra] Vehicle route: {to_dash(res.shortest.nodes)}")
        roads = road_names(app.graph, res.shortest.nodes)
        if roads:
            print(f"[Dijkstra] Roads: {' > '.join(roads)}")
    else:
        print("[Dijkstra] no path")
    return 0


if __name__ == "__main__":
    sys.exit(run())
