# main.py
import argparse
import json
import sys

from street_seg.app.build import build
from street_seg.domain.entities.geography import Coord, Edge, Path, TraversalState
from street_seg.domain.entities.modes import QualifiedMode, TraverseMode
from street_seg.steps.geo import haversine_m


def load_path(doc: dict) -> Path:
    edges = []
    for e in doc["edges"]:
        coords = e.get("coords")
        geometry = tuple(Coord(lat, lon) for lat, lon in coords) if coords else None
        distance_m = e.get("distance_m")
        if distance_m is None:
            # measured along the shape when the input leaves it out
            distance_m = (
                sum(haversine_m(a, b) for a, b in zip(geometry, geometry[1:])) if geometry else 0.0
            )
        edges.append(
            Edge(
                edge_id=e.get("id"),
                mode=TraverseMode(e["mode"]) if e.get("mode") else None,
                geometry=geometry,
                name=e.get("name"),
                distance_m=float(distance_m),
                bogus_name=bool(e.get("bogus_name", False)),
                area=bool(e.get("area", False)),
            )
        )
    return Path(tuple(edges), TraversalState(float(doc.get("elapsed_time_s", 0.0))))


def run(path_file: str, config_file: str | None = None) -> dict:
    cfg = None
    if config_file:
        with open(config_file, encoding="utf-8") as f:
            cfg = json.load(f)
    # stdout carries the segment document; logs go to stderr
    app = build(cfg, log_stream=sys.stderr)

    with open(path_file, encoding="utf-8") as f:
        doc = json.load(f)
    qmode = QualifiedMode.parse(doc["qmode"]) if doc.get("qmode") else None
    return app.assembler.assemble(load_path(doc), qmode).to_dict()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Render a traversed path as a street segment.")
    parser.add_argument("path", help="JSON file with edges and elapsed_time_s")
    parser.add_argument("--config", help="JSON file with SegmentsModel settings")
    args = parser.parse_args()
    json.dump(run(args.path, args.config), sys.stdout, indent=2)
    sys.stdout.write("\n")
