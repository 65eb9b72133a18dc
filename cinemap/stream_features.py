#!/usr/bin/env python3
"""
Stream NDJSON that combines:
- An H3-binned layer of filming locations for low zooms (default: z0-z3).
- Raw movie features for higher zooms (default: z4+), tagged with a minzoom hint.

Usage (typically piped into tippecanoe):
  python3 -m cinemap.stream_features \\
    --h3-res 3 --low-zoom-max 3 \\
    | tippecanoe -o tiles/movies.pmtiles -Z0 -z12 --layer=movies -
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, Iterator, List

from . import config
from .movies import load_geojson
from .transform_to_geojson import build_overview


def in_year_range(props: dict, min_year: int | None, max_year: int | None) -> bool:
    year = props.get("year")
    if year is None:
        return min_year is None and max_year is None
    try:
        year = int(year)
    except (TypeError, ValueError):
        return False
    if min_year is not None and year < min_year:
        return False
    if max_year is not None and year > max_year:
        return False
    return True


def add_tippecanoe_minzoom(feature: dict, minzoom: int) -> dict:
    props = dict(feature.get("properties") or {})
    # tippecanoe drops nested values it cannot encode; centroid is rebuilt client side
    props.pop("centroid", None)
    props["tippecanoe"] = {"minzoom": minzoom}
    out = {"type": "Feature", "properties": props, "geometry": feature.get("geometry")}
    if "id" in feature:
        out["id"] = feature["id"]
    return out


def stream(
    features: Iterable[dict],
    h3_res: int,
    low_zoom_max: int,
    high_zoom_min: int,
    include_raw: bool = True,
    min_year: int | None = None,
    max_year: int | None = None,
) -> Iterator[dict]:
    kept: List[dict] = []
    for feature in features:
        if not isinstance(feature, dict):
            continue
        if not in_year_range(feature.get("properties") or {}, min_year, max_year):
            continue
        kept.append(feature)
        if include_raw:
            yield add_tippecanoe_minzoom(feature, high_zoom_min)

    for cell in build_overview(kept, h3_res)["features"]:
        props = dict(cell["properties"])
        props["tippecanoe"] = {"minzoom": 0, "maxzoom": low_zoom_max}
        yield {"type": "Feature", "properties": props, "geometry": cell["geometry"]}


def main() -> None:
    parser = argparse.ArgumentParser(description="Stream raw and H3-aggregated NDJSON movie features.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_GEOJSON, help="movies.geojson to stream")
    parser.add_argument("--h3-res", type=int, default=config.OVERVIEW_H3_RES, help="H3 resolution for low zooms (default: 3)")
    parser.add_argument(
        "--low-zoom-max",
        type=int,
        default=config.LOW_ZOOM_MAX,
        help="Max zoom to show H3 layer (default: 3)",
    )
    parser.add_argument(
        "--high-zoom-min",
        type=int,
        default=None,
        help="Min zoom to show raw features (default: low-zoom-max + 1)",
    )
    parser.add_argument(
        "--omit-raw",
        action="store_true",
        help="Do not emit raw movie features (only H3 aggregates)",
    )
    parser.add_argument("--min-year", type=int, default=None, help="Earliest release year (inclusive)")
    parser.add_argument("--max-year", type=int, default=None, help="Latest release year (inclusive)")
    args = parser.parse_args()

    high_zoom_min = args.high_zoom_min if args.high_zoom_min is not None else args.low_zoom_max + 1
    data = load_geojson(args.input)

    try:
        for feature in stream(
            data.get("features", []),
            args.h3_res,
            args.low_zoom_max,
            high_zoom_min,
            include_raw=not args.omit_raw,
            min_year=args.min_year,
            max_year=args.max_year,
        ):
            sys.stdout.write(json.dumps(feature, separators=(",", ":"), ensure_ascii=False))
            sys.stdout.write("\n")
    except BrokenPipeError:
        # Allow callers to pipe into head/tee without noisy tracebacks
        pass


if __name__ == "__main__":
    main()
