#!/usr/bin/env python3
"""
Validate the chunked GeoJSON output against tile_index.json:

- every referenced chunk file exists and holds feature_count features
- every Point/MultiPoint coordinate of a chunk lies inside its bounds
- the full-detail zoom covers metadata.total_features features
- every H3 overview cell has at least one filming location in the chunks

This catches stale chunks left behind by an earlier run with a different chunk size.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Set

from . import config
from .geo import feature_coordinates, h3_cell, within_bounds


def load_chunk(path: Path) -> dict | None:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        print(f"Skipping {path.name}: {exc}", file=sys.stderr)
        return None


def validate(geo_dir: Path, tile_index: dict) -> List[str]:
    problems: List[str] = []
    loaded: Dict[str, dict] = {}
    failed: Set[str] = set()

    for zoom, level in tile_index.get("zoom_levels", {}).items():
        for entry in level.get("chunks", []):
            name = entry["file"]
            if name in failed:
                continue
            if name not in loaded:
                chunk = load_chunk(geo_dir / name)
                if chunk is None:
                    failed.add(name)
                    problems.append(f"z{zoom}: missing chunk {name}")
                    continue
                loaded[name] = chunk
                features = chunk.get("features", [])
                if len(features) != entry.get("feature_count"):
                    problems.append(
                        f"{name}: feature_count {entry.get('feature_count')} but file has {len(features)}"
                    )
                for feature in features:
                    if (feature.get("geometry") or {}).get("type") not in ("Point", "MultiPoint"):
                        continue
                    for coord in feature_coordinates(feature):
                        if not within_bounds(coord, entry["bounds"]):
                            problems.append(f"{name}: {feature.get('id')} at {coord} outside {entry['bounds']}")

    metadata = tile_index.get("metadata", {})
    full = [
        level for level in tile_index.get("zoom_levels", {}).values() if level.get("strategy") == "full"
    ]
    if full:
        covered = sum(entry.get("feature_count", 0) for entry in full[0].get("chunks", []))
        if covered != metadata.get("total_features"):
            problems.append(f"full zoom covers {covered} of {metadata.get('total_features')} features")

    overview_name = next(
        (level["overview"] for level in tile_index.get("zoom_levels", {}).values() if level.get("overview")),
        None,
    )
    if overview_name:
        overview = load_chunk(geo_dir / overview_name)
        if overview is None:
            problems.append(f"missing overview {overview_name}")
        else:
            problems.extend(validate_overview(overview, list(loaded.values())))
    return problems


def validate_overview(overview: dict, chunks: List[dict]) -> List[str]:
    resolutions = {f["properties"]["res"] for f in overview.get("features", [])}
    location_cells = set()
    for chunk in chunks:
        for feature in chunk.get("features", []):
            for lng, lat in feature_coordinates(feature):
                for res in resolutions:
                    cell = h3_cell(lat, lng, res)
                    if cell:
                        location_cells.add((res, cell))
    missing = [
        f["properties"]["cell"]
        for f in overview.get("features", [])
        if (f["properties"]["res"], f["properties"]["cell"]) not in location_cells
    ]
    if missing:
        return [f"{len(missing)} overview cells have no filming location, e.g. {missing[:5]}"]
    return []


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate chunked GeoJSON output against the tile index.")
    parser.add_argument("--geo-dir", type=Path, default=config.GEO_DIR, help="Directory holding tile_index.json")
    args = parser.parse_args()

    index_path = args.geo_dir / "tile_index.json"
    if not index_path.is_file():
        raise SystemExit(f"Tile index not found: {index_path}")
    tile_index = json.loads(index_path.read_text(encoding="utf-8"))

    problems = validate(args.geo_dir, tile_index)
    if problems:
        print(f"Validation failed: {len(problems)} problems. Examples:", file=sys.stderr)
        for problem in problems[:10]:
            print(f"  {problem}", file=sys.stderr)
        raise SystemExit(1)

    print(f"Validation passed: {tile_index['metadata']['total_chunks']} chunks match the tile index.")


if __name__ == "__main__":
    main()
