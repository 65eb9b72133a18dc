#!/usr/bin/env python3
"""
Convert enriched movie data into the GeoJSON layers the globe loads:

- movies.geojson: one Point/MultiPoint feature per movie with filming locations
- movie_paths.geojson: chronological LineStrings for movies with dated locations
- movies_page_<n>.json: fixed-size chunks of movies.geojson
- overview_h3.geojson: H3 hexagons aggregating every location for low zooms
- tile_index.json: which chunks each zoom level loads, with per-chunk bounds

Usage:
  python3 -m cinemap.transform_to_geojson --chunk-size 200 --h3-res 3
"""
from __future__ import annotations

import argparse
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from . import config
from .geo import (
    calculate_bounds,
    calculate_centroid,
    feature_coordinates,
    h3_cell,
    h3_polygon,
    path_length_km,
)
from .movies import (
    Movie,
    has_timeline,
    load_movies,
    location_name,
    sort_locations_by_date,
    tmdb_image_url,
    truncate_description,
    write_json,
)


def feature_collection(features: List[dict]) -> dict:
    return {"type": "FeatureCollection", "features": features}


def base_properties(movie: Movie) -> dict:
    genres = movie.get("genres") or []
    return {
        "movie_id": movie.get("imdb_id") or movie.get("movie_id"),
        "tmdb_id": movie.get("tmdb_id"),
        "title": movie.get("title"),
        "year": movie.get("year"),
        "poster": movie.get("poster") or tmdb_image_url(movie.get("poster_path")),
        "trailer": movie.get("trailer") or movie.get("trailer_url") or None,
        "top_genre": genres[0] if genres else None,
        "short_description": truncate_description(movie.get("overview")),
        "imdb_rating": movie.get("imdb_rating") or movie.get("vote_average") or None,
        "locations_count": len(movie.get("locations") or []),
    }


def transform_movie_to_feature(movie: Movie) -> dict | None:
    locations = movie.get("locations") or []
    if not locations:
        return None

    coordinates = [[loc["lng"], loc["lat"]] for loc in locations]
    props = base_properties(movie)
    props["location_names"] = [location_name(loc) for loc in locations]
    props["has_timeline"] = has_timeline(locations)
    if movie.get("thumbnail_52"):
        props["thumbnail_52"] = movie["thumbnail_52"]

    if len(coordinates) == 1:
        geometry = {"type": "Point", "coordinates": coordinates[0]}
    else:
        geometry = {"type": "MultiPoint", "coordinates": coordinates}
        props["centroid"] = calculate_centroid(coordinates)

    return {
        "type": "Feature",
        "id": f"movie-{movie.get('tmdb_id')}",
        "geometry": geometry,
        "properties": props,
    }


def transform_to_geojson(movies: List[Movie]) -> dict:
    features = []
    for movie in movies:
        feature = transform_movie_to_feature(movie)
        if feature:
            features.append(feature)
    return feature_collection(features)


def generate_movie_paths(movies: List[Movie]) -> dict:
    features = []
    for movie in movies:
        locations = movie.get("locations") or []
        if len(locations) < 2 or not has_timeline(locations):
            continue
        ordered = sort_locations_by_date(locations)
        coordinates = [[loc["lng"], loc["lat"]] for loc in ordered]
        props = base_properties(movie)
        props["location_names"] = [location_name(loc, with_description=False) for loc in ordered]
        props["has_timeline"] = True
        props["distance_km"] = round(path_length_km(coordinates), 1)
        features.append(
            {
                "type": "Feature",
                "id": f"path-{movie.get('tmdb_id')}",
                "geometry": {"type": "LineString", "coordinates": coordinates},
                "properties": props,
            }
        )
    return feature_collection(features)


def chunk_features(features: List[dict], chunk_size: int) -> List[dict]:
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [
        feature_collection(features[i : i + chunk_size])
        for i in range(0, len(features), chunk_size)
    ]


def chunk_entry(chunk: dict, index: int) -> dict:
    coords: List[List[float]] = []
    for feature in chunk["features"]:
        if (feature.get("geometry") or {}).get("type") in ("Point", "MultiPoint"):
            coords.extend(feature_coordinates(feature))
    return {
        "id": f"chunk-{index + 1}",
        "file": config.CHUNK_PATTERN.format(index + 1),
        "bounds": calculate_bounds(coords),
        "feature_count": len(chunk["features"]),
    }


def generate_tile_index(
    chunks: List[dict],
    chunk_size: int,
    overview_file: str | None = None,
    strategies: List[dict] | None = None,
) -> dict:
    strategies = strategies or config.ZOOM_STRATEGIES
    # Bounds are the same whichever zoom references a chunk.
    entries = [chunk_entry(chunk, i) for i, chunk in enumerate(chunks)]
    zoom_levels: Dict[str, dict] = {}
    for strategy in strategies:
        to_load = max(1, math.ceil(len(chunks) * strategy["percentage"])) if chunks else 0
        for zoom in strategy["zooms"]:
            level = {
                "chunk_size": chunk_size,
                "strategy": strategy["label"],
                "chunks": [dict(e) for e in entries[:to_load]],
            }
            if overview_file and strategy["label"] == "overview":
                level["overview"] = overview_file
            zoom_levels[str(zoom)] = level

    return {
        "zoom_levels": zoom_levels,
        "metadata": {
            "total_features": sum(len(c["features"]) for c in chunks),
            "total_chunks": len(chunks),
            "generated_at": datetime.now(tz=timezone.utc).isoformat(timespec="seconds"),
        },
    }


@dataclass
class CellAggregate:
    count: int = 0
    lng_sum: float = 0.0
    lat_sum: float = 0.0
    movie_ids: set = field(default_factory=set)
    sample_titles: List[str] = field(default_factory=list)


def build_overview(features: List[dict], h3_res: int) -> dict:
    """Aggregate every filming location into H3 cells for the overview zooms."""
    summary: Dict[str, CellAggregate] = defaultdict(CellAggregate)
    for feature in features:
        props = feature.get("properties") or {}
        mid = props.get("movie_id")
        for lng, lat in feature_coordinates(feature):
            cell = h3_cell(lat, lng, h3_res)
            if not cell:
                continue
            agg = summary[cell]
            agg.count += 1
            agg.lng_sum += lng
            agg.lat_sum += lat
            if mid not in agg.movie_ids:
                agg.movie_ids.add(mid)
                if len(agg.sample_titles) < 3 and props.get("title"):
                    agg.sample_titles.append(props["title"])

    ordered = sorted(summary.items(), key=lambda kv: (-len(kv[1].movie_ids), kv[0]))
    out = []
    for cell, agg in ordered:
        out.append(
            {
                "type": "Feature",
                "id": cell,
                "properties": {
                    "cell": cell,
                    "res": h3_res,
                    "count": agg.count,
                    "movie_count": len(agg.movie_ids),
                    "sample_titles": agg.sample_titles,
                    "centroid": [
                        round(agg.lng_sum / agg.count, 6),
                        round(agg.lat_sum / agg.count, 6),
                    ],
                },
                "geometry": h3_polygon(cell),
            }
        )
    return feature_collection(out)


def summarize(movies: List[Movie], features: List[dict], paths: List[dict]) -> dict:
    counts = [f["properties"]["locations_count"] for f in features]
    total_locations = sum(counts)
    return {
        "total_movies": len(movies),
        "movies_with_locations": len(features),
        "single_location": sum(1 for c in counts if c == 1),
        "multi_location": sum(1 for c in counts if c > 1),
        "with_timeline": sum(1 for f in features if f["properties"]["has_timeline"]),
        "total_locations": total_locations,
        "avg_locations": round(total_locations / len(features), 2) if features else 0.0,
        "paths": len(paths),
    }


def save_chunks(chunks: List[dict], output_dir: Path) -> None:
    for i, chunk in enumerate(chunks):
        write_json(output_dir / config.CHUNK_PATTERN.format(i + 1), chunk)
        print(f"  saved chunk {i + 1}/{len(chunks)} ({len(chunk['features'])} features)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Build chunked GeoJSON layers and the LOD tile index.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_FILE, help="Enriched movies JSON")
    parser.add_argument("--output-dir", type=Path, default=config.GEO_DIR, help="Directory for GeoJSON output")
    parser.add_argument("--chunk-size", type=int, default=config.CHUNK_SIZE, help="Features per chunk (default: 200)")
    parser.add_argument(
        "--h3-res",
        type=int,
        default=config.OVERVIEW_H3_RES,
        help="H3 resolution of the overview layer (default: 3)",
    )
    parser.add_argument("--no-overview", action="store_true", help="Skip the H3 overview layer")
    args = parser.parse_args()
    if args.chunk_size < 1:
        parser.error("--chunk-size must be positive")

    movies = load_movies(args.input)
    print(f"Loaded {len(movies)} movies from {args.input}")

    geojson = transform_to_geojson(movies)
    paths = generate_movie_paths(movies)
    print(f"Generated {len(geojson['features'])} features and {len(paths['features'])} paths")

    out = args.output_dir
    write_json(out / "movies.geojson", geojson)
    if paths["features"]:
        write_json(out / "movie_paths.geojson", paths)

    chunks = chunk_features(geojson["features"], args.chunk_size)
    print(f"Chunking {len(geojson['features'])} features into {len(chunks)} chunks")
    save_chunks(chunks, out)

    overview_file = None
    if not args.no_overview:
        overview = build_overview(geojson["features"], args.h3_res)
        overview_file = "overview_h3.geojson"
        write_json(out / overview_file, overview)
        print(f"Wrote {len(overview['features'])} H3 cells to {out / overview_file}")

    tile_index = generate_tile_index(chunks, args.chunk_size, overview_file)
    write_json(out / "tile_index.json", tile_index)
    print(f"Wrote tile index to {out / 'tile_index.json'}")

    stats = summarize(movies, geojson["features"], paths["features"])
    print("\nStatistics:")
    for key, value in stats.items():
        print(f"  {key.replace('_', ' ')}: {value}")


if __name__ == "__main__":
    main()
