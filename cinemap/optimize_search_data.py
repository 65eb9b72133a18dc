#!/usr/bin/env python3
"""
Split movies.geojson into small searchable chunks plus a compact index.

The browser loads only index.json up front and fetches chunk-<n>.json when a
result is opened.
"""
from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Tuple, TypedDict

from . import config
from .movies import load_geojson, write_json


class SearchEntry(TypedDict):
    id: str
    title: str
    year: int
    genres: List[str]
    locations: List[str]
    rating: float | None
    poster: str | None
    chunk: int


def unique_movies(features: List[dict]) -> List[dict]:
    seen: Dict[str, dict] = {}
    for feature in features:
        mid = (feature.get("properties") or {}).get("movie_id")
        if mid is not None and mid not in seen:
            seen[mid] = feature
    movies = list(seen.values())
    movies.sort(key=lambda f: (str(f["properties"].get("title") or "").casefold(), str(f["properties"].get("title") or "")))
    return movies


def search_locations(location_names: List[str]) -> List[str]:
    out: List[str] = []
    for name in location_names or []:
        parts = name.split(",")
        place = parts[1].strip() if len(parts) > 1 else parts[0].strip()
        if place not in out:
            out.append(place)
    return out


def index_entry(feature: dict, chunk: int) -> SearchEntry:
    props = feature["properties"]
    genres = props.get("genres") or ([props["top_genre"]] if props.get("top_genre") else [])
    return {
        "id": props["movie_id"],
        "title": props.get("title"),
        "year": props.get("year"),
        "genres": genres,
        "locations": search_locations(props.get("location_names") or []),
        "rating": props.get("imdb_rating"),
        "poster": props.get("thumbnail_52") or props.get("poster"),
        "chunk": chunk,
    }


def build_search_data(features: List[dict], chunk_size: int) -> Tuple[List[dict], dict]:
    """Return (chunk collections, index document)."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    movies = unique_movies(features)
    chunks: List[dict] = []
    index: List[SearchEntry] = []
    for n, start in enumerate(range(0, len(movies), chunk_size)):
        chunk = movies[start : start + chunk_size]
        chunks.append({"type": "FeatureCollection", "features": chunk})
        index.extend(index_entry(feature, n) for feature in chunk)

    document = {
        "version": 1,
        "totalMovies": len(movies),
        "totalChunks": len(chunks),
        "generatedAt": datetime.now(tz=timezone.utc).isoformat(timespec="seconds"),
        "index": index,
    }
    return chunks, document


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a chunked search index from movies.geojson.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_GEOJSON, help="movies.geojson")
    parser.add_argument("--output-dir", type=Path, default=config.SEARCH_DIR, help="Directory for index and chunks")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=config.SEARCH_CHUNK_SIZE,
        help="Movies per chunk (default: 200)",
    )
    args = parser.parse_args()
    if args.chunk_size < 1:
        parser.error("--chunk-size must be positive")

    geojson = load_geojson(args.input)
    features = geojson.get("features", [])
    print(f"Loaded {len(features)} movie features")

    chunks, document = build_search_data(features, args.chunk_size)
    if not chunks:
        raise SystemExit("No movies to index.")
    print(f"Found {document['totalMovies']} unique movies, writing {len(chunks)} chunks")

    for n, chunk in enumerate(chunks):
        write_json(args.output_dir / f"chunk-{n}.json", chunk, indent=None)
        print(f"  chunk {n + 1}/{len(chunks)} ({len(chunk['features'])} movies)")

    index_path = args.output_dir / "index.json"
    write_json(index_path, document, indent=None)
    print(f"Search index saved: {index_path}")

    original_size = args.input.stat().st_size
    index_size = index_path.stat().st_size
    chunk_size = (args.output_dir / "chunk-0.json").stat().st_size
    print("\nSize comparison:")
    print(f"  Original GeoJSON: {original_size / 1024 / 1024:.2f} MB")
    print(f"  Search index: {index_size / 1024:.2f} KB")
    print(f"  First chunk: {chunk_size / 1024:.2f} KB")
    if original_size:
        print(f"  Initial load reduction: {(original_size - index_size) / original_size * 100:.1f}%")


if __name__ == "__main__":
    main()
