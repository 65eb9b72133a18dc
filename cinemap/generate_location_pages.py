#!/usr/bin/env python3
"""
Generate location pages for major cities with at least 3 movies.

Writes data/location_<slug>.json per city (stale pages are removed first) and
public/geo/clickable-regions.geojson with one point per city.
"""
from __future__ import annotations

import argparse
from functools import cmp_to_key
from pathlib import Path
from typing import Dict, List, Tuple

import pandas as pd

from . import config
from .cities import find_major_city
from .movies import Movie, load_movies, movie_id, write_json
from .slugs import simple_slugify


def match_locations(movies: List[Movie]) -> pd.DataFrame:
    """One row per location that falls in a major city."""
    rows = []
    for movie in movies:
        mid = movie_id(movie)
        for loc in movie.get("locations") or []:
            match = find_major_city(loc.get("display_name"))
            if match is None:
                continue
            city, country = match
            rows.append({"movie_id": mid, "city": city, "country": country, "lat": loc["lat"], "lng": loc["lng"]})
    return pd.DataFrame(rows, columns=["movie_id", "city", "country", "lat", "lng"])


def compare_movies(a: dict, b: dict) -> int:
    if a.get("imdb_rating") and b.get("imdb_rating"):
        diff = b["imdb_rating"] - a["imdb_rating"]
    else:
        diff = (b.get("year") or 0) - (a.get("year") or 0)
    return (diff > 0) - (diff < 0)


def count_values(values: List[str]) -> Dict[str, int]:
    if not values:
        return {}
    return {str(k): int(v) for k, v in pd.Series(values).value_counts(sort=False).items()}


def build_city_page(city: str, country: str, rows: pd.DataFrame, movies_by_id: Dict[str, Movie]) -> dict:
    per_movie = rows.groupby("movie_id", sort=False).size()
    city_movies = [movies_by_id[mid] for mid in per_movie.index]

    listed = [
        {
            "movie_id": movie_id(m),
            "title": m.get("title"),
            "year": m.get("year"),
            "genres": m.get("genres") or [],
            "poster": m.get("poster"),
            "banner_1280": m.get("banner_1280"),
            "thumbnail_52": m.get("thumbnail_52"),
            "imdb_rating": m.get("imdb_rating"),
            "cityLocationCount": int(per_movie[movie_id(m)]),
        }
        for m in city_movies
    ]
    listed.sort(key=cmp_to_key(compare_movies))

    genres = [g for m in city_movies for g in (m.get("genres") or [])]
    decades = [f"{(int(m['year']) // 10) * 10}s" for m in city_movies if m.get("year")]
    return {
        "location": {
            "city": city,
            "country": country,
            "slug": simple_slugify(f"{city}-{country}"),
            "coordinates": {"lat": float(rows["lat"].mean()), "lng": float(rows["lng"].mean())},
        },
        "movies": listed,
        "stats": {
            "totalMovies": len(city_movies),
            "totalLocations": int(len(rows)),
            "genres": count_values(genres),
            "decades": count_values(decades),
        },
    }


def build_location_pages(movies: List[Movie], min_movies: int = config.MIN_MOVIES_PER_CITY) -> Tuple[List[dict], dict]:
    """Return (city pages ordered by movie count, clickable regions collection)."""
    matched = match_locations(movies)
    movies_by_id = {}
    for movie in movies:
        movies_by_id.setdefault(movie_id(movie), movie)

    pages = []
    if not matched.empty:
        for (city, country), rows in matched.groupby(["city", "country"], sort=False):
            if rows["movie_id"].nunique() >= min_movies:
                pages.append(build_city_page(city, country, rows, movies_by_id))
    pages.sort(key=lambda p: -p["stats"]["totalMovies"])

    features = []
    for n, page in enumerate(pages, start=1):
        loc = page["location"]
        features.append(
            {
                "type": "Feature",
                "id": n,
                "properties": {
                    "name": f"{loc['city']}, {loc['country']}",
                    "slug": loc["slug"],
                    "movieCount": page["stats"]["totalMovies"],
                    "locationCount": page["stats"]["totalLocations"],
                },
                "geometry": {"type": "Point", "coordinates": [loc["coordinates"]["lng"], loc["coordinates"]["lat"]]},
            }
        )
    return pages, {"type": "FeatureCollection", "features": features}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate major-city location pages and clickable regions.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_FILE, help="Enriched movies JSON")
    parser.add_argument("--pages-dir", type=Path, default=config.DATA_DIR, help="Directory for location_<slug>.json")
    parser.add_argument("--regions", type=Path, default=config.CLICKABLE_REGIONS_FILE, help="Clickable regions GeoJSON")
    parser.add_argument(
        "--min-movies",
        type=int,
        default=config.MIN_MOVIES_PER_CITY,
        help="Minimum distinct movies for a city page (default: 3)",
    )
    args = parser.parse_args()

    movies = load_movies(args.input)
    print(f"Total movies: {len(movies)}")

    args.pages_dir.mkdir(parents=True, exist_ok=True)
    stale = sorted(args.pages_dir.glob("location_*.json"))
    for path in stale:
        path.unlink()
    if stale:
        print(f"Removed {len(stale)} old location files")

    pages, regions = build_location_pages(movies, args.min_movies)
    for page in pages:
        loc = page["location"]
        write_json(args.pages_dir / f"location_{loc['slug']}.json", page)
        print(f"  {loc['city']}, {loc['country']}: {page['stats']['totalMovies']} movies")

    write_json(args.regions, regions)
    print(f"Generated {len(pages)} location pages and {len(regions['features'])} regions in {args.regions}")


if __name__ == "__main__":
    main()
