#!/usr/bin/env python3
"""
Summarise the movie dataset for the site header and partnership modal.
"""
from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path
from typing import List

import pandas as pd

from . import config
from .movies import Movie, load_movies, write_json


def location_country(loc: dict) -> str | None:
    """Country is the last comma-separated part of the description, else the country field."""
    description = loc.get("description") or ""
    if description.strip():
        return description.split(",")[-1].strip()
    return loc.get("country") or None


def site_stats(movies: List[Movie], now: datetime | None = None) -> dict:
    now = now or datetime.now(tz=timezone.utc)
    locations = pd.DataFrame(
        [
            {"movie": i, "country": location_country(loc)}
            for i, movie in enumerate(movies)
            for loc in movie.get("locations") or []
        ],
        columns=["movie", "country"],
    )
    return {
        "totalMovies": len(movies),
        "moviesWithLocations": int(locations["movie"].nunique()),
        "totalLocations": int(len(locations)),
        "uniqueCountries": int(locations["country"].dropna().nunique()),
        "generatedAt": now.isoformat(timespec="seconds"),
        "lastUpdated": f"{now:%B} {now.day}, {now.year}",
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate site statistics.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_FILE, help="Enriched movies JSON")
    parser.add_argument("--output", type=Path, default=config.SITE_STATS_FILE, help="Output stats JSON")
    args = parser.parse_args()

    stats = site_stats(load_movies(args.input))
    for key, value in stats.items():
        print(f"  {key}: {value}")
    write_json(args.output, stats)
    print(f"Stats saved to {args.output}")


if __name__ == "__main__":
    main()
