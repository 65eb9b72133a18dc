#!/usr/bin/env python3
"""
Build the flat Fuse.js search index (title, genres, countries, cities per movie).
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, List, TypedDict

from . import config
from .movies import Movie, load_movies, movie_id, write_json


class Entry(TypedDict):
    id: str
    title: str
    year: int
    genres: List[str]
    countries: List[str]
    cities: List[str]


def unique(values: Iterable[str | None]) -> List[str]:
    return list(dict.fromkeys(v for v in values if v))


def create_search_index(movies: List[Movie]) -> List[Entry]:
    entries: List[Entry] = []
    for movie in movies:
        locations = movie.get("locations") or []
        entries.append(
            {
                "id": movie_id(movie),
                "title": movie.get("title"),
                "year": movie.get("year"),
                "genres": movie.get("genres") or [],
                "countries": unique(loc.get("country") for loc in locations),
                "cities": unique(loc.get("city") for loc in locations),
            }
        )
    return entries


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate the Fuse.js movie search index.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_FILE, help="Enriched movies JSON")
    parser.add_argument("--output", type=Path, default=config.FUSE_INDEX_FILE, help="Output index file")
    args = parser.parse_args()

    movies = load_movies(args.input)
    index = create_search_index(movies)
    write_json(args.output, index)
    print(f"Wrote {len(index)} entries to {args.output}")


if __name__ == "__main__":
    main()
