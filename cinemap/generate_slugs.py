#!/usr/bin/env python3
"""
Generate slug -> movie_id mappings (and the reverse) for movie page URLs.

Titles shared by several movies get a year suffix ("dune-1984", "dune-2021").
"""
from __future__ import annotations

import argparse
import sys
from collections import Counter
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from . import config
from .movies import Movie, load_movies, movie_id, write_json
from .slugs import generate_slug, is_valid_slug


@dataclass
class SlugStats:
    total: int = 0
    with_year_suffix: int = 0
    duplicates_found: int = 0
    invalid_slugs: int = 0


def build_slug_map(movies: List[Movie]) -> Tuple[Dict[str, str], Dict[str, str], SlugStats]:
    stats = SlugStats()
    base_counts = Counter(generate_slug(m.get("title") or "") for m in movies)

    slug_map: Dict[str, str] = {}
    for movie in movies:
        title = movie.get("title") or ""
        mid = movie_id(movie)
        base = generate_slug(title)
        duplicated = base_counts[base] > 1
        slug = generate_slug(title, movie.get("year")) if duplicated else base

        if not is_valid_slug(slug):
            print(f"Warning: invalid slug for {title!r}: {slug!r}", file=sys.stderr)
            stats.invalid_slugs += 1
            continue
        if slug in slug_map:
            # Same title and year: first movie keeps the slug
            print(f"Warning: duplicate slug {slug!r}: {slug_map[slug]}, {mid}", file=sys.stderr)
            stats.duplicates_found += 1
            continue

        slug_map[slug] = mid
        stats.total += 1
        if duplicated:
            stats.with_year_suffix += 1

    reverse = {mid: slug for slug, mid in slug_map.items()}
    return slug_map, reverse, stats


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate movie slug mappings.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_FILE, help="Enriched movies JSON")
    parser.add_argument(
        "--output-dir",
        type=Path,
        action="append",
        default=None,
        help="Directory to write the mappings to (repeatable; default: data/ and public/data/)",
    )
    args = parser.parse_args()
    output_dirs = args.output_dir or [config.DATA_DIR, config.PUBLIC_DATA_DIR]

    movies = load_movies(args.input)
    print(f"Processing {len(movies)} movies...")
    slug_map, reverse, stats = build_slug_map(movies)

    for out_dir in output_dirs:
        write_json(out_dir / config.SLUGS_FILE, slug_map)
        write_json(out_dir / config.SLUGS_REVERSE_FILE, reverse)
        print(f"Wrote {out_dir / config.SLUGS_FILE} and {out_dir / config.SLUGS_REVERSE_FILE}")

    print("\nStatistics:")
    for key, value in asdict(stats).items():
        print(f"  {key.replace('_', ' ')}: {value}")
    for slug in list(slug_map)[:5]:
        print(f"  /movie/{slug}")


if __name__ == "__main__":
    main()
