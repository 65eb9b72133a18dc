#!/usr/bin/env python3
"""
Remove duplicate and invalid filming locations from movies_enriched.json.

Duplicates share coordinates rounded to 4 decimals (~11 m). Invalid locations
have missing or placeholder coordinates or an unusable display_name. The input
is backed up before it is overwritten.
"""
from __future__ import annotations

import argparse
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from . import config
from .movies import Location, Movie, load_movies, write_json

INVALID_NAME_PATTERNS = ("undefined", "unknown", "null")
PUNCTUATION_RE = re.compile(r"[,\s-]")


@dataclass
class CleanReport:
    movies: int = 0
    duplicates_removed: int = 0
    invalid_removed: int = 0
    locations_kept: int = 0
    affected: List[Tuple[str, int, int]] = field(default_factory=list)


def rounded(value):
    # Non-numeric coordinates stay as-is so every coordinate-less location shares one key
    if isinstance(value, (int, float)):
        return round(value, 4)
    return value


def deduplicate_locations(locations: List[Location]) -> List[Location]:
    seen = set()
    out: List[Location] = []
    for loc in locations:
        key = (rounded(loc.get("lat")), rounded(loc.get("lng")))
        if key not in seen:
            seen.add(key)
            out.append(loc)
    return out


def is_valid_location(location: Location) -> bool:
    lat = location.get("lat")
    lng = location.get("lng")
    if not lat or not lng:
        return False
    if abs(lat) < 0.01 and abs(lng) < 0.01:
        return False
    # Antarctic placeholder returned by geocoders for unknown places
    if lat < -72 and abs(lng) < 1:
        return False

    name = location.get("display_name")
    if not name or not name.strip():
        return False
    lowered = name.lower()
    if any(pattern in lowered for pattern in INVALID_NAME_PATTERNS):
        return False
    if not PUNCTUATION_RE.sub("", name):
        return False
    return True


def clean_movies(
    movies: List[Movie], dedupe: bool = True, drop_invalid: bool = True
) -> Tuple[List[Movie], CleanReport]:
    report = CleanReport(movies=len(movies))
    cleaned: List[Movie] = []
    for movie in movies:
        locations = list(movie.get("locations") or [])
        before = len(locations)
        if drop_invalid:
            valid = [loc for loc in locations if is_valid_location(loc)]
            report.invalid_removed += len(locations) - len(valid)
            locations = valid
        if dedupe:
            unique = deduplicate_locations(locations)
            report.duplicates_removed += len(locations) - len(unique)
            locations = unique
        if len(locations) != before:
            report.affected.append((movie.get("title") or "", before - len(locations), len(locations)))
        report.locations_kept += len(locations)
        cleaned.append({**movie, "locations": locations})
    return cleaned, report


def main() -> None:
    parser = argparse.ArgumentParser(description="Clean duplicate and invalid filming locations.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_FILE, help="Enriched movies JSON (rewritten in place)")
    parser.add_argument("--backup", type=Path, default=None, help="Backup path (default: <input>.backup.json)")
    parser.add_argument("--keep-duplicates", action="store_true", help="Do not deduplicate coordinates")
    parser.add_argument("--keep-invalid", action="store_true", help="Do not drop invalid locations")
    parser.add_argument("--dry-run", action="store_true", help="Report only, do not write")
    args = parser.parse_args()

    movies = load_movies(args.input)
    cleaned, report = clean_movies(movies, dedupe=not args.keep_duplicates, drop_invalid=not args.keep_invalid)

    print(f"Movies: {report.movies}")
    print(f"Invalid locations removed: {report.invalid_removed}")
    print(f"Duplicate locations removed: {report.duplicates_removed}")
    print(f"Locations kept: {report.locations_kept}")
    for title, removed, kept in report.affected[:10]:
        print(f"  - {title}: removed {removed}, kept {kept}")

    if not report.affected:
        print("Nothing to clean.")
        return
    if args.dry_run:
        print("Dry run, no files written.")
        return

    backup = args.backup or args.input.with_suffix(".backup.json")
    shutil.copyfile(args.input, backup)
    print(f"Backup saved to {backup}")
    write_json(args.input, cleaned)
    print(f"Saved cleaned data to {args.input}")


if __name__ == "__main__":
    main()
