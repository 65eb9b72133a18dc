"""Loading enriched movie records and deriving display properties from them."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, TypedDict

from .config import DESCRIPTION_MAX_LENGTH, TMDB_IMAGE_BASE
from .geo import parse_timestamp


class Location(TypedDict, total=False):
    lat: float
    lng: float
    city: str
    country: str
    description: str
    display_name: str
    scene_description: str
    start_date: str
    end_date: str


class Movie(TypedDict, total=False):
    movie_id: str
    imdb_id: str
    tmdb_id: int
    title: str
    original_title: str
    year: int
    genres: List[str]
    poster: str
    poster_path: str
    thumbnail_52: str
    banner_1280: str
    overview: str
    vote_average: float
    imdb_rating: float
    trailer: str
    trailer_url: str
    locations: List[Location]


def load_movies(path: Path) -> List[Movie]:
    if not path.is_file():
        raise SystemExit(f"Movie data not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise SystemExit(f"Expected a JSON list of movies in {path}")
    return data


def load_geojson(path: Path) -> dict:
    if not path.is_file():
        raise SystemExit(f"GeoJSON not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: Any, indent: int | None = 2) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if indent is None:
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    else:
        text = json.dumps(data, indent=indent, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")


def movie_id(movie: Movie) -> str | None:
    return movie.get("movie_id") or movie.get("imdb_id")


def tmdb_image_url(path: str | None, size: str = "w500") -> str | None:
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE}{size}{path}"


def truncate_description(text: str | None, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def has_timeline(locations: List[Location]) -> bool:
    return any("start_date" in loc for loc in locations)


def sort_locations_by_date(locations: List[Location]) -> List[Location]:
    """Chronological order; undated (or unparseable) locations keep their order at the end."""

    def key(loc: Location):
        _, ts = parse_timestamp(loc.get("start_date"))
        return (ts is None, ts or 0.0)

    return sorted(locations, key=key)


def location_name(loc: Location, with_description: bool = True) -> str:
    name = f"{loc.get('city', '')}, {loc.get('country', '')}"
    description = loc.get("description")
    if with_description and description:
        name += f" ({description})"
    return name
