"""
Geometry helpers shared by the GeoJSON, overview and validation scripts.

Coordinates are always [lng, lat] pairs in WGS84, matching GeoJSON order.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, List, Sequence, Tuple

import h3
import numpy as np
import pyproj

GEOD = pyproj.Geod(ellps="WGS84")


def _as_array(coords: Iterable[Sequence[float]]) -> np.ndarray:
    arr = np.asarray([c[:2] for c in coords], dtype=float)
    return arr.reshape(-1, 2)


def calculate_centroid(coords: Iterable[Sequence[float]]) -> List[float]:
    arr = _as_array(coords)
    if not len(arr):
        raise ValueError("cannot compute the centroid of zero coordinates")
    lng, lat = arr.mean(axis=0)
    return [float(lng), float(lat)]


def calculate_bounds(coords: Iterable[Sequence[float]]) -> List[float]:
    """Return [minLng, minLat, maxLng, maxLat]; [0, 0, 0, 0] when there is nothing to bound."""
    arr = _as_array(coords)
    if not len(arr):
        return [0, 0, 0, 0]
    min_lng, min_lat = arr.min(axis=0)
    max_lng, max_lat = arr.max(axis=0)
    return [float(min_lng), float(min_lat), float(max_lng), float(max_lat)]


def within_bounds(coord: Sequence[float], bounds: Sequence[float], eps: float = 1e-9) -> bool:
    min_lng, min_lat, max_lng, max_lat = bounds
    lng, lat = coord[0], coord[1]
    return min_lng - eps <= lng <= max_lng + eps and min_lat - eps <= lat <= max_lat + eps


def feature_coordinates(feature: dict) -> List[List[float]]:
    """Coordinate pairs of Point, MultiPoint and LineString features."""
    geom = feature.get("geometry") or {}
    gtype = geom.get("type")
    coords = geom.get("coordinates")
    if not coords:
        return []
    if gtype == "Point":
        return [list(coords)]
    if gtype in ("MultiPoint", "LineString"):
        return [list(c) for c in coords]
    return []


def path_length_km(coords: Sequence[Sequence[float]]) -> float:
    if len(coords) < 2:
        return 0.0
    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    return GEOD.line_length(lons, lats) / 1000.0


def h3_cell(lat: float, lon: float, res: int) -> str | None:
    """Compatibility wrapper for h3 lat/lon->cell across versions."""
    if hasattr(h3, "latlng_to_cell"):
        try:
            return h3.latlng_to_cell(lat, lon, res)  # type: ignore[attr-defined]
        except Exception:
            return None
    try:
        return h3.geo_to_h3(lat, lon, res)  # type: ignore[attr-defined]
    except Exception:
        return None


def h3_polygon(cell: str) -> dict:
    """Closed GeoJSON polygon for an H3 cell."""
    if hasattr(h3, "cell_to_boundary"):
        boundary = h3.cell_to_boundary(cell)  # type: ignore[attr-defined]
    else:
        boundary = h3.h3_to_geo_boundary(cell)  # type: ignore[attr-defined]
    ring = [[lng, lat] for lat, lng in boundary]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return {"type": "Polygon", "coordinates": [ring]}


def parse_timestamp(raw: str | None) -> Tuple[str | None, float | None]:
    if not raw or not isinstance(raw, str):
        return None, None
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        try:
            d = date.fromisoformat(raw[:10])
        except ValueError:
            return raw, None
        dt = datetime(d.year, d.month, d.day)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return raw, dt.timestamp()
