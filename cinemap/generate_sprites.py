#!/usr/bin/env python3
"""
Combine movie poster thumbnails into PNG sprite sheets to cut marker image
requests, and write sprite-metadata.json with each icon's position.
"""
from __future__ import annotations

import argparse
import math
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Tuple

from PIL import Image, ImageOps

from . import config
from .movies import load_geojson, write_json

GRADIENT_TOP = (0x66, 0x7E, 0xEA)
GRADIENT_BOTTOM = (0x76, 0x4B, 0xA2)


def sprite_movies(features: List[dict]) -> List[dict]:
    seen = set()
    out = []
    for feature in features:
        props = feature.get("properties") or {}
        mid = props.get("movie_id")
        if mid is None or mid in seen:
            continue
        seen.add(mid)
        out.append(
            {
                "movie_id": mid,
                "poster": props.get("poster"),
                "thumbnail_52": props.get("thumbnail_52"),
            }
        )
    return out


def sprite_layout(
    movie_ids: List[str],
    columns: int = config.SPRITE_COLUMNS,
    icon_width: int = config.ICON_WIDTH,
    icon_height: int = config.ICON_HEIGHT,
    max_per_sprite: int = config.MAX_MOVIES_PER_SPRITE,
) -> Dict[str, dict]:
    layout: Dict[str, dict] = {}
    for n, mid in enumerate(movie_ids):
        sprite_index, i = divmod(n, max_per_sprite)
        row, col = divmod(i, columns)
        layout[f"poster-{mid}"] = {
            "x": col * icon_width,
            "y": row * icon_height,
            "width": icon_width,
            "height": icon_height,
            "pixelRatio": 1,
            "sprite": f"sprite-{sprite_index}",
        }
    return layout


def fallback_icon(width: int, height: int) -> Image.Image:
    icon = Image.new("RGBA", (width, height))
    for y in range(height):
        t = y / max(height - 1, 1)
        color = tuple(round(a + (b - a) * t) for a, b in zip(GRADIENT_TOP, GRADIENT_BOTTOM))
        icon.paste((*color, 255), (0, y, width, y + 1))
    return icon


def load_icon(public_dir: Path, image_path: str | None, size: Tuple[int, int]) -> Image.Image | None:
    if not image_path or image_path.startswith(("http://", "https://")):
        return None
    path = public_dir / image_path.lstrip("/")
    if not path.is_file():
        return None
    try:
        with Image.open(path) as img:
            return ImageOps.fit(img.convert("RGBA"), size, Image.LANCZOS, centering=(0.5, 0.5))
    except OSError as exc:
        print(f"Warning: failed to process {path}: {exc}", file=sys.stderr)
        return None


def render_sprites(
    movies: List[dict],
    output_dir: Path,
    public_dir: Path,
    columns: int = config.SPRITE_COLUMNS,
    icon_width: int = config.ICON_WIDTH,
    icon_height: int = config.ICON_HEIGHT,
    max_per_sprite: int = config.MAX_MOVIES_PER_SPRITE,
) -> dict:
    """Write sprite-<n>.png files and return the metadata document."""
    output_dir.mkdir(parents=True, exist_ok=True)
    layout = sprite_layout([m["movie_id"] for m in movies], columns, icon_width, icon_height, max_per_sprite)
    fallback = fallback_icon(icon_width, icon_height)
    total_sprites = math.ceil(len(movies) / max_per_sprite)

    for sprite_index in range(total_sprites):
        batch = movies[sprite_index * max_per_sprite : (sprite_index + 1) * max_per_sprite]
        rows = math.ceil(len(batch) / columns)
        sheet = Image.new("RGBA", (columns * icon_width, rows * icon_height), (0, 0, 0, 0))
        loaded = 0
        for movie in batch:
            icon = load_icon(public_dir, movie.get("thumbnail_52") or movie.get("poster"), (icon_width, icon_height))
            if icon is None:
                icon = fallback
            else:
                loaded += 1
            pos = layout[f"poster-{movie['movie_id']}"]
            sheet.paste(icon, (pos["x"], pos["y"]))
        out_path = output_dir / f"sprite-{sprite_index}.png"
        sheet.save(out_path, "PNG", optimize=True)
        print(f"  sprite {sprite_index + 1}/{total_sprites}: {sheet.width}x{sheet.height}, {loaded} posters, {len(batch) - loaded} fallbacks")

    return {
        "version": 1,
        "generatedAt": datetime.now(tz=timezone.utc).isoformat(timespec="seconds"),
        "totalMovies": len(movies),
        "totalSprites": total_sprites,
        "spriteWidth": columns * icon_width,
        "spriteHeight": math.ceil(max_per_sprite / columns) * icon_height,
        "iconWidth": icon_width,
        "iconHeight": icon_height,
        "sprites": layout,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate poster sprite sheets and metadata.")
    parser.add_argument("--input", type=Path, default=config.MOVIES_GEOJSON, help="movies.geojson")
    parser.add_argument("--public-dir", type=Path, default=config.PUBLIC_DIR, help="Root that thumbnail paths are relative to")
    parser.add_argument("--output-dir", type=Path, default=config.SPRITE_DIR, help="Directory for sprite PNGs")
    parser.add_argument("--metadata", type=Path, default=config.SPRITE_METADATA_FILE, help="Sprite metadata JSON")
    parser.add_argument("--columns", type=int, default=config.SPRITE_COLUMNS, help="Icons per row (default: 50)")
    parser.add_argument(
        "--max-per-sprite",
        type=int,
        default=config.MAX_MOVIES_PER_SPRITE,
        help="Icons per sprite sheet (default: 1000)",
    )
    args = parser.parse_args()
    if args.columns < 1 or args.max_per_sprite < 1:
        parser.error("--columns and --max-per-sprite must be positive")

    movies = sprite_movies(load_geojson(args.input).get("features", []))
    if not movies:
        raise SystemExit("No movies found for sprite generation.")
    print(f"Loaded {len(movies)} unique movies")

    metadata = render_sprites(movies, args.output_dir, args.public_dir, args.columns, max_per_sprite=args.max_per_sprite)
    write_json(args.metadata, metadata)
    print(f"Sprite metadata saved to {args.metadata}")
    print(f"Requests: {len(movies)} -> {metadata['totalSprites']}")


if __name__ == "__main__":
    main()
