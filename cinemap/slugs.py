"""
URL slugs for movie pages.

  "The Shawshank Redemption" -> "the-shawshank-redemption"
  "The Godfather: Part II"   -> "the-godfather-part-ii"
  "Amélie"                   -> "amelie"
"""
from __future__ import annotations

import re
import unicodedata
from typing import List, Tuple

MAX_BASE_LENGTH = 100
MAX_SLUG_LENGTH = 150
VALID_RE = re.compile(r"^[a-z0-9-]+$")
YEAR_SUFFIX_RE = re.compile(r"-(\d{4})$")


def generate_slug(title: str, year: int | None = None) -> str:
    slug = unicodedata.normalize("NFD", title.lower())
    slug = "".join(ch for ch in slug if not unicodedata.combining(ch))
    slug = slug.replace("&", "and").replace("@", "at")
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = re.sub(r"^-|-$", "", slug)
    slug = slug[:MAX_BASE_LENGTH]
    if year:
        slug = f"{slug}-{year}"
    return slug


def is_valid_slug(slug: str) -> bool:
    return bool(VALID_RE.match(slug)) and 0 < len(slug) <= MAX_SLUG_LENGTH


def parse_slug(slug: str) -> Tuple[str, int | None]:
    match = YEAR_SUFFIX_RE.search(slug)
    if match:
        year = int(match.group(1))
        if 1888 <= year <= 2100:
            return slug[: match.start()], year
    return slug, None


def generate_slug_variations(title: str, year: int, original_title: str | None = None) -> List[str]:
    variations = [generate_slug(title), generate_slug(title, year)]
    if original_title and original_title != title:
        variations += [generate_slug(original_title), generate_slug(original_title, year)]
    return list(dict.fromkeys(variations))


def simple_slugify(text: str) -> str:
    """ASCII-only slug used for English city names."""
    slug = re.sub(r"[^a-z0-9\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
