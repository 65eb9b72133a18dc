"""
Pytest configuration and fixtures for all tests.
"""
import json

import pytest


@pytest.fixture
def sample_movies():
    """Small enriched-movie dataset: a multi-location timeline movie, two Paris movies, one without locations."""
    return [
        {
            "movie_id": "tt1375666",
            "imdb_id": "tt1375666",
            "tmdb_id": 27205,
            "title": "Inception",
            "year": 2010,
            "genres": ["Action", "Science Fiction"],
            "poster_path": "/inception.jpg",
            "overview": "A thief who steals corporate secrets through dream-sharing technology " * 5,
            "imdb_rating": 8.8,
            "trailer": "YoHD9XEInc0",
            "locations": [
                {
                    "lat": 48.8566,
                    "lng": 2.3522,
                    "city": "Paris",
                    "country": "France",
                    "description": "Bir-Hakeim bridge",
                    "display_name": "Paris, Île-de-France, France",
                    "start_date": "2009-08-01",
                },
                {
                    "lat": 35.6762,
                    "lng": 139.6503,
                    "city": "Tokyo",
                    "country": "Japan",
                    "description": "",
                    "display_name": "東京, Japan",
                    "start_date": "2009-06-20",
                },
            ],
        },
        {
            "movie_id": "tt0211915",
            "imdb_id": "tt0211915",
            "tmdb_id": 194,
            "title": "Amélie",
            "year": 2001,
            "genres": ["Comedy", "Romance"],
            "poster": "/posters/amelie.jpg",
            "thumbnail_52": "/thumbs/amelie.png",
            "overview": "Amélie is an innocent and naive girl in Paris.",
            "vote_average": 7.9,
            "locations": [
                {
                    "lat": 48.8867,
                    "lng": 2.3431,
                    "city": "Paris",
                    "country": "France",
                    "description": "Montmartre",
                    "display_name": "Paris, France",
                }
            ],
        },
        {
            "movie_id": "tt0381681",
            "imdb_id": "tt0381681",
            "tmdb_id": 80,
            "title": "Before Sunset",
            "year": 2004,
            "genres": ["Drama", "Romance"],
            "imdb_rating": 8.1,
            "locations": [
                {
                    "lat": 48.8530,
                    "lng": 2.3499,
                    "city": "Paris",
                    "country": "France",
                    "description": "Shakespeare and Company",
                    "display_name": "Paris, France",
                }
            ],
        },
        {
            "movie_id": "tt0000001",
            "imdb_id": "tt0000001",
            "tmdb_id": 1,
            "title": "Nowhere",
            "year": 1999,
            "genres": [],
            "locations": [],
        },
    ]


@pytest.fixture
def movies_file(tmp_path, sample_movies):
    path = tmp_path / "movies_enriched.json"
    path.write_text(json.dumps(sample_movies), encoding="utf-8")
    return path
