"""
Tests for site statistics.
"""
from datetime import datetime, timezone

from cinemap.generate_site_stats import location_country, site_stats


def test_location_country():
    assert location_country({"description": "Montmartre, Paris, France"}) == "France"
    assert location_country({"description": "", "country": "Japan"}) == "Japan"
    assert location_country({}) is None


def test_site_stats(sample_movies):
    now = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)
    stats = site_stats(sample_movies, now=now)
    assert stats["totalMovies"] == 4
    assert stats["moviesWithLocations"] == 3
    assert stats["totalLocations"] == 4
    # descriptions win over the country field when present
    assert stats["uniqueCountries"] == 4
    assert stats["lastUpdated"] == "March 5, 2024"
    assert stats["generatedAt"] == "2024-03-05T12:00:00+00:00"


def test_empty_dataset():
    stats = site_stats([])
    assert stats["moviesWithLocations"] == 0
    assert stats["uniqueCountries"] == 0
