"""
Unit tests for the shared geometry helpers.
"""
import pytest

from cinemap.geo import (
    calculate_bounds,
    calculate_centroid,
    feature_coordinates,
    h3_cell,
    h3_polygon,
    parse_timestamp,
    path_length_km,
    within_bounds,
)


class TestBoundsAndCentroid:
    def test_centroid_is_mean(self):
        assert calculate_centroid([[0, 0], [2, 4]]) == [1.0, 2.0]

    def test_centroid_of_nothing_raises(self):
        with pytest.raises(ValueError):
            calculate_centroid([])

    def test_bounds(self):
        assert calculate_bounds([[2, 48], [-1, 50], [139, 35]]) == [-1.0, 35.0, 139.0, 50.0]

    def test_empty_bounds(self):
        assert calculate_bounds([]) == [0, 0, 0, 0]

    def test_within_bounds_is_inclusive(self):
        bounds = [-1.0, 35.0, 139.0, 50.0]
        assert within_bounds([139.0, 35.0], bounds)
        assert not within_bounds([140.0, 35.0], bounds)


class TestFeatureCoordinates:
    def test_point_and_multipoint(self):
        point = {"geometry": {"type": "Point", "coordinates": [1, 2]}}
        multi = {"geometry": {"type": "MultiPoint", "coordinates": [[1, 2], [3, 4]]}}
        assert feature_coordinates(point) == [[1, 2]]
        assert feature_coordinates(multi) == [[1, 2], [3, 4]]

    def test_polygon_is_ignored(self):
        poly = {"geometry": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [0, 1], [0, 0]]]}}
        assert feature_coordinates(poly) == []


class TestGeodesy:
    def test_paris_tokyo_distance(self):
        km = path_length_km([[2.3522, 48.8566], [139.6503, 35.6762]])
        assert 9600 < km < 9800

    def test_single_point_has_no_length(self):
        assert path_length_km([[2.3522, 48.8566]]) == 0.0

    def test_h3_polygon_is_closed(self):
        cell = h3_cell(48.8566, 2.3522, 3)
        assert cell
        ring = h3_polygon(cell)["coordinates"][0]
        assert ring[0] == ring[-1]
        assert len(ring) >= 7


class TestParseTimestamp:
    def test_date_only(self):
        raw, ts = parse_timestamp("2009-06-20")
        assert raw == "2009-06-20"
        assert ts == 1245456000.0

    def test_zulu(self):
        assert parse_timestamp("2009-06-20T00:00:00Z")[1] == 1245456000.0

    def test_garbage(self):
        assert parse_timestamp("sometime") == ("sometime", None)
        assert parse_timestamp(None) == (None, None)
