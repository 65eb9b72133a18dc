"""
Tests for the tippecanoe NDJSON stream and tile index validation.
"""
import json
import sys

import pytest

from cinemap import stream_features, validate_tiles
from cinemap.geo import h3_cell, h3_polygon
from cinemap.stream_features import in_year_range, stream
from cinemap.transform_to_geojson import (
    build_overview,
    chunk_features,
    generate_tile_index,
    transform_to_geojson,
)
from cinemap.validate_tiles import validate, validate_overview


@pytest.fixture
def features(sample_movies):
    return transform_to_geojson(sample_movies)["features"]


@pytest.fixture
def geo_dir(tmp_path, features):
    chunks = chunk_features(features, 2)
    for i, chunk in enumerate(chunks):
        (tmp_path / f"movies_page_{i + 1}.json").write_text(json.dumps(chunk))
    (tmp_path / "overview_h3.geojson").write_text(json.dumps(build_overview(features, 3)))
    index = generate_tile_index(chunks, 2, overview_file="overview_h3.geojson")
    (tmp_path / "tile_index.json").write_text(json.dumps(index))
    return tmp_path


class TestStream:
    def test_raw_then_aggregates(self, features):
        out = list(stream(features, h3_res=3, low_zoom_max=3, high_zoom_min=4))
        raw = [f for f in out if "movie_id" in f["properties"]]
        cells = [f for f in out if "cell" in f["properties"]]
        assert len(raw) == 3
        assert all(f["properties"]["tippecanoe"] == {"minzoom": 4} for f in raw)
        assert all("centroid" not in f["properties"] for f in raw)
        assert all(f["properties"]["tippecanoe"] == {"minzoom": 0, "maxzoom": 3} for f in cells)
        assert out.index(cells[0]) > out.index(raw[-1])

    def test_omit_raw_and_year_filter(self, features):
        out = list(stream(features, 3, 3, 4, include_raw=False, min_year=2005))
        assert all("cell" in f["properties"] for f in out)
        assert sum(f["properties"]["count"] for f in out) == 2

    def test_year_range(self):
        assert in_year_range({"year": 2001}, 2000, 2001)
        assert not in_year_range({"year": 1999}, 2000, None)
        assert not in_year_range({}, 2000, None)
        assert in_year_range({}, None, None)

    def test_main_writes_ndjson(self, tmp_path, sample_movies, monkeypatch, capsys):
        path = tmp_path / "movies.geojson"
        path.write_text(json.dumps(transform_to_geojson(sample_movies)))
        monkeypatch.setattr(sys, "argv", ["stream", "--input", str(path), "--max-year", "2005"])
        stream_features.main()

        lines = capsys.readouterr().out.splitlines()
        out = [json.loads(line) for line in lines]
        raw = [f for f in out if "movie_id" in f["properties"]]
        assert sorted(f["properties"]["title"] for f in raw) == ["Amélie", "Before Sunset"]
        assert all(f["properties"]["tippecanoe"] == {"minzoom": 4} for f in raw)
        cells = [f for f in out if "cell" in f["properties"]]
        assert sum(f["properties"]["count"] for f in cells) == 2

    def test_main_closed_pipe(self, tmp_path, sample_movies, monkeypatch):
        class ClosedPipe:
            def write(self, text):
                raise BrokenPipeError

        path = tmp_path / "movies.geojson"
        path.write_text(json.dumps(transform_to_geojson(sample_movies)))
        monkeypatch.setattr(sys, "argv", ["stream", "--input", str(path)])
        monkeypatch.setattr(sys, "stdout", ClosedPipe())
        stream_features.main()


class TestValidate:
    def test_consistent_output(self, geo_dir):
        index = json.loads((geo_dir / "tile_index.json").read_text())
        assert validate(geo_dir, index) == []

    def test_missing_chunk_and_bad_count(self, geo_dir):
        index = json.loads((geo_dir / "tile_index.json").read_text())
        (geo_dir / "movies_page_2.json").unlink()
        index["zoom_levels"]["0"]["chunks"][0]["feature_count"] = 99
        problems = validate(geo_dir, index)
        assert any("missing chunk movies_page_2.json" in p for p in problems)
        assert any("feature_count 99" in p for p in problems)

    def test_out_of_bounds(self, geo_dir):
        index = json.loads((geo_dir / "tile_index.json").read_text())
        for level in index["zoom_levels"].values():
            level["chunks"][0]["bounds"] = [0, 0, 1, 1]
        problems = validate(geo_dir, index)
        assert any("outside" in p for p in problems)

    def test_main_exit_code(self, geo_dir, monkeypatch):
        (geo_dir / "movies_page_1.json").write_text(json.dumps({"type": "FeatureCollection", "features": []}))
        monkeypatch.setattr(sys, "argv", ["validate", "--geo-dir", str(geo_dir)])
        with pytest.raises(SystemExit) as exc:
            validate_tiles.main()
        assert exc.value.code == 1

    def test_missing_chunk_reported_once(self, geo_dir):
        index = json.loads((geo_dir / "tile_index.json").read_text())
        (geo_dir / "movies_page_1.json").unlink()
        problems = validate(geo_dir, index)
        assert len(index["zoom_levels"]) > 1
        assert len([p for p in problems if "missing chunk movies_page_1.json" in p]) == 1

    def test_overview_cell_without_location(self, geo_dir, features):
        overview = build_overview(features, 3)
        assert validate_overview(overview, [{"features": features}]) == []

        cell = h3_cell(-45.0, 170.0, 3)
        overview["features"].append(
            {"type": "Feature", "properties": {"cell": cell, "res": 3}, "geometry": h3_polygon(cell)}
        )
        problems = validate_overview(overview, [{"features": features}])
        assert len(problems) == 1
        assert problems[0].startswith("1 overview cells have no filming location")
        assert cell in problems[0]
