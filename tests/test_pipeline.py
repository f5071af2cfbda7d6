"""
Test Land-Mask Pipeline

End-to-end build from an Overpass coastline dump to the merged land mask,
including the fixed-path CLI entry point.
"""
import json
import logging

import pytest

from landmask import cli, config
from landmask.errors import LandMaskIOError
from landmask.overpass import load_coastline_ways, ways_to_segments
from landmask.pipeline import build_land_mask, process_coastline


def way(way_id: int, lonlats: list) -> dict:
    return {
        "type": "way",
        "id": way_id,
        "nodes": list(range(len(lonlats))),
        "geometry": [{"lat": lat, "lon": lon} for lon, lat in lonlats],
    }


def write_overpass(path, elements: list) -> str:
    path.write_text(json.dumps({"version": 0.6, "elements": elements}))
    return str(path)


@pytest.fixture
def coastline(tmp_path):
    """Island split into two ways (one stored backwards), plus noise."""
    elements = [
        {"type": "node", "id": 1, "lat": 60.15, "lon": 24.9},
        way(10, [(24.90, 60.14), (25.00, 60.14), (25.00, 60.24)]),
        way(11, [(24.90, 60.14), (24.90, 60.24), (25.00, 60.24)]),
        way(12, [(25.10, 60.12)]),
        way(13, [(25.20, 60.12), (25.201, 60.12), (25.201, 60.121), (25.20, 60.12)]),
        {"type": "way", "id": 14},
    ]
    return write_overpass(tmp_path / "coastline.json", elements)


class TestOverpassInput:
    """Test suite for reading coastline ways."""

    def test_ways_to_segments_lon_lat(self):
        """Points become (lon, lat); non-ways and geometry-less ways are skipped."""
        segments = ways_to_segments([
            {"type": "node", "lat": 1, "lon": 2},
            way(1, [(24.9, 60.1), (25.0, 60.2)]),
            {"type": "way", "id": 2, "geometry": []},
        ])
        assert segments == [[(24.9, 60.1), (25.0, 60.2)]]

    def test_load(self, coastline):
        segments = load_coastline_ways(coastline)
        assert len(segments) == 4
        assert segments[2] == [(25.10, 60.12)]

    def test_unreadable_input_is_fatal(self, tmp_path):
        with pytest.raises(LandMaskIOError):
            load_coastline_ways(str(tmp_path / "missing.json"))

    def test_invalid_json_is_fatal(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(LandMaskIOError):
            load_coastline_ways(str(path))

    def test_missing_elements_is_fatal(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"version": 0.6}))
        with pytest.raises(LandMaskIOError):
            load_coastline_ways(str(path))


class TestPipeline:
    """Test suite for the offline build."""

    def test_process_coastline(self, coastline, tmp_path):
        """Only the stitched island survives the area filter."""
        islands_path = tmp_path / "islands.geojson"

        islands = process_coastline(coastline, str(islands_path))

        assert len(islands["features"]) == 1
        feature = islands["features"][0]
        ring = feature["geometry"]["coordinates"][0]
        assert ring[0] == ring[-1]
        assert len(ring) == 5
        assert feature["properties"]["area"] == pytest.approx(0.01)
        assert json.loads(islands_path.read_text()) == islands

    def test_build_land_mask(self, coastline, tmp_path):
        """Merged output is mainland followed by islands."""
        output = tmp_path / "combined.geojson"

        combined = build_land_mask(coastline, str(tmp_path / "islands.geojson"), str(output))

        ids = [f["properties"]["id"] for f in combined["features"]]
        assert ids == ["mainland", "island-0"]
        assert json.loads(output.read_text()) == combined

    def test_idempotent(self, coastline, tmp_path):
        """Identical input gives byte-identical output."""
        first, second = tmp_path / "a.geojson", tmp_path / "b.geojson"

        build_land_mask(coastline, str(tmp_path / "ia.geojson"), str(first))
        build_land_mask(coastline, str(tmp_path / "ib.geojson"), str(second))

        assert first.read_bytes() == second.read_bytes()

    def test_zero_rings_warns(self, tmp_path, caplog):
        """No significant rings is a warning, not a failure."""
        source = write_overpass(tmp_path / "coast.json", [way(1, [(24.9, 60.1), (25.0, 60.2)])])

        with caplog.at_level(logging.WARNING, logger="landmask.pipeline"):
            combined = build_land_mask(source, str(tmp_path / "i.geojson"), str(tmp_path / "o.geojson"))

        assert len(combined["features"]) == 1
        assert "No rings above" in caplog.text


class TestCLI:
    """Test suite for the fixed-path entry point."""

    def test_success(self, coastline, tmp_path, monkeypatch):
        output = tmp_path / "land" / "combined.geojson"
        monkeypatch.setattr(config, "INPUT_PATH", coastline)
        monkeypatch.setattr(config, "ISLANDS_PATH", str(tmp_path / "land" / "islands.geojson"))
        monkeypatch.setattr(config, "OUTPUT_PATH", str(output))

        assert cli.main([]) == 0
        assert output.exists()

    def test_missing_input(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "INPUT_PATH", str(tmp_path / "missing.json"))
        monkeypatch.setattr(config, "ISLANDS_PATH", str(tmp_path / "islands.geojson"))
        monkeypatch.setattr(config, "OUTPUT_PATH", str(tmp_path / "combined.geojson"))

        assert cli.main([]) == 1
