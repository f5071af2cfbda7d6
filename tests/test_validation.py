"""
Test Ring Validation and Coastline Download
"""
import logging

import pytest
import requests

from landmask import overpass
from landmask.errors import LandMaskIOError
from landmask.validation import check_ring_invariants, report_invalid_rings


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200, fail_after: int = None):
        self.body = body
        self.status = status
        self.fail_after = fail_after

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def iter_content(self, chunk_size=1):
        for n, i in enumerate(range(0, len(self.body), chunk_size)):
            if self.fail_after is not None and n >= self.fail_after:
                raise requests.ConnectionError("connection reset")
            yield self.body[i:i + chunk_size]


class TestRingChecks:
    """Test suite for ring invariant checks."""

    def test_valid_ring(self):
        check_ring_invariants([(0, 0), (1, 0), (1, 1), (0, 0)])

    def test_open_ring(self):
        with pytest.raises(ValueError):
            check_ring_invariants([(0, 0), (1, 0), (1, 1), (0, 1)])

    def test_too_short(self):
        with pytest.raises(ValueError):
            check_ring_invariants([(0, 0), (1, 0), (0, 0)])

    def test_self_intersection_reported(self, caplog):
        """Bow-tie rings are logged but not repaired."""
        bowtie = [(0, 0), (1, 1), (1, 0), (0, 1), (0, 0)]
        square = [(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]

        with caplog.at_level(logging.WARNING, logger="landmask.validation"):
            invalid = report_invalid_rings([square, bowtie])

        assert invalid == [1]
        assert "Ring 1" in caplog.text


class TestFetchCoastline:
    """Test suite for the Overpass download."""

    def test_query_uses_bounds(self):
        query = overpass.coastline_query({"west": 24.78, "south": 60.1, "east": 25.25, "north": 60.3})
        assert 'way["natural"="coastline"](60.1,24.78,60.3,25.25)' in query
        assert "out geom" in query

    def test_existing_file_not_downloaded(self, tmp_path, monkeypatch):
        path = tmp_path / "coast.json"
        path.write_text("{}")

        def fail(*args, **kwargs):
            raise AssertionError("network used")

        monkeypatch.setattr(overpass.requests, "post", fail)
        assert overpass.fetch_coastline(str(path)) == str(path)

    def test_download(self, tmp_path, monkeypatch):
        body = b'{"elements": []}'
        monkeypatch.setattr(overpass.requests, "post", lambda *a, **k: FakeResponse(body))
        path = tmp_path / "nested" / "coast.json"

        overpass.fetch_coastline(str(path))

        assert path.read_bytes() == body

    def test_http_error_is_fatal(self, tmp_path, monkeypatch):
        monkeypatch.setattr(overpass.requests, "post", lambda *a, **k: FakeResponse(b"", status=504))
        with pytest.raises(LandMaskIOError):
            overpass.fetch_coastline(str(tmp_path / "coast.json"), force=True)

    def test_interrupted_download_leaves_no_file(self, tmp_path, monkeypatch):
        """A dropped connection leaves nothing behind, so the next call retries."""
        body = b'{"elements": [' + b" " * 20000 + b"]}"
        responses = [FakeResponse(body, fail_after=1), FakeResponse(b'{"elements": []}')]
        monkeypatch.setattr(overpass.requests, "post", lambda *a, **k: responses.pop(0))
        path = tmp_path / "coast.json"

        with pytest.raises(LandMaskIOError):
            overpass.fetch_coastline(str(path))

        assert not path.exists()
        assert not (tmp_path / "coast.json.part").exists()

        overpass.fetch_coastline(str(path))

        assert responses == []
        assert overpass.load_coastline_ways(str(path)) == []

    def test_failed_refresh_keeps_previous_file(self, tmp_path, monkeypatch):
        """A forced re-download that breaks does not clobber the existing dump."""
        path = tmp_path / "coast.json"
        path.write_text('{"elements": []}')
        body = b'{"elements": [' + b" " * 20000 + b"]}"
        monkeypatch.setattr(overpass.requests, "post", lambda *a, **k: FakeResponse(body, fail_after=1))

        with pytest.raises(LandMaskIOError):
            overpass.fetch_coastline(str(path), force=True)

        assert path.read_text() == '{"elements": []}'
