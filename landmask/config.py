"""
Land-mask build configuration.

Paths, bounding box and the policy knobs for ring reconstruction. The knobs
are bundled in ``BuildParams`` so tests and scripts can override them without
touching module globals.
"""
from __future__ import annotations

from dataclasses import dataclass

from .schema import MIN_RING_POINTS

# Helsinki area bounds (slightly expanded), decimal degrees
BOUNDS = {
    "west": 24.78,
    "south": 60.10,
    "east": 25.25,
    "north": 60.30,
}

# Fixed artifact locations for the offline build
INPUT_PATH = "data/coastline/helsinki_coastline.json"
ISLANDS_PATH = "data/land/helsinki-land.geojson"
OUTPUT_PATH = "data/land/helsinki-land-combined.geojson"
LAND_HEX_PATH = "data/land/helsinki_land_hexes.parquet"

# Overpass API for coastline ways
OVERPASS_URL = "https://overpass-api.de/api/interpreter"
OVERPASS_TIMEOUT_SECONDS = 180

# Endpoint matching: 6 decimals ~ 0.1 m at this latitude
COORD_PRECISION = 6

# Ring reconstruction policy
FORCE_CLOSE_MIN_POINTS = 10   # open chains with more points than this are force-closed
MAX_RING_ITERATIONS = 10000   # per-ring extension cap
MIN_RING_AREA = 0.0001        # square degrees; smaller rings are noise
MAX_LAND_MASSES = 50          # mainland + major islands

# H3 resolutions
H3_RES_LAND = 9  # base resolution for stored data
H3_ZOOM_RESOLUTIONS = (
    (10, 6),  # ~3.2km edge
    (12, 7),  # ~1.2km edge
    (13, 8),  # ~460m edge
)


@dataclass(frozen=True)
class BuildParams:
    coord_precision: int = COORD_PRECISION
    force_close_min_points: int = FORCE_CLOSE_MIN_POINTS
    max_ring_iterations: int = MAX_RING_ITERATIONS
    min_ring_area: float = MIN_RING_AREA
    max_land_masses: int = MAX_LAND_MASSES

    def __post_init__(self):
        # A force-closed chain gains one point and must still reach MIN_RING_POINTS
        if self.force_close_min_points < MIN_RING_POINTS - 2:
            raise ValueError(
                f"force_close_min_points must be >= {MIN_RING_POINTS - 2}, got {self.force_close_min_points}"
            )
        if self.max_ring_iterations < 1:
            raise ValueError(f"max_ring_iterations must be >= 1, got {self.max_ring_iterations}")
        if self.coord_precision < 0:
            raise ValueError(f"coord_precision must be >= 0, got {self.coord_precision}")
        if self.max_land_masses < 0:
            raise ValueError(f"max_land_masses must be >= 0, got {self.max_land_masses}")


DEFAULT_PARAMS = BuildParams()
