"""
Land-mask data shapes and output property names.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

# (longitude, latitude), GeoJSON order
Coordinate = Tuple[float, float]
Segment = List[Coordinate]
Ring = List[Coordinate]
CoordinateKey = str

MIN_SEGMENT_POINTS = 2
MIN_RING_POINTS = 4  # 3 distinct vertices + closing point

# Output feature properties
PROP_ID = "id"
PROP_AREA = "area"
PROP_NAME = "name"

MAINLAND_ID = "mainland"
MAINLAND_NAME = "Helsinki Mainland"

# Land hex parquet
# - h3_id (uint64)
# - res (int32)
LAND_HEX_COLUMNS = ("h3_id", "res")


@dataclass(frozen=True)
class RingStats:
    """Counters from one ring-building pass."""
    segments: int = 0
    malformed: int = 0
    closed_as_is: int = 0
    stitched: int = 0
    force_closed: int = 0
    discarded: int = 0
    overruns: int = 0

    @property
    def rings(self) -> int:
        return self.closed_as_is + self.stitched + self.force_closed
