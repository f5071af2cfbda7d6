"""
Endpoint index over coastline segments.

Maps quantized start and end coordinates to segment ids so the ring builder
can find a continuation in O(1) on average instead of scanning every segment.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from .config import COORD_PRECISION
from .schema import Coordinate, CoordinateKey, MIN_SEGMENT_POINTS, Segment


def coord_key(coord: Coordinate, precision: int = COORD_PRECISION) -> CoordinateKey:
    """
    Quantize a coordinate to a string key.

    Coordinates that agree after rounding to ``precision`` decimals share a key.
    Negative zero is folded into zero so both sides of the prime meridian or
    equator quantize consistently.
    """
    lon = round(coord[0], precision) + 0.0
    lat = round(coord[1], precision) + 0.0
    return f"{lon:.{precision}f},{lat:.{precision}f}"


class EndpointIndex:
    """Start/end coordinate lookup for a fixed list of segments."""

    def __init__(self, starts: Dict[CoordinateKey, List[int]], ends: Dict[CoordinateKey, List[int]]):
        self.starts = starts
        self.ends = ends

    @classmethod
    def build(cls, segments: Sequence[Segment], precision: int = COORD_PRECISION) -> "EndpointIndex":
        starts: Dict[CoordinateKey, List[int]] = defaultdict(list)
        ends: Dict[CoordinateKey, List[int]] = defaultdict(list)
        for i, seg in enumerate(segments):
            if len(seg) < MIN_SEGMENT_POINTS:
                continue
            starts[coord_key(seg[0], precision)].append(i)
            ends[coord_key(seg[-1], precision)].append(i)
        return cls(dict(starts), dict(ends))

    @staticmethod
    def _first_free(candidates: List[int], consumed: Sequence[bool]) -> Optional[int]:
        for seg_id in candidates:
            if not consumed[seg_id]:
                return seg_id
        return None

    def next_start(self, key: CoordinateKey, consumed: Sequence[bool]) -> Optional[int]:
        """First unconsumed segment (in input order) starting at ``key``."""
        return self._first_free(self.starts.get(key, []), consumed)

    def next_end(self, key: CoordinateKey, consumed: Sequence[bool]) -> Optional[int]:
        """First unconsumed segment (in input order) ending at ``key``."""
        return self._first_free(self.ends.get(key, []), consumed)

    def __len__(self) -> int:
        return sum(len(ids) for ids in self.starts.values())
