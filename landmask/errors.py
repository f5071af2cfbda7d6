"""
Exceptions raised while building the land mask.

Only ``LandMaskIOError`` is fatal. The others are raised inside the ring
builder and handled there by skipping or discarding the offending input.
"""


class LandMaskError(Exception):
    pass


class MalformedSegment(LandMaskError):
    """Segment with fewer than two coordinates."""

    def __init__(self, segment_id: int, size: int):
        super().__init__(f"segment {segment_id} has {size} coordinate(s)")
        self.segment_id = segment_id


class UnclosableFragment(LandMaskError):
    """Open chain too short to force-close."""

    def __init__(self, segment_id: int, size: int):
        super().__init__(f"chain seeded by segment {segment_id} stopped open with {size} points")
        self.segment_id = segment_id
        self.size = size


class RingBuilderOverrun(LandMaskError):
    """Ring extension exceeded the iteration cap."""

    def __init__(self, segment_id: int, iterations: int, size: int):
        super().__init__(
            f"ring seeded by segment {segment_id} exceeded {iterations} extensions "
            f"({size} points); abandoned"
        )
        self.segment_id = segment_id
        self.size = size


class LandMaskIOError(LandMaskError):
    """Input unreadable or output unwritable."""
