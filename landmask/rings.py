"""
Stitch open coastline segments into closed rings.

OSM splits a coastline into many ways whose endpoints touch. Walking from one
way to the next through the endpoint index reassembles each land mass
boundary. Ways are sometimes stored in the opposite direction, so a chain that
finds no way *starting* at its tail also tries ways *ending* there and appends
them reversed.

Endpoints match by quantized key, so a ring that closes on a key gets its
last point overwritten by its first; stitched output can therefore differ
from the input vertex by up to the quantization step (1e-6 degrees).

Junction policy: when several unconsumed ways touch the tail, the first one in
input order wins. This is deterministic but not geometrically informed.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import List, Sequence, Tuple

from .config import BuildParams, DEFAULT_PARAMS
from .endpoints import EndpointIndex, coord_key
from .errors import MalformedSegment, RingBuilderOverrun, UnclosableFragment
from .schema import MIN_RING_POINTS, MIN_SEGMENT_POINTS, Ring, RingStats, Segment

logger = logging.getLogger(__name__)


class RingBuilder:
    """
    Single greedy traversal over a fixed segment list.

    ``consumed`` holds one tag per segment id and is only written by this
    traversal; each segment ends up in at most one ring.
    """

    def __init__(self, segments: Sequence[Segment], params: BuildParams = DEFAULT_PARAMS):
        self.segments = segments
        self.params = params
        self.index = EndpointIndex.build(segments, params.coord_precision)
        self.consumed = [False] * len(segments)
        self._counts: Counter = Counter()

    def _key(self, coord) -> str:
        return coord_key(coord, self.params.coord_precision)

    def _is_closed(self, ring: Ring) -> bool:
        return len(ring) >= MIN_RING_POINTS and self._key(ring[0]) == self._key(ring[-1])

    @staticmethod
    def _seal(ring: Ring) -> Ring:
        # Endpoints matched by key; make the closing point exact
        if ring[-1] != ring[0]:
            ring[-1] = ring[0]
        return ring

    def _check_segment(self, seg_id: int) -> Segment:
        seg = self.segments[seg_id]
        if len(seg) < MIN_SEGMENT_POINTS:
            raise MalformedSegment(seg_id, len(seg))
        return seg

    def _extend(self, ring: Ring) -> bool:
        tail = self._key(ring[-1])

        seg_id = self.index.next_start(tail, self.consumed)
        if seg_id is not None:
            ring.extend(self.segments[seg_id][1:])
            self.consumed[seg_id] = True
            return True

        seg_id = self.index.next_end(tail, self.consumed)
        if seg_id is not None:
            ring.extend(self.segments[seg_id][-2::-1])
            self.consumed[seg_id] = True
            return True

        return False

    def _dead_end(self, seed_id: int, ring: Ring) -> Ring:
        if len(ring) > self.params.force_close_min_points:
            ring.append(ring[0])
            self._counts["force_closed"] += 1
            return ring
        raise UnclosableFragment(seed_id, len(ring))

    def _grow(self, seed_id: int) -> Ring:
        """Grow a ring from ``seed_id`` until it closes, dead-ends or overruns."""
        ring: Ring = list(self.segments[seed_id])
        self.consumed[seed_id] = True

        for _ in range(self.params.max_ring_iterations):
            if self._is_closed(ring):
                self._counts["stitched"] += 1
                return self._seal(ring)
            if not self._extend(ring):
                return self._dead_end(seed_id, ring)

        raise RingBuilderOverrun(seed_id, self.params.max_ring_iterations, len(ring))

    def run(self) -> List[Ring]:
        rings: List[Ring] = []
        for seg_id in range(len(self.segments)):
            if self.consumed[seg_id]:
                continue
            try:
                seg = self._check_segment(seg_id)
            except MalformedSegment as exc:
                logger.debug(f"Skipping {exc}")
                self._counts["malformed"] += 1
                continue

            if self._key(seg[0]) == self._key(seg[-1]):
                self.consumed[seg_id] = True
                if len(seg) < MIN_RING_POINTS:
                    logger.debug(f"Discarding degenerate closed segment {seg_id} ({len(seg)} points)")
                    self._counts["discarded"] += 1
                    continue
                rings.append(self._seal(list(seg)))
                self._counts["closed_as_is"] += 1
                continue

            try:
                rings.append(self._grow(seg_id))
            except UnclosableFragment as exc:
                logger.debug(f"Discarding {exc}")
                self._counts["discarded"] += 1
            except RingBuilderOverrun as exc:
                logger.warning(str(exc))
                self._counts["overruns"] += 1
        return rings

    @property
    def stats(self) -> RingStats:
        return RingStats(segments=len(self.segments), **self._counts)


def build_rings(
    segments: Sequence[Segment],
    params: BuildParams = DEFAULT_PARAMS,
) -> Tuple[List[Ring], RingStats]:
    """
    Reconstruct closed rings from coastline segments.

    Args:
        segments: Ordered (lon, lat) coordinate lists, one per OSM way
        params: Reconstruction policy (precision, force-close size, iteration cap)

    Returns:
        Tuple of (rings in discovery order, build counters)
    """
    builder = RingBuilder(segments, params)
    rings = builder.run()
    stats = builder.stats
    logger.info(
        f"Merged {stats.segments} segments into {len(rings)} rings "
        f"({stats.closed_as_is} closed, {stats.stitched} stitched, {stats.force_closed} force-closed; "
        f"{stats.discarded} discarded, {stats.malformed} malformed, {stats.overruns} overruns)"
    )
    return rings, stats
