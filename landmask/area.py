"""
Planar ring area and significance ranking.

Areas are in square degrees from the shoelace formula. That is only meaningful
for comparing rings inside one small region at near-constant latitude, which
is all it is used for here. Do not use it for real-world areas.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .config import BuildParams, DEFAULT_PARAMS
from .schema import Ring


def ring_area(ring: Ring) -> float:
    """
    Shoelace area of a closed ring (first point == last point).

    Returns:
        Non-negative area in squared coordinate units
    """
    if len(ring) < 2:
        return 0.0
    xy = np.asarray(ring, dtype=np.float64)
    x, y = xy[:, 0], xy[:, 1]
    cross = np.dot(x[:-1], y[1:]) - np.dot(x[1:], y[:-1])
    return float(abs(cross) / 2.0)


def select_significant(
    rings: Sequence[Ring],
    params: BuildParams = DEFAULT_PARAMS,
) -> List[Tuple[Ring, float]]:
    """
    Drop noise rings and keep the largest land masses.

    Args:
        rings: Closed rings from the ring builder
        params: ``min_ring_area`` threshold and ``max_land_masses`` cap

    Returns:
        Up to ``max_land_masses`` (ring, area) pairs, largest first. Ties keep
        discovery order.
    """
    scored = [(ring, ring_area(ring)) for ring in rings]
    significant = [(ring, area) for ring, area in scored if area > params.min_ring_area]
    significant.sort(key=lambda pair: pair[1], reverse=True)
    return significant[: params.max_land_masses]
