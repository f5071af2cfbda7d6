"""
Checks on reconstructed rings and land-hex output.

Ring checks only report. Self-intersecting rings are logged but kept: the
point-in-land classifier assumes simple polygons, and this is where that
assumption becomes visible, not where it gets fixed.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Set

import pandas as pd
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from .schema import LAND_HEX_COLUMNS, MIN_RING_POINTS, Ring

logger = logging.getLogger(__name__)


def check_ring_invariants(ring: Ring) -> None:
    """
    Raises:
        ValueError: if the ring is open or has fewer than 4 points
    """
    if len(ring) < MIN_RING_POINTS:
        raise ValueError(f"Ring has {len(ring)} points; need at least {MIN_RING_POINTS}")
    if tuple(ring[0]) != tuple(ring[-1]):
        raise ValueError(f"Ring is not closed: {ring[0]} != {ring[-1]}")


def report_invalid_rings(rings: Sequence[Ring]) -> List[int]:
    """
    Log rings that are not simple polygons.

    Returns:
        Indexes of rings shapely considers invalid (self-intersections,
        spikes, repeated points forming zero-width parts)
    """
    invalid: List[int] = []
    for i, ring in enumerate(rings):
        poly = Polygon(ring)
        if not poly.is_valid:
            invalid.append(i)
            logger.warning(f"Ring {i} ({len(ring)} points) is not simple: {explain_validity(poly)}")
    if invalid:
        logger.warning(f"{len(invalid)}/{len(rings)} rings are not simple polygons")
    return invalid


def validate_columns(df: pd.DataFrame, required_columns: Set[str]) -> None:
    """
    Raises:
        ValueError: if any required columns are missing
    """
    missing = required_columns - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Found columns: {set(df.columns)}")


def validate_land_hex_output(df: pd.DataFrame) -> None:
    """
    Validate the land-hex table: uint64 ``h3_id``, int32 ``res``, no nulls,
    no duplicate (h3_id, res) pairs.

    Raises:
        ValueError: if schema validation fails
    """
    h3_id_column, res_column = LAND_HEX_COLUMNS
    validate_columns(df, set(LAND_HEX_COLUMNS))

    if df[h3_id_column].dtype != "uint64":
        raise ValueError(f"Column '{h3_id_column}' must be uint64, got {df[h3_id_column].dtype}")
    if df[res_column].dtype != "int32":
        raise ValueError(f"Column '{res_column}' must be int32, got {df[res_column].dtype}")

    null_count = df[h3_id_column].isna().sum()
    if null_count > 0:
        raise ValueError(f"Found {null_count} null values in '{h3_id_column}' column")

    dup_count = df.duplicated(subset=[h3_id_column, res_column]).sum()
    if dup_count > 0:
        raise ValueError(f"Found {dup_count} duplicate ({h3_id_column}, {res_column}) pairs")
