"""
H3 helpers for land-filtered hex grids.

Covers the bounding box with cells at a resolution, then keeps the cells
whose centroid the land mask classifies as land.
"""
from __future__ import annotations

import logging
import os
from typing import List, Sequence, Tuple

import h3
import numpy as np
import pandas as pd

from .classify import LandMask
from .config import BOUNDS, H3_RES_LAND, H3_ZOOM_RESOLUTIONS
from .errors import LandMaskIOError
from .validation import validate_land_hex_output

logger = logging.getLogger(__name__)


def h3_resolution_for_zoom(zoom: float) -> int:
    """Lower zoom means larger hexes; capped at the stored base resolution."""
    for max_zoom, res in H3_ZOOM_RESOLUTIONS:
        if zoom <= max_zoom:
            return res
    return H3_RES_LAND


def bbox_to_polygon(bbox: dict) -> dict:
    """GeoJSON polygon for a 'west'/'south'/'east'/'north' bounding box."""
    return {
        "type": "Polygon",
        "coordinates": [[
            [bbox["west"], bbox["south"]],
            [bbox["east"], bbox["south"]],
            [bbox["east"], bbox["north"]],
            [bbox["west"], bbox["north"]],
            [bbox["west"], bbox["south"]],
        ]],
    }


def bounds_to_cells(bounds: dict, resolution: int) -> List[str]:
    """All cells whose centroid falls within ``bounds``, sorted for stable output."""
    return sorted(h3.geo_to_cells(bbox_to_polygon(bounds), resolution))


def cell_center(cell: str) -> Tuple[float, float]:
    """Cell centroid as (lon, lat)."""
    lat, lon = h3.cell_to_latlng(cell)
    return lon, lat


def cell_boundary(cell: str) -> List[Tuple[float, float]]:
    """Closed (lon, lat) boundary ring of a cell."""
    ring = [(lon, lat) for lat, lon in h3.cell_to_boundary(cell)]
    if ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def hexes_on_land(cells: Sequence[str], mask: LandMask) -> List[str]:
    """Keep cells whose centroid is on land."""
    if not cells:
        return []
    centers = [cell_center(c) for c in cells]
    lons = [lon for lon, _ in centers]
    lats = [lat for _, lat in centers]
    on_land = mask.contains_many(lons, lats)
    return [cell for cell, keep in zip(cells, on_land) if keep]


def land_hex_universe(
    mask: LandMask,
    resolutions: Sequence[int] = (H3_RES_LAND,),
    bounds: dict = BOUNDS,
) -> pd.DataFrame:
    """
    Land cells covering ``bounds`` at each resolution.

    Returns:
        DataFrame with columns ['h3_id' (uint64), 'res' (int32)]
    """
    records: List[Tuple[int, int]] = []
    for res in resolutions:
        cells = bounds_to_cells(bounds, res)
        land = hexes_on_land(cells, mask)
        logger.info(f"res={res}: {len(land)}/{len(cells)} cells on land")
        records.extend((int(h3.str_to_int(cell)), res) for cell in land)

    df = pd.DataFrame(records, columns=["h3_id", "res"])
    df["h3_id"] = df["h3_id"].astype(np.uint64)
    df["res"] = df["res"].astype(np.int32)
    return df.drop_duplicates(ignore_index=True)


def write_land_hexes(df: pd.DataFrame, path: str) -> None:
    validate_land_hex_output(df)
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        df.to_parquet(path, index=False)
    except OSError as exc:
        raise LandMaskIOError(f"Cannot write {path}: {exc}") from exc
    logger.info(f"Wrote {len(df)} land hexes to {path}")
