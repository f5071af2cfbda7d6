"""
Offline land-mask build.

    coastline JSON -> segments -> rings -> significant rings -> islands GeoJSON
    islands GeoJSON + mainland outline -> land-mask GeoJSON
"""
from __future__ import annotations

import logging
from typing import Optional

from .area import select_significant
from .config import BuildParams, DEFAULT_PARAMS, INPUT_PATH, ISLANDS_PATH, OUTPUT_PATH
from .merge import merge_land_mask, read_geojson, rings_to_feature_collection, write_geojson
from .overpass import load_coastline_ways
from .rings import build_rings
from .validation import check_ring_invariants, report_invalid_rings

logger = logging.getLogger(__name__)


def process_coastline(
    input_path: str = INPUT_PATH,
    islands_path: str = ISLANDS_PATH,
    params: BuildParams = DEFAULT_PARAMS,
) -> dict:
    """
    Rebuild land-mass rings from coastline ways and write the islands GeoJSON.

    Returns:
        The islands FeatureCollection (largest ring first)
    """
    segments = load_coastline_ways(input_path)
    rings, _ = build_rings(segments, params)

    significant = select_significant(rings, params)
    logger.info(f"{len(significant)} significant rings after filtering")
    if not significant:
        logger.warning(
            f"No rings above {params.min_ring_area} sq deg; land mask will contain only the mainland outline"
        )

    for ring, _ in significant:
        check_ring_invariants(ring)
    report_invalid_rings([ring for ring, _ in significant])

    islands = rings_to_feature_collection(significant)
    write_geojson(islands, islands_path)

    if significant:
        logger.info("Top 10 land masses by area:")
        for i, (_, area) in enumerate(significant[:10]):
            logger.info(f"  {i + 1}. Area: {area:.6f}")
    return islands


def create_land_polygon(
    islands_path: str = ISLANDS_PATH,
    output_path: str = OUTPUT_PATH,
    islands: Optional[dict] = None,
) -> dict:
    """Merge the mainland outline with the islands collection and write it."""
    if islands is None:
        islands = read_geojson(islands_path)
    combined = merge_land_mask(islands)
    write_geojson(combined, output_path)
    logger.info(
        f"Created combined land polygon with {len(combined['features'])} features "
        f"(1 mainland, {len(islands['features'])} islands)"
    )
    return combined


def build_land_mask(
    input_path: str = INPUT_PATH,
    islands_path: str = ISLANDS_PATH,
    output_path: str = OUTPUT_PATH,
    params: BuildParams = DEFAULT_PARAMS,
) -> dict:
    islands = process_coastline(input_path, islands_path, params)
    return create_land_polygon(islands_path, output_path, islands=islands)
