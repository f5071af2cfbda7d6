"""
Land-mask GeoJSON assembly.

The final collection is the hand-traced mainland outline followed by the
significant coastline rings. Polygons are concatenated, not unioned: a point
is land if any polygon contains it, so overlaps are harmless while gaps
between fragments stay gaps.
"""
from __future__ import annotations

import json
import logging
import os
from typing import List, Sequence, Tuple

from .errors import LandMaskIOError
from .schema import MAINLAND_ID, MAINLAND_NAME, PROP_AREA, PROP_ID, PROP_NAME, Ring

logger = logging.getLogger(__name__)

# Coarse mainland outline, (lon, lat), traced from the southwest corner
# clockwise. Covers inland areas that fragmentary coastline data misses.
MAINLAND_POLYGON: List[Tuple[float, float]] = [
    # West - Espoo border (land boundary)
    (24.7828, 60.10),
    (24.7828, 60.30),  # Northern border (all land)
    (25.26, 60.30),    # Northeast corner
    (25.26, 60.20),    # East side going south
    # Eastern coastline (Vuosaari)
    (25.22, 60.20),
    (25.20, 60.195),
    (25.17, 60.19),
    # Southeastern coastline
    (25.14, 60.185),
    (25.10, 60.18),
    (25.07, 60.175),
    (25.05, 60.175),
    (25.03, 60.172),
    # Kulosaari / Herttoniemi
    (25.02, 60.17),
    (25.00, 60.168),
    (24.98, 60.165),
    # Southern peninsula - city center
    (24.96, 60.162),
    (24.94, 60.158),
    (24.92, 60.155),
    (24.90, 60.153),
    (24.88, 60.152),
    (24.87, 60.155),
    # Southwest - Lauttasaari
    (24.86, 60.158),
    (24.85, 60.162),
    (24.84, 60.168),
    (24.83, 60.175),
    (24.82, 60.182),
    (24.81, 60.19),
    (24.80, 60.20),
    # West side back to start
    (24.7828, 60.20),
    (24.7828, 60.10),
]


def _polygon_feature(ring: Ring, properties: dict) -> dict:
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[float(lon), float(lat)] for lon, lat in ring]],
        },
    }


def rings_to_feature_collection(significant: Sequence[Tuple[Ring, float]]) -> dict:
    """Islands collection: one Polygon feature per ranked ring."""
    return {
        "type": "FeatureCollection",
        "features": [
            _polygon_feature(ring, {PROP_ID: i, PROP_AREA: area})
            for i, (ring, area) in enumerate(significant)
        ],
    }


def merge_land_mask(islands: dict) -> dict:
    """
    Prepend the mainland polygon to an islands collection.

    Island features keep their geometry and other properties; ``id`` and
    ``name`` are rewritten to ``island-{i}`` / ``Island {i}``.
    """
    features = [_polygon_feature(MAINLAND_POLYGON, {PROP_ID: MAINLAND_ID, PROP_NAME: MAINLAND_NAME})]
    for i, feature in enumerate(islands.get("features", [])):
        features.append({
            **feature,
            "properties": {
                **(feature.get("properties") or {}),
                PROP_ID: f"island-{i}",
                PROP_NAME: f"Island {i}",
            },
        })
    return {"type": "FeatureCollection", "features": features}


def write_geojson(collection: dict, path: str) -> None:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(collection, f, indent=2)
    except OSError as exc:
        raise LandMaskIOError(f"Cannot write {path}: {exc}") from exc
    logger.info(f"Wrote {len(collection['features'])} land polygons to {path}")


def read_geojson(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise LandMaskIOError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise LandMaskIOError(f"{path} is not a GeoJSON FeatureCollection")
    return data
