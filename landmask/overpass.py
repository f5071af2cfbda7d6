"""
Coastline input from the Overpass API.

OSM coastlines follow the convention that water is on the right-hand side
when walking the way, so land masses are traced counter-clockwise. Nothing
here depends on that; direction is only relevant to the ring builder's
reverse-stitching fallback.
"""
from __future__ import annotations

import json
import logging
import os
from typing import List, Optional

import requests
from tqdm import tqdm

from .config import BOUNDS, INPUT_PATH, OVERPASS_TIMEOUT_SECONDS, OVERPASS_URL
from .errors import LandMaskIOError
from .schema import Segment

logger = logging.getLogger(__name__)


def coastline_query(bounds: dict = BOUNDS, timeout: int = OVERPASS_TIMEOUT_SECONDS) -> str:
    """Overpass QL for all coastline ways in ``bounds`` with inline geometry."""
    bbox = f"{bounds['south']},{bounds['west']},{bounds['north']},{bounds['east']}"
    return (
        f"[out:json][timeout:{timeout}];\n"
        f'way["natural"="coastline"]({bbox});\n'
        "out geom;"
    )


def fetch_coastline(
    path: str = INPUT_PATH,
    bounds: dict = BOUNDS,
    url: str = OVERPASS_URL,
    force: bool = False,
) -> str:
    """
    Download coastline ways for ``bounds`` to ``path``.

    Args:
        path: Destination JSON file
        bounds: Dictionary with keys 'west', 'south', 'east', 'north'
        url: Overpass interpreter endpoint
        force: Re-download even if ``path`` exists

    Returns:
        ``path``
    """
    if os.path.exists(path) and not force:
        logger.info(f"Coastline data already exists at {path}")
        return path

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    # Partial downloads never land on `path`
    part_path = path + ".part"
    logger.info(f"Downloading coastline ways from {url}")
    try:
        response = requests.post(
            url,
            data={"data": coastline_query(bounds)},
            stream=True,
            timeout=OVERPASS_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        with open(part_path, "wb") as f, tqdm(
            desc=os.path.basename(path),
            unit="iB",
            unit_scale=True,
            unit_divisor=1024,
        ) as progress_bar:
            for chunk in response.iter_content(chunk_size=8192):
                size = f.write(chunk)
                progress_bar.update(size)
        os.replace(part_path, path)
    except (requests.RequestException, OSError) as exc:
        if os.path.exists(part_path):
            os.remove(part_path)
        raise LandMaskIOError(f"Coastline download failed: {exc}") from exc

    logger.info(f"Saved coastline data to {path}")
    return path


def ways_to_segments(elements: list) -> List[Segment]:
    """
    Convert Overpass way elements to (lon, lat) segments.

    Non-way elements and ways without inline geometry are ignored. Ways with
    fewer than two points are kept; the ring builder skips them.
    """
    segments: List[Segment] = []
    for element in elements:
        if element.get("type") != "way":
            continue
        geometry: Optional[list] = element.get("geometry")
        if not geometry:
            continue
        segments.append([(float(p["lon"]), float(p["lat"])) for p in geometry])
    return segments


def load_coastline_ways(path: str = INPUT_PATH) -> List[Segment]:
    """Read an Overpass JSON dump and return its coastline segments."""
    logger.info(f"Reading coastline data from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise LandMaskIOError(f"Cannot read coastline data {path}: {exc}") from exc

    elements = data.get("elements") if isinstance(data, dict) else None
    if elements is None:
        raise LandMaskIOError(f"{path} has no 'elements' array")

    logger.info(f"Found {len(elements)} coastline elements")
    segments = ways_to_segments(elements)
    logger.info(f"Extracted {len(segments)} segments")
    return segments
