"""
landmask - land polygons for Helsinki rebuilt from OSM coastline ways.

Coastline ways are stitched into closed rings, filtered and ranked by area,
and merged with a hand-traced mainland outline into a GeoJSON land mask.
"""
from .area import ring_area, select_significant
from .endpoints import EndpointIndex, coord_key
from .merge import merge_land_mask, rings_to_feature_collection
from .pipeline import build_land_mask, create_land_polygon, process_coastline
from .rings import build_rings

__all__ = [
    "EndpointIndex",
    "build_land_mask",
    "build_rings",
    "coord_key",
    "create_land_polygon",
    "merge_land_mask",
    "process_coastline",
    "ring_area",
    "rings_to_feature_collection",
    "select_significant",
]
