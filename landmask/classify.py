"""
Point-in-land classification against the land-mask collection.

A point is land if it lies in or on any polygon of the collection. Polygons
are not unioned, so this is a logical OR over features answered through the
GeoDataFrame spatial index.
"""
from __future__ import annotations

from typing import Sequence

import geopandas as gpd
import numpy as np
from shapely.geometry import Point

from .config import OUTPUT_PATH
from .merge import read_geojson


class LandMask:
    def __init__(self, gdf: gpd.GeoDataFrame):
        self.gdf = gdf.reset_index(drop=True)

    @classmethod
    def from_collection(cls, collection: dict) -> "LandMask":
        gdf = gpd.GeoDataFrame.from_features(collection.get("features", []), crs="EPSG:4326")
        if gdf.empty:
            gdf = gpd.GeoDataFrame(columns=["geometry"], geometry="geometry", crs="EPSG:4326")
        return cls(gdf)

    @classmethod
    def from_geojson(cls, path: str = OUTPUT_PATH) -> "LandMask":
        return cls.from_collection(read_geojson(path))

    def __len__(self) -> int:
        return len(self.gdf)

    def contains(self, lon: float, lat: float) -> bool:
        """True if (lon, lat) is inside any land polygon."""
        if self.gdf.empty:
            return False
        hits = self.gdf.sindex.query(Point(lon, lat), predicate="intersects")
        return len(hits) > 0

    def contains_many(self, lons: Sequence[float], lats: Sequence[float]) -> np.ndarray:
        """Vectorised ``contains``; returns a boolean array aligned with the inputs."""
        result = np.zeros(len(lons), dtype=bool)
        if self.gdf.empty or len(lons) == 0:
            return result
        points = gpd.points_from_xy(lons, lats, crs="EPSG:4326")
        point_idx, _ = self.gdf.sindex.query(points, predicate="intersects")
        result[np.unique(point_idx)] = True
        return result
