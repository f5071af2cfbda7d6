#!/usr/bin/env python3
"""
Enumerate H3 cells over the Helsinki bounding box that fall on land.

Usage:

    python scripts/build_land_hexes.py \
        --mask data/land/helsinki-land-combined.geojson \
        --out data/land/helsinki_land_hexes.parquet \
        --resolutions 6 7 8 9

The output parquet contains columns:
    - h3_id (uint64)
    - res (int32)
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from landmask.classify import LandMask
from landmask.config import H3_RES_LAND, LAND_HEX_PATH, OUTPUT_PATH
from landmask.errors import LandMaskIOError
from landmask.hexgrid import land_hex_universe, write_land_hexes


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the land-filtered H3 cell set.")
    parser.add_argument("--mask", default=OUTPUT_PATH, help="Land-mask GeoJSON path.")
    parser.add_argument("--out", default=LAND_HEX_PATH, help="Output parquet path.")
    parser.add_argument("--resolutions", type=int, nargs="*", help="H3 resolutions (default: base resolution).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        mask = LandMask.from_geojson(args.mask)
        df = land_hex_universe(mask, args.resolutions or [H3_RES_LAND])
        write_land_hexes(df, args.out)
    except (LandMaskIOError, ValueError) as exc:
        print(f"[error] {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
