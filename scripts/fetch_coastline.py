#!/usr/bin/env python3
"""
Download OSM coastline ways for the Helsinki bounding box from Overpass.

Usage:

    python scripts/fetch_coastline.py [--out data/coastline/helsinki_coastline.json] [--force]

The output is the raw Overpass JSON consumed by ``landmask-build``.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from landmask.config import INPUT_PATH, OVERPASS_URL
from landmask.errors import LandMaskIOError
from landmask.overpass import fetch_coastline


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download coastline ways for the land-mask build.")
    parser.add_argument("--out", default=INPUT_PATH, help="Output JSON path.")
    parser.add_argument("--url", default=OVERPASS_URL, help="Overpass interpreter endpoint.")
    parser.add_argument("--force", action="store_true", help="Re-download even if the file exists.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        fetch_coastline(args.out, url=args.url, force=args.force)
    except LandMaskIOError as exc:
        print(f"[error] {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
