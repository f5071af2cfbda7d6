import argparse
import logging
import sys

from . import config
from .errors import LandMaskIOError
from .pipeline import build_land_mask

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description=(
            f"Build the land-mask GeoJSON from {config.INPUT_PATH} "
            f"into {config.OUTPUT_PATH}"
        )
    )


def run_cli() -> int:
    try:
        build_land_mask(config.INPUT_PATH, config.ISLANDS_PATH, config.OUTPUT_PATH)
    except LandMaskIOError as e:
        logger.error(f"Fatal: {e}")
        return 1
    return 0


def main(argv=None) -> int:
    build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    return run_cli()


if __name__ == "__main__":
    sys.exit(main())
