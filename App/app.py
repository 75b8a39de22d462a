"""Sawtooth plotter generator - command line entry point.

Usage:
    sawtooth-plotter portrait.png
    sawtooth-plotter portrait.png --cell-size 4 --max-amplitude 1.5 --svg preview.svg
    sawtooth-plotter portrait.png --config plot.json --save-config
"""

import argparse
import logging
import sys
from pathlib import Path

from config_manager import ConfigManager
from image_processing import ImageProcessor, rasterize_path
from models import CONFIG_FILE, DEFAULT_GCODE_FILE, ConfigurationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert an image into a continuous hatch sawtooth plotter path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image", type=Path, help="Input image (PNG, JPG, ...)")

    # Generation settings; unset values come from the config file
    parser.add_argument("--cell-size", type=int, help="Cell size in pixels")
    parser.add_argument("--max-amplitude", type=float, help="Peak amplitude in mm")
    parser.add_argument("--output-width", type=float, help="Drawing width in mm")
    parser.add_argument("--feed-rate", type=float, help="Drawing feed rate in mm/min")

    # Outputs
    parser.add_argument(
        "--gcode",
        "-o",
        type=Path,
        default=Path(DEFAULT_GCODE_FILE),
        help=f"G-code output file (default: {DEFAULT_GCODE_FILE})",
    )
    parser.add_argument("--svg", type=Path, help="SVG preview output file")
    parser.add_argument("--preview", type=Path, help="PNG raster preview output file")

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=CONFIG_FILE,
        help="Configuration file path",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Store the effective settings in the configuration file",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: "list[str] | None" = None) -> int:
    """Generate the G-code (and optional previews) for one image."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    config_manager = ConfigManager(args.config)
    config = config_manager.load()
    if args.cell_size is not None:
        config.cell_size = args.cell_size
    if args.max_amplitude is not None:
        config.max_amplitude = args.max_amplitude
    if args.output_width is not None:
        config.output_width = args.output_width
    if args.feed_rate is not None:
        config.feed_rate = args.feed_rate

    try:
        result = ImageProcessor(config).process(args.image)
    except ConfigurationError as e:
        logger.error("Invalid settings: %s", e)
        return 1
    except ValueError as e:
        logger.error("%s", e)
        return 1

    args.gcode.write_text(result.gcode)
    logger.info("Wrote G-code to %s", args.gcode)

    if args.svg is not None:
        args.svg.write_text(result.svg)
        logger.info("Wrote SVG preview to %s", args.svg)

    if args.preview is not None:
        rasterize_path(result.bundle).save(args.preview)
        logger.info("Wrote raster preview to %s", args.preview)

    if args.save_config:
        ok, error = config_manager.save(config)
        if ok:
            logger.info("Saved configuration to %s", args.config)
        else:
            logger.warning("Could not save configuration: %s", error)

    return 0


if __name__ == "__main__":
    sys.exit(main())
