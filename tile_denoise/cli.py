"""
Batch command line interface for tile-based adaptive denoising.

Every image in the input directory that matches the file pattern is
denoised and written to the output directory as ``output_<name>``.

Usage examples
--------------

Denoise every BMP in ``Input Files/`` with the default 6×6 grid::

    tile-denoise "Input Files" --output-dir "Output Files"

Use a finer grid, four workers and write tile decision overlays::

    tile-denoise scans --pattern "*.png" --grid-size 8 --workers 4 --overlay-dir overlays
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from tile_denoise.errors import DenoiseError
from tile_denoise.image_io import DEFAULT_PATTERN, find_input_files
from tile_denoise.models.settings_models import (
    FilterParams,
    GridParams,
    ProcessingParameters,
    SchedulerParams,
)
from tile_denoise.pipeline import process_directory

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send log records of the given level and above to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    defaults = FilterParams()
    parser = argparse.ArgumentParser(
        prog="tile-denoise",
        description="Adaptive tile-parallel denoising of grayscale images.",
    )
    parser.add_argument("input_dir", type=Path, help="Directory with input images")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("Output Files"),
        help="Directory for denoised images (default: %(default)s)",
    )
    parser.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN,
        help="Glob pattern selecting input files (default: %(default)s)",
    )
    parser.add_argument(
        "--grid-size",
        type=int,
        default=GridParams().grid_size,
        help="Tile rows and columns (default: %(default)s)",
    )
    parser.add_argument(
        "--median-kernel",
        type=int,
        default=defaults.median_kernel_size,
        help="Median filter aperture (default: %(default)s)",
    )
    parser.add_argument(
        "--noise-threshold",
        type=float,
        default=defaults.noise_threshold,
        help="Noise score above which tiles are smoothed (default: %(default)s)",
    )
    parser.add_argument(
        "--gaussian-kernel",
        type=int,
        default=defaults.gaussian_kernel_size,
        help="Gaussian kernel aperture (default: %(default)s)",
    )
    parser.add_argument(
        "--gaussian-sigma",
        type=float,
        default=defaults.gaussian_sigma,
        help="Gaussian sigma, 0 derives it from the kernel size (default: %(default)s)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: number of CPUs)",
    )
    parser.add_argument(
        "--overlay-dir",
        type=Path,
        default=None,
        help="Also write tile decision overlays to this directory",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s)",
    )
    return parser


def params_from_args(args: argparse.Namespace) -> ProcessingParameters:
    """Build pipeline parameters from parsed arguments."""
    return ProcessingParameters(
        grid=GridParams(grid_size=args.grid_size),
        filter=FilterParams(
            median_kernel_size=args.median_kernel,
            noise_threshold=args.noise_threshold,
            gaussian_kernel_size=args.gaussian_kernel,
            gaussian_sigma=args.gaussian_sigma,
        ),
        scheduler=SchedulerParams(max_workers=args.workers),
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        params = params_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    if not args.input_dir.is_dir():
        logger.error(f"Input directory {args.input_dir} does not exist")
        return 1
    if not find_input_files(args.input_dir, args.pattern):
        logger.error(
            f"Could not find any {args.pattern} files in the {args.input_dir} directory."
        )
        return 1

    try:
        report = process_directory(
            args.input_dir,
            args.output_dir,
            params,
            pattern=args.pattern,
            overlay_dir=args.overlay_dir,
        )
    except DenoiseError as e:
        logger.error(f"Aborting batch: {e}")
        return 2

    logger.info(f"Processed {report.processed} image(s), {report.failed} skipped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
