"""
Pipeline processing functions for tile-based adaptive denoising.

This module wires the stages together: partitioning, parallel per-tile
filtering and reconstruction for a single image, plus a batch driver that
keeps going when individual images cannot be read or processed.
"""

import logging
from collections.abc import Iterable
from functools import partial
from pathlib import Path

import cv2

from tile_denoise.errors import (
    InputError,
    InvalidGridError,
    RegionTooSmallError,
    TileProcessingFailure,
)
from tile_denoise.filtering import check_region_size, process_region
from tile_denoise.image_io import (
    DEFAULT_PATTERN,
    list_input_images,
    output_name_for,
    save_image,
)
from tile_denoise.models.core_models import GrayImage
from tile_denoise.models.pipeline_models import (
    BatchItemResult,
    BatchReport,
    DenoiseResult,
)
from tile_denoise.models.settings_models import ProcessingParameters
from tile_denoise.reconstruction import reconstruct
from tile_denoise.scheduler import TilePool
from tile_denoise.tiling import partition_image, validate_partition
from tile_denoise.visualization import create_tile_overlay


logger = logging.getLogger(__name__)


def denoise_image(
    image: GrayImage, params: ProcessingParameters | None = None
) -> DenoiseResult:
    """Denoise one image tile by tile.

    The input image is never modified: tiles are processed in a working
    copy of its samples, which is discarded if any tile fails.

    Args:
        image: Grayscale input image.
        params: Pipeline configuration, defaults if None.

    Returns:
        DenoiseResult with the output image and the per-tile decisions.

    Raises:
        InvalidGridError: If the grid cannot partition the image.
        RegionTooSmallError: If a tile is smaller than the median kernel.
        TileProcessingFailure: If filtering any tile fails.
        ReconstructionSizeMismatch: If the tiles do not reassemble to the
            input size.
    """
    params = params or ProcessingParameters()
    grid_size = params.grid.grid_size

    # Step 1: Tile geometry, checked before any work is dispatched
    regions = partition_image(image, grid_size)
    validate_partition(regions, image.width, image.height)
    for region in regions:
        check_region_size(region, params.filter)

    # Step 2: Per-tile filtering in a working copy
    working = image.pixels.copy()
    pool = TilePool(params.scheduler.max_workers)
    tiles = pool.run_all(
        regions, partial(process_region, working, params=params.filter)
    )

    # Step 3: Reassembly
    output = reconstruct(
        working, regions, grid_size, width=image.width, height=image.height
    )

    result = DenoiseResult(image=output, tiles=tiles, grid_size=grid_size)
    logger.info(
        f"Denoised {image.width}x{image.height} image: "
        f"{result.blurred_count}/{len(tiles)} tiles smoothed"
    )
    return result


def process_batch(
    items: Iterable[tuple[str, GrayImage | None]],
    output_dir: str | Path,
    params: ProcessingParameters | None = None,
    overlay_dir: str | Path | None = None,
) -> BatchReport:
    """Denoise a sequence of named images and write the results.

    Each image is independent: unreadable inputs and tile failures are
    logged and recorded, and the batch continues. Grid and kernel
    configuration errors abort the batch, since they would fail the same
    way for every image.

    Args:
        items: ``(file name, image)`` pairs; ``None`` marks an unreadable file.
        output_dir: Directory receiving ``output_<name>`` files.
        params: Pipeline configuration, defaults if None.
        overlay_dir: If given, a tile decision overlay is written there for
            every processed image.

    Returns:
        BatchReport with one entry per item.
    """
    params = params or ProcessingParameters()
    output_dir = Path(output_dir)
    report = BatchReport()

    for name, image in items:
        if image is None:
            report.items.append(BatchItemResult(name=name, error="unreadable image"))
            continue

        try:
            result = denoise_image(image, params)
            out_path = save_image(result.image, output_dir / output_name_for(name))
        except (InvalidGridError, RegionTooSmallError):
            logger.error(
                f"Invalid configuration for {name}, aborting batch after "
                f"{report.processed} image(s) written to {output_dir}"
            )
            raise
        except (TileProcessingFailure, InputError) as e:
            logger.error(f"Error processing {name}: {str(e)}")
            report.items.append(BatchItemResult(name=name, error=str(e)))
            continue

        logger.info(f"Image {out_path} saved")
        if overlay_dir is not None:
            _save_overlay(result, Path(overlay_dir) / f"tiles_{Path(name).stem}.png")

        report.items.append(
            BatchItemResult(
                name=name,
                output_path=str(out_path),
                blurred_tiles=result.blurred_count,
            )
        )

    return report


def process_directory(
    input_dir: str | Path,
    output_dir: str | Path,
    params: ProcessingParameters | None = None,
    pattern: str = DEFAULT_PATTERN,
    overlay_dir: str | Path | None = None,
) -> BatchReport:
    """Denoise every image in a directory that matches ``pattern``."""
    return process_batch(
        list_input_images(input_dir, pattern), output_dir, params, overlay_dir
    )


def _save_overlay(result: DenoiseResult, path: Path) -> None:
    overlay = create_tile_overlay(result.image, result.tiles)
    if overlay is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), overlay):
        logger.warning(f"Could not write tile overlay {path}")
