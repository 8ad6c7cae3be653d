"""Reassembly of processed tiles into a full image.

Reconstruction is the geometric inverse of :func:`tile_denoise.tiling.partition`:
the column-major tile sequence is cut into ``grid_size`` column groups,
each group is stacked vertically into a full-height strip, and the strips
are joined horizontally.
"""

import logging
from collections.abc import Sequence

import cv2
import numpy as np

from tile_denoise.errors import InvalidGridError, ReconstructionSizeMismatch
from tile_denoise.models.core_models import GrayImage, Region

logger = logging.getLogger(__name__)


def build_column_strip(pixels: np.ndarray, column: Sequence[Region]) -> np.ndarray:
    """Stack the tiles of one grid column top to bottom."""
    return cv2.vconcat([pixels[region.slices] for region in column])


def reconstruct(
    pixels: np.ndarray,
    regions: Sequence[Region],
    grid_size: int,
    *,
    width: int,
    height: int,
) -> GrayImage:
    """Reassemble tiles into a new image.

    Args:
        pixels: Sample buffer the tiles were processed in.
        regions: The ``grid_size**2`` tiles in column-major order, as
            produced by the tiler.
        grid_size: Number of tile rows and columns.
        width: Expected output width.
        height: Expected output height.

    Returns:
        A new GrayImage built from the tiles.

    Raises:
        InvalidGridError: If the number of regions does not match the grid.
        ReconstructionSizeMismatch: If the reassembled image does not have
            the expected dimensions.
    """
    if grid_size <= 0 or len(regions) != grid_size * grid_size:
        raise InvalidGridError(
            f"expected {grid_size * grid_size} tiles for a {grid_size}x{grid_size} "
            f"grid, got {len(regions)}"
        )

    try:
        strips = [
            build_column_strip(pixels, regions[col * grid_size : (col + 1) * grid_size])
            for col in range(grid_size)
        ]
        assembled = cv2.hconcat(strips)
    except cv2.error as e:
        # Tiles of unequal width within a column, or strips of unequal height
        raise ReconstructionSizeMismatch((height, width), (-1, -1)) from e

    if assembled.shape != (height, width):
        raise ReconstructionSizeMismatch((height, width), assembled.shape[:2])

    logger.debug(f"Reconstructed {width}x{height} image from {len(regions)} tiles")
    return GrayImage(pixels=assembled)
