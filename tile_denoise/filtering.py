"""Per-tile noise estimation and adaptive smoothing.

Each tile is median filtered, which removes impulsive noise while keeping
edges. The mean absolute difference between the raw and the filtered tile
is used as the tile's noise score: broadband noise that the median filter
cannot absorb leaves a large residual. Tiles whose score exceeds the
threshold get an additional Gaussian blur.

All filtering happens on an isolated copy of the tile, so border
extrapolation never reads pixels of neighbouring tiles, and the result is
written back into the tile's own rectangle only.
"""

import logging

import cv2
import numpy as np

from tile_denoise.errors import RegionTooSmallError
from tile_denoise.models.core_models import Region
from tile_denoise.models.pipeline_models import TileResult
from tile_denoise.models.settings_models import FilterParams

logger = logging.getLogger(__name__)


def effective_sigma(kernel_size: int, sigma: float = 0.0) -> float:
    """Return the Gaussian sigma used for a kernel size.

    A positive sigma is used as given. Otherwise sigma is derived from the
    kernel size with OpenCV's rule ``0.3 * ((ksize - 1) * 0.5 - 1) + 0.8``,
    which gives 3.5 for the default 21×21 kernel.

    Args:
        kernel_size: Odd Gaussian aperture.
        sigma: Requested sigma, 0 to derive it.

    Returns:
        The sigma passed to the Gaussian filter.
    """
    if sigma > 0:
        return float(sigma)
    return 0.3 * ((kernel_size - 1) * 0.5 - 1) + 0.8


def check_region_size(region: Region, params: FilterParams) -> None:
    """Raise RegionTooSmallError if the median kernel does not fit the tile."""
    ksize = params.median_kernel_size
    if region.width < ksize or region.height < ksize:
        raise RegionTooSmallError(
            f"tile ({region.col}, {region.row}) of {region.width}x{region.height} "
            f"is smaller than the {ksize}x{ksize} median kernel",
            region=region,
        )


def noise_score(original: np.ndarray, filtered: np.ndarray) -> float:
    """Mean absolute per-pixel difference between two tiles."""
    residual = cv2.absdiff(original, filtered)
    return float(np.mean(residual))


def median_residual(tile: np.ndarray, kernel_size: int = 3) -> tuple[np.ndarray, float]:
    """Median filter a tile and score the residual.

    Args:
        tile: 2D uint8 tile samples, left unchanged.
        kernel_size: Odd median aperture.

    Returns:
        Tuple of (median-filtered tile, noise score).
    """
    filtered = cv2.medianBlur(tile, kernel_size)
    return filtered, noise_score(tile, filtered)


def process_region(
    pixels: np.ndarray, region: Region, params: FilterParams
) -> TileResult:
    """Denoise one tile of a sample buffer in place.

    Args:
        pixels: The full 2D uint8 sample buffer that owns the tile.
        region: Rectangle of the tile to process.
        params: Filter chain parameters.

    Returns:
        TileResult with the noise score and whether the Gaussian pass ran.

    Raises:
        RegionTooSmallError: If the tile is smaller than the median kernel.
    """
    check_region_size(region, params)

    tile_slices = region.slices
    original = np.ascontiguousarray(pixels[tile_slices])

    result, score = median_residual(original, params.median_kernel_size)

    # Strictly greater: a score equal to the threshold keeps the median result
    blurred = score > params.noise_threshold
    if blurred:
        ksize = params.gaussian_kernel_size
        sigma = effective_sigma(ksize, params.gaussian_sigma)
        result = cv2.GaussianBlur(result, (ksize, ksize), sigma)

    pixels[tile_slices] = result

    logger.debug(
        f"Tile ({region.col}, {region.row}) score={score:.2f} blurred={blurred}"
    )
    return TileResult(region=region, noise_score=score, blurred=blurred)
