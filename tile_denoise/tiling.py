"""Tile grid geometry.

This module partitions an image into an exact N×N grid of non-overlapping
rectangles. Tiles share a base size of ``width // N`` by ``height // N``;
the last column and the last row absorb the remainder so the grid always
covers the whole image, however its dimensions divide.

Tiles are ordered column by column: all rows of column 0 first, then all
rows of column 1, and so on. The reconstruction step relies on this order.
"""

import logging
from functools import lru_cache

from tile_denoise.errors import InvalidGridError
from tile_denoise.models.core_models import GrayImage, Region

logger = logging.getLogger(__name__)

GEOMETRY_CACHE_SIZE = 32


def _tile_span(index: int, grid_size: int, base: int, total: int) -> tuple[int, int]:
    """Return the (start, length) of a tile along one axis."""
    start = index * base
    if index == grid_size - 1:
        return start, total - start
    return start, base


@lru_cache(maxsize=GEOMETRY_CACHE_SIZE)
def partition(width: int, height: int, grid_size: int) -> tuple[Region, ...]:
    """Partition a width×height image into grid_size×grid_size tiles.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        grid_size: Number of tile rows and columns.

    Returns:
        Tuple of ``grid_size**2`` regions in column-major order, so the
        region at index ``col * grid_size + row`` covers grid cell
        ``(col, row)``.

    Raises:
        InvalidGridError: If grid_size is not positive or the image is
            narrower or shorter than grid_size pixels.
    """
    if grid_size <= 0:
        raise InvalidGridError(f"grid size must be positive, got {grid_size}")
    if width < grid_size or height < grid_size:
        raise InvalidGridError(
            f"image of {width}x{height} is too small for a {grid_size}x{grid_size} grid"
        )

    base_w = width // grid_size
    base_h = height // grid_size

    regions: list[Region] = []
    for col in range(grid_size):
        x, tile_w = _tile_span(col, grid_size, base_w, width)
        for row in range(grid_size):
            y, tile_h = _tile_span(row, grid_size, base_h, height)
            regions.append(
                Region(x=x, y=y, width=tile_w, height=tile_h, col=col, row=row)
            )

    logger.debug(
        f"Partitioned {width}x{height} into {grid_size}x{grid_size} tiles "
        f"(base {base_w}x{base_h})"
    )
    return tuple(regions)


def partition_image(image: GrayImage, grid_size: int) -> tuple[Region, ...]:
    """Partition an image into its tile grid.

    Args:
        image: Image to partition.
        grid_size: Number of tile rows and columns.

    Returns:
        Regions in column-major order, see :func:`partition`.
    """
    return partition(image.width, image.height, grid_size)


def validate_partition(regions, width: int, height: int) -> None:
    """Check that regions tile a width×height image exactly.

    Every region must lie inside the image, no pixel may be claimed by two
    regions and every pixel must be claimed by one.

    Raises:
        InvalidGridError: If any of these conditions does not hold.
    """
    covered = 0
    for region in regions:
        if not region.fits_within(width, height):
            raise InvalidGridError(
                f"tile ({region.col}, {region.row}) exceeds the {width}x{height} image"
            )
        covered += region.area

    if covered != width * height:
        raise InvalidGridError(
            f"tiles cover {covered} pixels, image has {width * height}"
        )

    # Equal total area plus pairwise disjointness implies exact coverage.
    ordered = sorted(regions, key=lambda r: (r.x, r.y))
    for i, a in enumerate(ordered):
        for b in ordered[i + 1 :]:
            if b.x >= a.x_end:
                break
            if a.y < b.y_end and b.y < a.y_end:
                raise InvalidGridError(
                    f"tiles ({a.col}, {a.row}) and ({b.col}, {b.row}) overlap"
                )
