"""Image discovery, decoding and encoding.

These helpers sit outside the denoising core: they find input files,
decode them into grayscale images, write results back to disk and derive
output file names.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import cv2

from tile_denoise.errors import InputError
from tile_denoise.models.core_models import GrayImage

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.bmp"
OUTPUT_PREFIX = "output_"
INPUT_PREFIX = "input_"


def load_grayscale(path: str | Path) -> GrayImage:
    """Load an image file as a single-channel 8-bit image.

    Args:
        path: File to read. Color images are converted to grayscale.

    Returns:
        The decoded image.

    Raises:
        InputError: If the file cannot be read or decoded.
    """
    path = Path(path)
    pixels = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if pixels is None or pixels.size == 0:
        raise InputError(f"Could not read the image {path}")
    return GrayImage(pixels=pixels)


def save_image(image: GrayImage, path: str | Path) -> Path:
    """Encode an image to disk, creating the parent directory if needed.

    Raises:
        InputError: If the encoder rejects the file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), image.pixels):
        raise InputError(f"Could not write the image {path}")
    return path


def output_name_for(
    name: str, prefix: str = OUTPUT_PREFIX, strip_prefix: str = INPUT_PREFIX
) -> str:
    """Derive the output file name for an input file name.

    ``input_scan.bmp`` becomes ``output_scan.bmp``; names without the
    input prefix just get the output prefix.
    """
    if strip_prefix and name.startswith(strip_prefix):
        name = name[len(strip_prefix) :]
    return f"{prefix}{name}"


def find_input_files(directory: str | Path, pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """List the files in a directory that match a glob pattern, sorted by name.

    Raises:
        NotADirectoryError: If ``directory`` is not a directory.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(directory)
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def list_input_images(
    directory: str | Path, pattern: str = DEFAULT_PATTERN
) -> Iterator[tuple[str, GrayImage | None]]:
    """Yield ``(file name, image)`` pairs for every matching file.

    Images are decoded lazily, one at a time. Files that cannot be decoded
    are reported and yielded with ``None`` so the caller can record them as
    skipped.
    """
    for path in find_input_files(directory, pattern):
        try:
            image = load_grayscale(path)
        except InputError as e:
            logger.warning(f"{e}. Skipping...")
            yield path.name, None
            continue
        yield path.name, image
