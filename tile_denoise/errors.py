"""Exceptions raised by the denoising pipeline."""

from tile_denoise.models.core_models import Region


class DenoiseError(Exception):
    """Base exception for denoising errors."""

    pass


class InvalidGridError(DenoiseError, ValueError):
    """Raised when a grid size cannot partition the image into valid tiles."""

    pass


class RegionTooSmallError(DenoiseError, ValueError):
    """Raised when a tile is smaller than the filter kernel applied to it."""

    def __init__(self, message: str, region: Region | None = None):
        super().__init__(message)
        self.region = region


class TileProcessingFailure(DenoiseError):
    """Raised when filtering a tile fails inside the worker pool."""

    def __init__(self, message: str, region: Region | None = None):
        super().__init__(message)
        self.region = region


class ReconstructionSizeMismatch(DenoiseError):
    """Raised when reassembled tiles do not match the source image size."""

    def __init__(self, expected: tuple[int, int], actual: tuple[int, int]):
        super().__init__(
            f"reconstructed image is {actual[1]}x{actual[0]}, "
            f"expected {expected[1]}x{expected[0]}"
        )
        self.expected = expected
        self.actual = actual


class InputError(DenoiseError):
    """Raised when an input image cannot be read or an output cannot be written."""

    pass
