"""Core domain models for tile-based denoising."""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GrayImage(BaseModel):
    """Single-channel 8-bit raster image.

    Owns a 2D grid of intensity samples laid out as ``(height, width)``,
    the layout OpenCV and NumPy use. The buffer is never resized after
    creation; processing stages either write into it in place or build
    a new image of the same shape.

    Attributes:
        pixels: 2D uint8 NumPy array of intensity samples.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    pixels: np.ndarray = Field(..., description="Intensity samples (height, width)")

    @field_validator("pixels")
    @classmethod
    def _check_pixels(cls, value: np.ndarray) -> np.ndarray:
        if not isinstance(value, np.ndarray):
            raise ValueError("pixels must be a NumPy array")
        if value.ndim != 2:
            raise ValueError(f"expected a 2D grayscale array, got {value.ndim} dims")
        if value.dtype != np.uint8:
            raise ValueError(f"expected uint8 samples, got {value.dtype}")
        if value.size == 0:
            raise ValueError("image has no samples")
        return value

    @property
    def width(self) -> int:
        """Number of columns in the image."""
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Number of rows in the image."""
        return int(self.pixels.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        """Image size as ``(height, width)``."""
        return self.height, self.width


class Region(BaseModel):
    """Axis-aligned rectangle describing one tile of an image.

    A Region is only an index rectangle; it holds no pixel data. Every
    operation that reads or writes a tile receives the owning sample
    buffer explicitly and addresses it through :attr:`slices`. The
    coordinates follow the usual image convention with (0, 0) at the
    top-left corner.

    Attributes:
        x: Left edge in pixels.
        y: Top edge in pixels.
        width: Width in pixels.
        height: Height in pixels.
        col: Column index of the tile within its grid.
        row: Row index of the tile within its grid.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., ge=0, description="Left edge position in pixels")
    y: int = Field(..., ge=0, description="Top edge position in pixels")
    width: int = Field(..., ge=1, description="Width in pixels")
    height: int = Field(..., ge=1, description="Height in pixels")
    col: int = Field(0, ge=0, description="Grid column index")
    row: int = Field(0, ge=0, description="Grid row index")

    @property
    def x_end(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def y_end(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    @property
    def slices(self) -> tuple[slice, slice]:
        """Row and column slices addressing this tile in a ``(h, w)`` buffer."""
        return slice(self.y, self.y_end), slice(self.x, self.x_end)

    @property
    def area(self) -> int:
        return self.width * self.height

    def fits_within(self, width: int, height: int) -> bool:
        """Check whether the rectangle lies fully inside a width×height image."""
        return self.x_end <= width and self.y_end <= height
