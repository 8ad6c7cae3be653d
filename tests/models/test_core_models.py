import numpy as np
import pytest
from pydantic import ValidationError
from tile_denoise.models import GrayImage, Region


def test_grayimage_dimensions(valid_image):
    assert valid_image.width == 6
    assert valid_image.height == 4
    assert valid_image.shape == (4, 6)


def test_grayimage_keeps_buffer():
    arr = np.ones((2, 2), dtype=np.uint8)
    assert GrayImage(pixels=arr).pixels is arr


@pytest.mark.parametrize(
    "pixels",
    [
        np.zeros((4, 4, 3), dtype=np.uint8),
        np.zeros((4, 4), dtype=np.float32),
        np.zeros((0, 4), dtype=np.uint8),
        [[1, 2], [3, 4]],
    ],
)
def test_grayimage_invalid(pixels):
    with pytest.raises(ValidationError):
        GrayImage(pixels=pixels)


def test_region_edges(valid_region):
    assert valid_region.x_end == 6
    assert valid_region.y_end == 8
    assert valid_region.area == 20


def test_region_slices(valid_region):
    arr = np.arange(100).reshape(10, 10)
    tile = arr[valid_region.slices]
    assert tile.shape == (5, 4)
    assert tile[0, 0] == arr[3, 2]


def test_region_fits_within(valid_region):
    assert valid_region.fits_within(6, 8)
    assert not valid_region.fits_within(5, 8)
    assert not valid_region.fits_within(6, 7)


@pytest.mark.parametrize(
    "field,val", [("x", -1), ("y", -1), ("width", 0), ("height", 0), ("col", -1)]
)
def test_region_invalid(field, val):
    data = dict(x=0, y=0, width=1, height=1)
    data[field] = val
    with pytest.raises(ValidationError):
        Region(**data)


def test_region_is_immutable(valid_region):
    with pytest.raises(ValidationError):
        valid_region.width = 99
    assert valid_region.width == 4
