import numpy as np
import pytest
from tile_denoise.models import GrayImage, Region


@pytest.fixture
def valid_image():
    return GrayImage(pixels=np.zeros((4, 6), dtype=np.uint8))


@pytest.fixture
def valid_region():
    return Region(x=2, y=3, width=4, height=5, col=1, row=2)
