import numpy as np
import cv2
import pytest

from tile_denoise.models.core_models import GrayImage


IMPULSE_SPOTS = [(r, c) for r in range(1, 10, 2) for c in range(1, 10, 2)]


@pytest.fixture
def flat_image():
    # 60×40 image of constant intensity
    return GrayImage(pixels=np.full((40, 60), 128, dtype=np.uint8))


@pytest.fixture
def half_noisy_image():
    # 120×120: smooth horizontal ramp on the left, uniform noise on the right
    rng = np.random.default_rng(0)
    pixels = np.tile(np.arange(120, dtype=np.uint8), (120, 1))
    pixels[:, 60:] = rng.integers(0, 256, size=(120, 60), dtype=np.uint8)
    return GrayImage(pixels=pixels)


@pytest.fixture
def random_pixels():
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(77, 101), dtype=np.uint8)


@pytest.fixture
def impulse_tile():
    """Build a 12×12 black tile with 24 isolated impulses of one value.

    A 3×3 median removes every impulse and leaves the tile black, so the
    noise score is exactly ``24 * value / 144``: 198 gives 33, 204 gives 34.
    """

    def _build(value):
        tile = np.zeros((12, 12), dtype=np.uint8)
        for r, c in IMPULSE_SPOTS[:24]:
            tile[r, c] = value
        return tile

    return _build


@pytest.fixture
def bmp_dir(tmp_path, half_noisy_image, flat_image):
    # Input directory with two readable BMPs and one corrupt one
    in_dir = tmp_path / "Input Files"
    in_dir.mkdir()
    cv2.imwrite(str(in_dir / "input_noisy.bmp"), half_noisy_image.pixels)
    cv2.imwrite(str(in_dir / "input_flat.bmp"), flat_image.pixels)
    (in_dir / "input_broken.bmp").write_bytes(b"not an image")
    (in_dir / "notes.txt").write_text("ignored")
    return in_dir
