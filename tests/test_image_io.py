import cv2
import numpy as np
import pytest

from tile_denoise.errors import InputError
from tile_denoise.image_io import (
    find_input_files,
    list_input_images,
    load_grayscale,
    output_name_for,
    save_image,
)
from tile_denoise.models.core_models import GrayImage


@pytest.mark.parametrize(
    "name,expected",
    [
        ("input_scan.bmp", "output_scan.bmp"),
        ("scan.bmp", "output_scan.bmp"),
        ("my_input_scan.bmp", "output_my_input_scan.bmp"),
    ],
)
def test_output_name_for(name, expected):
    assert output_name_for(name) == expected


def test_output_name_for_custom_prefixes():
    assert output_name_for("raw-1.png", prefix="clean-", strip_prefix="raw-") == "clean-1.png"


def test_load_grayscale_converts_color(tmp_path):
    path = tmp_path / "color.png"
    color = np.zeros((8, 10, 3), dtype=np.uint8)
    color[..., 2] = 255
    cv2.imwrite(str(path), color)

    image = load_grayscale(path)
    assert image.shape == (8, 10)
    assert image.pixels.dtype == np.uint8


def test_load_grayscale_unreadable(tmp_path):
    path = tmp_path / "broken.bmp"
    path.write_bytes(b"garbage")
    with pytest.raises(InputError):
        load_grayscale(path)
    with pytest.raises(InputError):
        load_grayscale(tmp_path / "missing.bmp")


def test_save_image_round_trips_lossless(tmp_path, random_pixels):
    path = save_image(GrayImage(pixels=random_pixels), tmp_path / "nested" / "out.bmp")
    assert path.is_file()
    assert np.array_equal(load_grayscale(path).pixels, random_pixels)


def test_save_image_rejects_unknown_extension(tmp_path, random_pixels):
    with pytest.raises((InputError, cv2.error)):
        save_image(GrayImage(pixels=random_pixels), tmp_path / "out.unknownext")


def test_find_input_files_filters_and_sorts(bmp_dir):
    names = [p.name for p in find_input_files(bmp_dir)]
    assert names == ["input_broken.bmp", "input_flat.bmp", "input_noisy.bmp"]
    assert [p.name for p in find_input_files(bmp_dir, "*.txt")] == ["notes.txt"]


def test_find_input_files_requires_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        find_input_files(tmp_path / "nope")


def test_list_input_images_marks_unreadable(bmp_dir):
    items = dict(list_input_images(bmp_dir))
    assert items["input_broken.bmp"] is None
    assert items["input_flat.bmp"].shape == (40, 60)
    assert items["input_noisy.bmp"].shape == (120, 120)
