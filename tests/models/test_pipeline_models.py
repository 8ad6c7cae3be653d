from tile_denoise.models import (
    BatchItemResult,
    BatchReport,
    DenoiseResult,
    TileResult,
)


def test_tileresult_defaults(valid_region):
    t = TileResult(region=valid_region, noise_score=1.5)
    assert t.blurred is False


def test_denoiseresult_blurred_count(valid_image, valid_region):
    tiles = [
        TileResult(region=valid_region, noise_score=40.0, blurred=True),
        TileResult(region=valid_region, noise_score=2.0),
        TileResult(region=valid_region, noise_score=50.0, blurred=True),
    ]
    r = DenoiseResult(image=valid_image, tiles=tiles, grid_size=2)
    assert r.blurred_count == 2


def test_denoiseresult_defaults(valid_image):
    r = DenoiseResult(image=valid_image, grid_size=1)
    assert r.tiles == []
    assert r.blurred_count == 0


def test_batchreport_counts():
    report = BatchReport(
        items=[
            BatchItemResult(name="a.bmp", output_path="out/output_a.bmp"),
            BatchItemResult(name="b.bmp", error="unreadable image"),
        ]
    )
    assert report.processed == 1
    assert report.failed == 1
    assert report.items[0].ok and not report.items[1].ok


def test_batchitemresult_defaults():
    item = BatchItemResult(name="x.bmp")
    assert item.output_path == ""
    assert item.error is None
    assert item.blurred_tiles == 0
