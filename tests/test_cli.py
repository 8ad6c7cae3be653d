import pytest

from tile_denoise.cli import build_parser, main, params_from_args


def test_parser_defaults():
    args = build_parser().parse_args(["in"])
    params = params_from_args(args)
    assert params.grid.grid_size == 6
    assert params.filter.median_kernel_size == 3
    assert params.filter.noise_threshold == 33
    assert params.filter.gaussian_kernel_size == 21
    assert params.filter.gaussian_sigma == 0
    assert params.scheduler.max_workers is None
    assert args.pattern == "*.bmp"


def test_parser_overrides():
    args = build_parser().parse_args(
        ["in", "--grid-size", "4", "--noise-threshold", "20.5", "--workers", "2"]
    )
    params = params_from_args(args)
    assert params.grid.grid_size == 4
    assert params.filter.noise_threshold == 20.5
    assert params.scheduler.max_workers == 2


def test_main_processes_directory(bmp_dir, tmp_path):
    out_dir = tmp_path / "out"
    overlay_dir = tmp_path / "overlays"
    code = main(
        [
            str(bmp_dir),
            "--output-dir",
            str(out_dir),
            "--overlay-dir",
            str(overlay_dir),
            "--workers",
            "2",
        ]
    )
    assert code == 0
    assert (out_dir / "output_noisy.bmp").is_file()
    assert (out_dir / "output_flat.bmp").is_file()
    assert len(list(overlay_dir.iterdir())) == 2


def test_main_without_matching_files(tmp_path):
    assert main([str(tmp_path), "--output-dir", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_main_missing_directory(tmp_path):
    assert main([str(tmp_path / "missing")]) == 1


def test_main_aborts_on_invalid_grid(bmp_dir, tmp_path):
    # 120×120 and 60×40 inputs cannot hold a 50×50 grid
    assert main([str(bmp_dir), "--output-dir", str(tmp_path), "--grid-size", "50"]) == 2


def test_main_rejects_even_kernel(bmp_dir):
    with pytest.raises(SystemExit) as exc_info:
        main([str(bmp_dir), "--median-kernel", "4"])
    assert exc_info.value.code == 2
