"""Tests for the command line entry point in headless mode."""

import pytest

from pathtracer.main import QUALITY_LEVELS, build_parser, camera_from_args, main


def test_headless_render_writes_ppm(tmp_path):
    output = tmp_path / "out.ppm"
    status = main([
        "--headless", "--scene", "simple", "--width", "16", "--samples", "1",
        "--depth", "2", "--seed", "1", "--quiet", "--output", str(output),
    ])
    assert status == 0
    lines = output.read_text().splitlines()
    assert lines[:3] == ["P3", "16 9", "255"]
    assert len(lines) == 3 + 16 * 9


def test_headless_png(tmp_path):
    output = tmp_path / "out.png"
    status = main([
        "--headless", "--scene", "simple", "--width", "8", "--samples", "1",
        "--quiet", "--output", str(output),
    ])
    assert status == 0
    assert output.exists()


def test_quality_preset_with_override():
    args = build_parser().parse_args(["--quality", "interactive", "--samples", "3"])
    camera = camera_from_args(args)
    assert camera.image_width == QUALITY_LEVELS["interactive"]["width"]
    assert camera.max_depth == QUALITY_LEVELS["interactive"]["depth"]
    assert camera.samples_per_pixel == 3


def test_toggle_flags():
    args = build_parser().parse_args(["--no-shadows", "--no-refractions", "--quiet"])
    camera = camera_from_args(args)
    assert not camera.options.enable_shadows
    assert not camera.options.enable_refractions
    assert camera.options.enable_reflections
    assert not camera.verbose


def test_invalid_width_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["--headless", "--width", "0"])
    assert excinfo.value.code == 2
