from pathlib import Path

import numpy as np
import pytest

# Fail fast if Pillow isn't present (no skipping).
try:
    from PIL import Image  # type: ignore
except Exception as e:
    raise ImportError("Pillow is required for these tests. pip install pillow") from e

from pic2wav.brightness import BrightnessGrid
from pic2wav.config import SynthesisConfig
from pic2wav.conversion import (
    UnsupportedResolution,
    check_resolution,
    image_to_brightness,
    read_image,
    sample_image,
    sample_pixels,
)

SMALL = SynthesisConfig(sample_rate=8000, resolution=4)


def _save_png(path: Path, pixels, w: int, h: int, mode: str = "RGB"):
    im = Image.new(mode, (w, h))
    im.putdata(pixels)
    im.save(path, "PNG")


def test_read_image_png_is_rgb(tmp_path: Path):
    p = tmp_path / "tiny.png"
    _save_png(p, [0, 64, 128, 255], 2, 2, mode="L")

    im = read_image(p)
    assert im.mode == "RGB"
    assert im.size == (2, 2)
    assert im.getpixel((1, 0)) == (64, 64, 64)


def test_read_image_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_image(tmp_path / "nope.png")


def test_read_image_bad_file(tmp_path: Path):
    p = tmp_path / "bad.png"
    p.write_bytes(b"not an image")
    with pytest.raises(ValueError):
        read_image(p)


@pytest.mark.parametrize("w,h", [(3, 4), (4, 3), (3, 3), (5, 8)])
def test_check_resolution_rejects_either_side(w, h):
    with pytest.raises(UnsupportedResolution) as exc:
        check_resolution(w, h, SMALL)
    assert exc.value.width == w
    assert exc.value.height == h
    assert exc.value.required == 4
    assert "Only 4x4" in str(exc.value)


def test_check_resolution_accepts_exact_size():
    check_resolution(4, 4, SMALL)


def test_unsupported_resolution_is_value_error():
    assert issubclass(UnsupportedResolution, ValueError)


def test_sample_pixels_normalises_and_sums_rows():
    values = np.array([
        [0, 0, 0, 0],
        [255, 255, 255, 255],
        [51, 102, 0, 0],
        [0, 0, 0, 255],
    ])
    grid, energy = sample_pixels(values, SMALL)
    assert isinstance(grid, BrightnessGrid)
    assert grid[1, 3] == 1.0
    assert grid[2, 1] == pytest.approx(0.4)
    assert list(energy) == pytest.approx([0.0, 4.0, 0.6, 1.0])


def test_sample_pixels_uses_red_channel_only():
    rgb = np.zeros((4, 4, 3), dtype=np.uint8)
    rgb[:, :, 0] = 255   # red full
    rgb[:, :, 1] = 10    # green/blue ignored
    grid, energy = sample_pixels(rgb, SMALL)
    assert np.all(grid.as_matrix() == 1.0)
    assert list(energy) == pytest.approx([4.0] * 4)


def test_sample_pixels_wrong_size_raises():
    with pytest.raises(UnsupportedResolution):
        sample_pixels(np.zeros((4, 5)), SMALL)


def test_sample_image_greyscale_and_rgb_agree():
    grey = Image.new("L", (4, 4))
    grey.putdata([i * 16 for i in range(16)])
    rgb = grey.convert("RGB")

    g1, e1 = sample_image(grey, SMALL)
    g2, e2 = sample_image(rgb, SMALL)
    assert g1 == g2
    assert np.array_equal(e1, e2)
    assert g1[0, 1] == pytest.approx(16 / 255)


def test_sample_image_rejects_before_reading_pixels():
    # 256x255 would pass a both-sides-must-differ check
    im = Image.new("L", (256, 255))
    with pytest.raises(UnsupportedResolution):
        sample_image(im)


def test_image_to_brightness_row_major(tmp_path: Path):
    p = tmp_path / "ramp.png"
    # one bright pixel per row, moving right as we go down
    pixels = []
    for y in range(4):
        pixels += [(255, 0, 0) if x == y else (0, 0, 0) for x in range(4)]
    _save_png(p, pixels, 4, 4)

    grid, energy = image_to_brightness(p, SMALL)
    assert np.array_equal(grid.as_matrix(), np.eye(4))
    assert list(energy) == [1.0, 1.0, 1.0, 1.0]
