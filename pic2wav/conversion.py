from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import numpy as np

from pic2wav.brightness import BrightnessGrid
from pic2wav.config import DEFAULT_CONFIG, SynthesisConfig

log = logging.getLogger(__name__)

MAX_CHANNEL_VALUE = 255.0


class UnsupportedResolution(ValueError):
    """The picture is not the R x R size the synthesizer is tuned for."""

    def __init__(self, width: int, height: int, required: int):
        self.width = width
        self.height = height
        self.required = required
        super().__init__(
            f"Only {required}x{required} greyscale pictures are supported (got {width}x{height})"
        )


def read_image(path: str | Path):
    """Open an image file with Pillow and return it as an RGB image."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    try:
        from PIL import Image, ImageOps  # type: ignore
    except Exception as e:
        raise ImportError("Pillow is required: pip install pillow") from e
    try:
        with Image.open(p) as im:
            im = ImageOps.exif_transpose(im)
            im = im.convert("RGB")
            im.load()
            return im
    except OSError as e:
        raise ValueError(f"Failed to open/read image: {p.name}") from e


def check_resolution(width: int, height: int, config: SynthesisConfig = DEFAULT_CONFIG) -> None:
    # Either side off is enough to reject: a 256x100 picture is not square.
    required = config.resolution
    if width != required or height != required:
        raise UnsupportedResolution(width, height, required)


def sample_pixels(
    values, config: SynthesisConfig = DEFAULT_CONFIG
) -> Tuple[BrightnessGrid, np.ndarray]:
    """
    Build the brightness grid and per-row energy from raw channel values.

    values: 2D array (height x width) of 0..255 intensities, or a
    height x width x channels array, in which case the first (red) channel is used.
    """
    arr = np.asarray(values)
    if arr.ndim == 3:
        arr = arr[:, :, 0]
    if arr.ndim != 2:
        raise ValueError(f"Expected a 2D pixel array, got shape {arr.shape}")

    height, width = arr.shape
    check_resolution(width, height, config)

    brightness = arr.astype(np.float64) / MAX_CHANNEL_VALUE
    grid = BrightnessGrid(brightness, config.resolution)
    row_energy = grid.row_energy()
    log.debug("Sampled %dx%d grid, %d silent rows", width, height, int((row_energy == 0).sum()))
    return grid, row_energy


def sample_image(image, config: SynthesisConfig = DEFAULT_CONFIG) -> Tuple[BrightnessGrid, np.ndarray]:
    """
    Read the red channel of a decoded Pillow image into (BrightnessGrid, row_energy).

    The picture is assumed greyscale, so red stands in for every channel.
    Raises UnsupportedResolution before touching any pixel when the size is wrong.
    """
    w, h = image.size
    check_resolution(w, h, config)
    if image.mode != "RGB":
        image = image.convert("RGB")
    return sample_pixels(np.asarray(image), config)


def image_to_brightness(path: str | Path, config: SynthesisConfig = DEFAULT_CONFIG) -> Tuple[BrightnessGrid, np.ndarray]:
    """Read an image file and return (BrightnessGrid, row_energy)."""
    return sample_image(read_image(path), config)
