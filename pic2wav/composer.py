# composer.py
"""
Turn a picture file into a WAV file.

Flow:
  Read file -> BrightnessGrid + row energy -> synthesize -> write_wav
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from pic2wav.config import DEFAULT_CONFIG, SynthesisConfig
from pic2wav.conversion import image_to_brightness
from pic2wav.synth import synthesize
from pic2wav.wav import write_wav


def compose_from_image(
    image_path: str | Path,
    config: SynthesisConfig = DEFAULT_CONFIG,
    workers: int = 1,
) -> np.ndarray:
    """
    Read an R x R picture and return its int16 samples.

    Raises UnsupportedResolution (before any synthesis) if the picture is the wrong size.
    """
    grid, row_energy = image_to_brightness(image_path, config)
    return synthesize(grid, row_energy, config, workers=workers)


def image_to_wav(
    image_path: str | Path,
    wav_path: str | Path,
    config: SynthesisConfig = DEFAULT_CONFIG,
    workers: int = 1,
) -> Path:
    """Convert image_path to a WAV at wav_path. Nothing is written if the picture is rejected."""
    samples = compose_from_image(image_path, config, workers=workers)
    return write_wav(wav_path, samples, config)
