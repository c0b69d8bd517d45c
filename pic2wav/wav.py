# wav.py
"""
Canonical RIFF/WAVE (linear PCM) container for the synthesized samples.

Layout (44-byte header + data), all integers little-endian:
  "RIFF" <36 + data_len> "WAVE"
  "fmt " <16> <1=PCM> <channels> <sample_rate> <byte_rate> <block_align> <bits>
  "data" <data_len> <int16 samples...>
"""

from __future__ import annotations

import logging
import os
import wave
from pathlib import Path
from typing import Tuple

import numpy as np

from pic2wav.config import DEFAULT_CONFIG, SynthesisConfig

log = logging.getLogger(__name__)


def _pcm16_bytes(samples) -> bytes:
    return np.asarray(samples, dtype="<i2").tobytes()


def write_wav(path: str | Path, samples, config: SynthesisConfig = DEFAULT_CONFIG) -> Path:
    """
    Write samples to a mono 16-bit PCM WAV file, creating parent folders.

    The file is written next to the target first and moved into place, so a
    failed write never leaves a truncated container behind.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".part")
    try:
        with wave.open(str(tmp), "wb") as w:
            w.setnchannels(config.channels)
            w.setsampwidth(config.bytes_per_sample)
            w.setframerate(config.sample_rate)
            w.writeframes(_pcm16_bytes(samples))
        os.replace(tmp, p)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    log.debug("Wrote %s (%d bytes)", p, p.stat().st_size)
    return p


def read_wav(path: str | Path) -> Tuple[tuple, np.ndarray]:
    """Read a mono 16-bit WAV back as (params, int16 samples)."""
    with wave.open(str(path), "rb") as w:
        params = w.getparams()
        if params.sampwidth != 2:
            raise ValueError(f"Expected 16-bit PCM, got {8 * params.sampwidth}-bit")
        frames = w.readframes(params.nframes)
    return params, np.frombuffer(frames, dtype="<i2")
