from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from pic2wav.brightness import BrightnessGrid
from pic2wav.config import DEFAULT_CONFIG, SynthesisConfig

log = logging.getLogger(__name__)

PCM16_MAX = 32767
PCM16_MIN = -32768
TWO_PI = 2.0 * math.pi


# ===== BUILDING BLOCKS =====
def column_frequencies(config: SynthesisConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Frequency in Hz of every image column: column c plays at c * max_frequency / R."""
    return np.arange(config.resolution, dtype=np.float64) * config.hz_per_column


def gaussian_window(config: SynthesisConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Fade applied across one line so consecutive lines blend.

    The line is mapped onto u in [-1, 1] and weighted by exp(-u^2 * gauss_var).
    Hard line edges produce ghost frequencies; the taper removes most of them.
    """
    n = config.samples_per_line
    u = np.arange(n, dtype=np.float64) / (n - 1) * 2.0 - 1.0
    return np.exp(-u * u * config.gauss_var)


def quantize(signal) -> np.ndarray:
    """
    Float samples (nominally -1..1) -> int16, as floor(x * 32767 - 0.5).

    The -0.5 bias keeps the output bit-compatible with existing renders.
    Anything outside the int16 range is hard clipped.
    """
    scaled = np.floor(np.asarray(signal, dtype=np.float64) * PCM16_MAX - 0.5)
    return np.clip(scaled, PCM16_MIN, PCM16_MAX).astype(np.int16)


def _render_row(
    row: int,
    grid: BrightnessGrid,
    energy: float,
    config: SynthesisConfig,
    freqs: np.ndarray,
    window: np.ndarray,
) -> np.ndarray:
    spl = config.samples_per_line
    if energy == 0.0:
        # black line: nothing to normalise against, play silence
        return np.zeros(spl, dtype=np.int16)

    # time keeps running across lines, it is not reset per row
    start = row * spl
    t = np.arange(start, start + spl, dtype=np.float64) / config.sample_rate

    # (samples x bins) sines, weighted by the row and summed over bins
    partials = np.sin(np.outer(t, TWO_PI * freqs))
    raw = partials @ grid.row(row)
    raw /= energy
    raw *= window
    return quantize(raw)


def _check_inputs(grid: BrightnessGrid, row_energy, config: SynthesisConfig) -> np.ndarray:
    if grid.resolution != config.resolution:
        raise ValueError(
            f"Grid resolution {grid.resolution} does not match config resolution {config.resolution}"
        )
    energy = np.asarray(row_energy, dtype=np.float64)
    if energy.shape != (config.resolution,):
        raise ValueError(f"row_energy must have {config.resolution} entries, got shape {energy.shape}")
    return energy


# ===== PUBLIC API =====
def synthesize_row(
    row: int,
    grid: BrightnessGrid,
    row_energy,
    config: SynthesisConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Samples for a single image line (samples_per_line int16 values)."""
    energy = _check_inputs(grid, row_energy, config)
    if not (0 <= row < config.resolution):
        raise IndexError(f"row {row} outside 0..{config.resolution - 1}")
    return _render_row(
        row, grid, float(energy[row]), config, column_frequencies(config), gaussian_window(config)
    )


def synthesize(
    grid: BrightnessGrid,
    row_energy,
    config: SynthesisConfig = DEFAULT_CONFIG,
    workers: int = 1,
) -> np.ndarray:
    """
    Turn a brightness grid into the full int16 sample sequence.

    Each row becomes samples_per_line samples: the columns are summed as sine
    partials (column -> frequency, brightness -> amplitude), divided by the
    row's energy, faded with the Gaussian window and quantized.

    Rows do not depend on each other, so with workers > 1 they are rendered on a
    thread pool, each writing its own slice of the output. The result is the
    same for any worker count.

    Returns a read-only int16 array of length config.num_samples.
    """
    energy = _check_inputs(grid, row_energy, config)
    freqs = column_frequencies(config)
    window = gaussian_window(config)
    spl = config.samples_per_line
    out = np.empty(config.num_samples, dtype=np.int16)

    def render(row: int) -> None:
        out[row * spl:(row + 1) * spl] = _render_row(row, grid, float(energy[row]), config, freqs, window)

    rows = range(config.resolution)
    if workers <= 1:
        for row in rows:
            render(row)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() so worker exceptions surface here
            list(pool.map(render, rows))

    log.debug(
        "Synthesized %d samples (%d lines x %d) at %d Hz",
        out.size, config.resolution, spl, config.sample_rate,
    )
    out.flags.writeable = False
    return out
