# config.py
"""
Synthesis parameters for the image -> waveform conversion.

The defaults below are the tuned values for 256x256 pictures played back
at 48 kHz. They are invariants of the algorithm: change them here (or build
your own SynthesisConfig) rather than at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

# ===== DEFAULTS (EDIT HERE) =====
SAMPLE_RATE = 48_000          # Hz
NUM_CHANNELS = 1              # mono only
BYTES_PER_SAMPLE = 2          # signed 16-bit PCM
REQUIRED_RESOLUTION = 256     # image must be exactly R x R
FRAMES_PER_LINE = 2           # display frames averaged into one image line
DISPLAY_FPS = 60
SECONDS_PER_LINE = FRAMES_PER_LINE * 1.0 / DISPLAY_FPS
# Nyquist is the theoretical ceiling; 0.7 of it was measured to match
# what the visualiser actually displays.
MAX_FREQUENCY_RATIO = 0.7
GAUSS_VAR = 4.0               # width of the per-line fade


@dataclass(frozen=True)
class SynthesisConfig:
    sample_rate: int = SAMPLE_RATE
    channels: int = NUM_CHANNELS
    bytes_per_sample: int = BYTES_PER_SAMPLE
    resolution: int = REQUIRED_RESOLUTION
    seconds_per_line: float = SECONDS_PER_LINE
    max_frequency_ratio: float = MAX_FREQUENCY_RATIO
    gauss_var: float = GAUSS_VAR

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        if self.channels != 1:
            raise ValueError(f"Only mono output is supported (channels={self.channels})")
        if self.bytes_per_sample != 2:
            raise ValueError(
                f"Only 16-bit PCM is supported (bytes_per_sample={self.bytes_per_sample})"
            )
        if self.resolution <= 0:
            raise ValueError("resolution must be positive")
        if self.seconds_per_line <= 0:
            raise ValueError("seconds_per_line must be positive")
        if not (0.0 < self.max_frequency_ratio <= 1.0):
            raise ValueError("max_frequency_ratio must be in (0, 1]")
        if self.gauss_var < 0:
            raise ValueError("gauss_var must not be negative")
        if self.samples_per_line < 2:
            raise ValueError(
                "seconds_per_line * sample_rate must give at least 2 samples per line"
            )

    # ----- derived values -----
    @property
    def samples_per_line(self) -> int:
        return int(self.seconds_per_line * self.sample_rate + 0.5)

    @property
    def num_samples(self) -> int:
        return self.samples_per_line * self.resolution

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2.0

    @property
    def max_frequency(self) -> float:
        return self.nyquist * self.max_frequency_ratio

    @property
    def hz_per_column(self) -> float:
        """Frequency step between two neighbouring image columns."""
        return self.max_frequency / self.resolution

    @property
    def bits_per_sample(self) -> int:
        return 8 * self.bytes_per_sample

    @property
    def block_align(self) -> int:
        return self.bytes_per_sample * self.channels

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.bytes_per_sample * self.channels

    @property
    def data_size(self) -> int:
        """Size in bytes of the PCM payload for one full picture."""
        return self.num_samples * self.block_align


DEFAULT_CONFIG = SynthesisConfig()
