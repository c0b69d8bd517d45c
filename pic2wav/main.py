# main.py
"""
Bare-bones entry point: convert one picture into one WAV.
No CLI flags—just edit the constants below.

Flow:
  composer.image_to_wav -> output WAV -> read back for the summary line
"""

from pathlib import Path

from pic2wav.composer import image_to_wav
from pic2wav.config import DEFAULT_CONFIG
from pic2wav.conversion import UnsupportedResolution
from pic2wav.wav import read_wav

# ===== EDIT HERE (hard-coded constants) =====
IMAGE_PATH = "line.png"     # 256x256 greyscale source picture
OUTPUT_PATH = "line.wav"    # where the WAV ends up


def main() -> int:
    print(f"Converting: {IMAGE_PATH}")
    try:
        out_path = image_to_wav(IMAGE_PATH, OUTPUT_PATH, DEFAULT_CONFIG)
    except UnsupportedResolution as e:
        print(e)
        return 1
    params, samples = read_wav(out_path)
    seconds = len(samples) / params.framerate
    print(f"Done. Wrote {Path(out_path)} ({seconds:.2f}s @ {params.framerate} Hz, {len(samples)} samples)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
