"""Example: analyse a synthetic chirp and save a spectrogram plus frame plot.

Usage
-----
``python examples/synthetic_spectrogram.py --output-dir outputs``
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from spectroview import AnalysisSession, parse_window_kind  # noqa: E402
from spectroview.visualization import save_spectrogram  # noqa: E402


def _chirp(sample_rate: float, duration_sec: float) -> np.ndarray:
    t = np.arange(int(sample_rate * duration_sec)) / sample_rate
    f0, f1 = 100.0, sample_rate / 4
    rate = (f1 - f0) / duration_sec
    return np.sin(2 * np.pi * (f0 * t + 0.5 * rate * t**2))


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a chirp spectrogram.")
    parser.add_argument("--output-dir", type=Path, default=Path("outputs"))
    parser.add_argument("--sample-rate", type=float, default=16000.0)
    parser.add_argument("--duration", type=float, default=2.0)
    parser.add_argument("--fft-size", type=int, default=512)
    parser.add_argument("--window", type=str, default="Hann")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    window = parse_window_kind(args.window)
    session = AnalysisSession.from_samples(
        _chirp(args.sample_rate, args.duration), args.sample_rate
    )

    grid = session.spectrogram(args.fft_size, window)
    path = save_spectrogram(grid, args.output_dir / "chirp_spectrogram.png")
    print(f"Saved spectrogram: {path}")

    session.run_single_frame(args.fft_size, window)
    for freq, phase in zip(session.peak_frequencies(3), session.peak_phases(3)):
        print(f"{freq:10.2f} Hz  {phase:+.3f} rad")

    fig = session.render()
    frame_path = args.output_dir / "chirp_frame.png"
    fig.savefig(frame_path)
    plt.close(fig)
    print(f"Saved frame plot: {frame_path}")


if __name__ == "__main__":
    main()
