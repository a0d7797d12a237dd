"""Command line entry point for spectral analysis of audio files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import matplotlib
import matplotlib.pyplot as plt

from .config_schema import AnalysisConfig, analysis_config_to_dict
from .configs import load_analysis_config
from .errors import SpectroviewError
from .io import load_audio
from .limits import clamp_fft_size
from .logging_utils import JsonlLogger, peak_record
from .session import AnalysisSession
from .signal.window import window_names
from .visualization.spectrogram import save_spectrogram
from .worker import AnalysisRequest, AnalysisWorker

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure logging format and level for CLI commands."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
    )


def _resolve_config(args: argparse.Namespace) -> AnalysisConfig:
    overrides = list(args.set or [])
    if getattr(args, "fft_size", None) is not None:
        overrides.append(f"stft.fft_size={args.fft_size}")
    if getattr(args, "window", None) is not None:
        overrides.append(f"stft.window={args.window}")
    if getattr(args, "count", None) is not None:
        overrides.append(f"peaks.count={args.count}")
    if getattr(args, "unwrap", False):
        overrides.append("peaks.unwrap_phase=true")
    return load_analysis_config(args.config, overrides=overrides)


def peaks_command(args: argparse.Namespace) -> None:
    """Print the strongest bins of the leading frame of an audio file."""
    cfg = _resolve_config(args)
    configure_logging(cfg.runtime.log_level)

    session = AnalysisSession.from_file(args.audio)
    fft_size = clamp_fft_size(cfg.stft.fft_size, len(session.buffer))
    result = session.run_single_frame(fft_size, cfg.stft.window_kind)
    peaks = session.peaks(cfg.peaks.count)
    phases = session.peak_phases(cfg.peaks.count, unwrap=cfg.peaks.unwrap_phase)

    print(f"{'rank':>4} {'bin':>6} {'frequency_hz':>14} {'phase_rad':>10} {'magnitude':>14}")
    for rank, (peak, phase) in enumerate(zip(peaks, phases), start=1):
        print(
            f"{rank:>4} {peak.bin:>6} {peak.frequency_hz:>14.3f} "
            f"{phase:>10.4f} {peak.magnitude:>14.6g}"
        )

    if args.plot is not None:
        matplotlib.use("Agg")
        figure = session.render()
        args.plot.parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(args.plot, dpi=cfg.render.dpi)
        plt.close(figure)
        LOGGER.info("Saved frame plot: %s", args.plot)

    if args.log_jsonl is not None:
        JsonlLogger(args.log_jsonl).write(
            peak_record(
                str(args.audio),
                result.fft_size,
                result.window.value,
                result.sample_rate,
                peaks,
            )
        )


def spectrogram_command(args: argparse.Namespace) -> None:
    """Render the full-buffer spectrogram of an audio file to an image."""
    cfg = _resolve_config(args)
    configure_logging(cfg.runtime.log_level)
    matplotlib.use("Agg")

    buffer = load_audio(args.audio)
    fft_size = clamp_fft_size(cfg.stft.fft_size, len(buffer))
    request = AnalysisRequest(
        audio_data=buffer.samples,
        size=fft_size,
        window_function_name=cfg.stft.window,
    )
    with AnalysisWorker(
        max_workers=cfg.runtime.workers,
        use_processes=cfg.runtime.use_processes,
    ) as worker:
        response = worker.run(request)

    grid = response.to_grid(buffer.sample_rate)
    path = save_spectrogram(
        grid, args.output, colormap=cfg.render.colormap, dpi=cfg.render.dpi
    )
    print(f"Saved spectrogram: {path}")

    if args.log_jsonl is not None:
        JsonlLogger(args.log_jsonl).write(
            {
                "source": str(args.audio),
                "fft_size": response.size,
                "window": cfg.stft.window,
                "n_frames": response.n_frames,
                "output": str(path),
            }
        )


def show_config_command(args: argparse.Namespace) -> None:
    """Print the fully resolved configuration."""
    print(analysis_config_to_dict(_resolve_config(args)))


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an analysis YAML config.",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        help="OmegaConf-style config override, e.g. stft.fft_size=2048",
    )
    parser.add_argument("--fft-size", type=int, default=None, help="Transform size.")
    parser.add_argument(
        "--window",
        type=str,
        default=None,
        help=f"Window function ({' | '.join(window_names())}).",
    )


def _add_analysis_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("audio", type=Path, help="Path to the input audio file.")
    _add_common_arguments(parser)
    parser.add_argument(
        "--log-jsonl",
        type=Path,
        default=None,
        help="Append a JSON record of the analysis to this file.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser for spectroview commands."""
    parser = argparse.ArgumentParser(
        prog="spectroview",
        description="Spectral analysis and spectrogram rendering for audio files",
    )
    parser.add_argument(
        "--list-windows",
        action="store_true",
        help="Print available window function names and exit",
    )
    sub = parser.add_subparsers(dest="command")

    peaks_parser = sub.add_parser("peaks", help="Report dominant peaks of one frame.")
    _add_analysis_arguments(peaks_parser)
    peaks_parser.add_argument(
        "--count", type=int, default=None, help="Number of peaks to report."
    )
    peaks_parser.add_argument(
        "--unwrap",
        action="store_true",
        help="Unwrap peak phases along the reported order.",
    )
    peaks_parser.add_argument(
        "--plot",
        type=Path,
        default=None,
        help="Save the waveform/spectrum figure to this path.",
    )
    peaks_parser.set_defaults(handler=peaks_command)

    spec_parser = sub.add_parser("spectrogram", help="Render a spectrogram image.")
    _add_analysis_arguments(spec_parser)
    spec_parser.add_argument(
        "--output", type=Path, required=True, help="Output image path."
    )
    spec_parser.set_defaults(handler=spectrogram_command)

    show_parser = sub.add_parser("show-config", help="Print resolved configuration.")
    _add_common_arguments(show_parser)
    show_parser.set_defaults(handler=show_config_command)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_windows:
        for name in window_names():
            print(name)
        return
    if args.command is None:
        parser.print_help()
        return

    try:
        args.handler(args)
    except SpectroviewError as exc:
        raise SystemExit(f"spectroview: error: {exc}") from exc


if __name__ == "__main__":
    main()
