"""JSON Lines records of analysis results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from .analysis.peaks import Peak


class JsonlLogger:
    """Append JSON-serializable records to a JSON Lines file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, record: Mapping[str, Any]) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(dict(record), ensure_ascii=False) + "\n")


def peak_record(
    source: str,
    fft_size: int,
    window: str,
    sample_rate: float,
    peaks: Sequence[Peak],
) -> dict[str, Any]:
    """Build one JSON-friendly record describing a single-frame analysis."""
    return {
        "source": source,
        "fft_size": int(fft_size),
        "window": window,
        "sample_rate": float(sample_rate),
        "peaks": [
            {
                "bin": peak.bin,
                "frequency_hz": peak.frequency_hz,
                "phase_rad": peak.phase_rad,
                "magnitude": peak.magnitude,
            }
            for peak in peaks
        ],
    }


def read_jsonl(path: str | Path) -> list[dict[str, Any]]:
    """Read every record from a JSON Lines file."""
    with Path(path).open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


def log_records_jsonl(path: str | Path, records: Iterable[Mapping[str, Any]]) -> None:
    """Write many records to JSONL."""
    logger = JsonlLogger(path)
    for record in records:
        logger.write(record)
