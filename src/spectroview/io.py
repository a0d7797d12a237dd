"""Audio file loading."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import soundfile as sf

from .errors import InvalidArgument
from .signal.stft import SampleBuffer

LOGGER = logging.getLogger(__name__)


def load_audio(path: str | Path, *, channel: int = 0) -> SampleBuffer:
    """Decode an audio file and keep one channel as a :class:`SampleBuffer`."""
    try:
        data, sample_rate = sf.read(str(path), dtype="float64", always_2d=True)
    except sf.SoundFileError as exc:
        raise InvalidArgument(f"Cannot read audio file {path}: {exc}") from exc
    if not 0 <= channel < data.shape[1]:
        raise InvalidArgument(
            f"channel {channel} out of range for {data.shape[1]}-channel file {path}"
        )
    if data.shape[1] > 1:
        LOGGER.info("Using channel %d of %d from %s", channel, data.shape[1], path)
    return SampleBuffer(np.ascontiguousarray(data[:, channel]), float(sample_rate))


def save_audio(path: str | Path, buffer: SampleBuffer, *, subtype: str = "FLOAT") -> Path:
    """Write ``buffer`` as a mono audio file."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    sf.write(str(out), buffer.samples, int(round(buffer.sample_rate)), subtype=subtype)
    return out
