"""Typed OmegaConf schemas for analysis configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import importlib
from typing import Any, Mapping, TypeVar, cast

from .errors import InvalidArgument, InvalidTransformSize
from .signal.window import WindowKind, parse_window_kind

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
    OmegaConfBaseException = importlib.import_module("omegaconf.errors").OmegaConfBaseException
except ModuleNotFoundError as exc:  # pragma: no cover
    raise RuntimeError(
        "spectroview.config_schema requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


@dataclass
class STFTConfig:
    """STFT configuration schema."""

    fft_size: int = 1024
    window: str = "Hann"

    @property
    def window_kind(self) -> WindowKind:
        return parse_window_kind(self.window)


@dataclass
class PeakConfig:
    """Peak extraction options."""

    count: int = 5
    unwrap_phase: bool = False


@dataclass
class RenderConfig:
    """Image rendering options."""

    colormap: str = "magma"
    dpi: int = 100


@dataclass
class RuntimeConfig:
    """Runtime execution configuration schema."""

    workers: int = 1
    use_processes: bool = False
    log_level: str = "INFO"


@dataclass
class AnalysisConfig:
    """Top-level analysis configuration schema."""

    stft: STFTConfig = field(default_factory=STFTConfig)
    peaks: PeakConfig = field(default_factory=PeakConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


TSchema = TypeVar("TSchema")


def _decode_schema(
    data: Mapping[str, object],
    schema: type[TSchema],
) -> TSchema:
    base = OmegaConf.structured(schema)
    try:
        loaded = OmegaConf.create(dict(data))
        merged = OmegaConf.merge(base, loaded)
        decoded = OmegaConf.to_object(merged)
    except OmegaConfBaseException as exc:
        raise InvalidArgument(f"Invalid {schema.__name__}: {exc}") from exc
    if not isinstance(decoded, schema):
        raise TypeError(f"Failed to decode config as {schema.__name__}")
    return cast(TSchema, decoded)


def parse_analysis_config(data: Mapping[str, object]) -> AnalysisConfig:
    """Decode a mapping into :class:`AnalysisConfig` and check the window name.

    The transform size is left as configured; callers clamp it against the
    loaded buffer length.
    """
    config = _decode_schema(data, AnalysisConfig)
    parse_window_kind(config.stft.window)
    if config.stft.fft_size < 2:
        raise InvalidTransformSize(
            f"stft.fft_size must be >= 2, got {config.stft.fft_size}"
        )
    if config.peaks.count < 0:
        raise InvalidArgument(f"peaks.count must be non-negative, got {config.peaks.count}")
    return config


def parse_stft_config(data: Mapping[str, object]) -> STFTConfig:
    """Decode a mapping into :class:`STFTConfig`."""
    return _decode_schema(data, STFTConfig)


def analysis_config_to_dict(config: AnalysisConfig) -> dict[str, Any]:
    """Convert :class:`AnalysisConfig` to plain dictionary."""
    return asdict(config)
