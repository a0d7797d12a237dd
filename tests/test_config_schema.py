from __future__ import annotations

from pathlib import Path

import pytest

from spectroview.config_schema import (
    analysis_config_to_dict,
    parse_analysis_config,
    parse_stft_config,
)
from spectroview.configs import (
    load_analysis_config,
    load_yaml,
    merge_overrides,
    save_analysis_config,
    save_yaml,
)
from spectroview.errors import InvalidArgument, InvalidTransformSize, InvalidWindowKind
from spectroview.signal import WindowKind


def test_parse_analysis_config_applies_defaults() -> None:
    cfg = parse_analysis_config({"stft": {"fft_size": 2048}, "runtime": {"workers": 4}})
    assert cfg.stft.fft_size == 2048
    assert cfg.stft.window == "Hann"
    assert cfg.stft.window_kind is WindowKind.HANN
    assert cfg.peaks.count == 5
    assert cfg.render.colormap == "magma"
    assert cfg.runtime.workers == 4


def test_parse_analysis_config_rejects_unknown_key() -> None:
    with pytest.raises(InvalidArgument, match="unknown_field"):
        parse_analysis_config({"stft": {"unknown_field": 1}})
    with pytest.raises(InvalidArgument, match="could not be converted"):
        parse_analysis_config({"stft": {"fft_size": "abc"}})


def test_parse_analysis_config_rejects_bad_values() -> None:
    with pytest.raises(InvalidWindowKind):
        parse_analysis_config({"stft": {"window": "hanning"}})
    with pytest.raises(InvalidTransformSize):
        parse_analysis_config({"stft": {"fft_size": 1}})
    with pytest.raises(InvalidArgument):
        parse_analysis_config({"peaks": {"count": -2}})


def test_parse_stft_config() -> None:
    cfg = parse_stft_config({"window": "Blackman"})
    assert cfg.window_kind is WindowKind.BLACKMAN
    assert cfg.fft_size == 1024


def test_yaml_round_trip_with_overrides(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "analysis.yaml"
    save_yaml(path, analysis_config_to_dict(parse_analysis_config({})))

    loaded = load_yaml(path, overrides=["stft.fft_size=512", "peaks.count=3"])
    cfg = parse_analysis_config(loaded)
    assert cfg.stft.fft_size == 512
    assert cfg.peaks.count == 3
    assert cfg.runtime.log_level == "INFO"


def test_merge_overrides_keeps_original_mapping() -> None:
    base = {"stft": {"fft_size": 256}}
    merged = merge_overrides(base, ["stft.window=Hamming"])
    assert merged == {"stft": {"fft_size": 256, "window": "Hamming"}}
    assert base == {"stft": {"fft_size": 256}}
    assert merge_overrides(base, []) == base


def test_load_analysis_config_with_and_without_file(tmp_path: Path) -> None:
    defaults = load_analysis_config(overrides=["stft.window=Rectangle"])
    assert defaults.stft.window_kind is WindowKind.RECTANGLE
    assert defaults.stft.fft_size == 1024

    path = tmp_path / "analysis.yaml"
    save_analysis_config(path, defaults)
    reloaded = load_analysis_config(path, overrides=["render.dpi=200"])
    assert reloaded.stft.window == "Rectangle"
    assert reloaded.render.dpi == 200
