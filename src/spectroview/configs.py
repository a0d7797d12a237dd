"""YAML loading and saving for analysis configuration files."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Iterable

import yaml

from .config_schema import AnalysisConfig, analysis_config_to_dict, parse_analysis_config

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
except ModuleNotFoundError as exc:
    raise RuntimeError(
        "spectroview requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


def _dotlist(overrides: Iterable[str] | None) -> list[str]:
    return [item.strip() for item in (overrides or []) if item and item.strip()]


def _to_mapping(cfg: Any, *, context: str) -> dict[str, Any]:
    container = OmegaConf.to_container(cfg, resolve=True)
    if container is None:
        return {}
    if not isinstance(container, dict):
        raise TypeError(f"Expected a mapping at the top of {context}, got {type(container)!r}")
    return {str(key): value for key, value in container.items()}


def load_yaml(
    path: str | Path,
    *,
    overrides: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Read ``path`` and apply ``key.path=value`` overrides on top of it."""
    cfg = OmegaConf.load(Path(path))
    extra = _dotlist(overrides)
    if extra:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(extra))
    return _to_mapping(cfg, context=str(path))


def merge_overrides(
    data: dict[str, Any],
    overrides: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Return a copy of ``data`` with ``key.path=value`` overrides applied."""
    extra = _dotlist(overrides)
    if not extra:
        return dict(data)
    merged = OmegaConf.merge(OmegaConf.create(data), OmegaConf.from_dotlist(extra))
    return _to_mapping(merged, context="merged overrides")


def load_analysis_config(
    path: str | Path | None = None,
    *,
    overrides: Iterable[str] | None = None,
) -> AnalysisConfig:
    """Resolve the analysis config from an optional file plus overrides.

    Without ``path`` the schema defaults are used as the base.
    """
    if path is None:
        raw = merge_overrides({}, overrides)
    else:
        raw = load_yaml(path, overrides=overrides)
    return parse_analysis_config(raw)


def save_yaml(path: str | Path, data: dict[str, Any]) -> None:
    """Write ``data`` to ``path`` as block-style YAML, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)


def save_analysis_config(path: str | Path, config: AnalysisConfig) -> None:
    save_yaml(path, analysis_config_to_dict(config))
