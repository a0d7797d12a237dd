import numpy as np
import pytest

from spectroview.errors import InvalidArgument, InvalidWindowKind
from spectroview.signal.window import (
    WindowKind,
    coefficients,
    parse_window_kind,
    window_names,
)


def _reference(kind: WindowKind, length: int) -> np.ndarray:
    phase = 2.0 * np.pi * np.arange(length) / (length - 1)
    if kind is WindowKind.RECTANGLE:
        return np.ones(length)
    if kind is WindowKind.HANN:
        return 0.5 - 0.5 * np.cos(phase)
    if kind is WindowKind.HAMMING:
        return 0.54 - 0.46 * np.cos(phase)
    return 0.42 - 0.5 * np.cos(phase) + 0.08 * np.cos(2.0 * phase)


@pytest.mark.parametrize("kind", list(WindowKind))
@pytest.mark.parametrize("length", [2, 3, 8, 33, 256])
def test_coefficients_match_closed_form(kind: WindowKind, length: int) -> None:
    win = coefficients(kind, length)
    assert win.shape == (length,)
    np.testing.assert_allclose(win, _reference(kind, length), rtol=0.0, atol=1e-12)


@pytest.mark.parametrize("kind", list(WindowKind))
@pytest.mark.parametrize("length", [2, 5, 64, 1024])
def test_coefficients_are_symmetric(kind: WindowKind, length: int) -> None:
    win = coefficients(kind, length)
    np.testing.assert_allclose(win, win[::-1], rtol=0.0, atol=1e-12)


@pytest.mark.parametrize("kind", list(WindowKind))
def test_degenerate_lengths(kind: WindowKind) -> None:
    np.testing.assert_array_equal(coefficients(kind, 1), np.array([1.0]))
    assert coefficients(kind, 0).shape == (0,)


def test_tapered_windows_reach_expected_endpoints() -> None:
    assert coefficients(WindowKind.HANN, 16)[0] == pytest.approx(0.0, abs=1e-12)
    assert coefficients(WindowKind.HAMMING, 16)[0] == pytest.approx(0.08, abs=1e-12)
    assert coefficients(WindowKind.BLACKMAN, 16)[0] == pytest.approx(0.0, abs=1e-12)
    assert coefficients(WindowKind.HANN, 17)[8] == pytest.approx(1.0, abs=1e-12)


def test_parse_window_kind_accepts_exact_names() -> None:
    assert window_names() == ["Rectangle", "Hann", "Hamming", "Blackman"]
    for name in window_names():
        assert parse_window_kind(name).value == name


@pytest.mark.parametrize("name", ["hann", "HANN", "Hanning", "", "Kaiser"])
def test_parse_window_kind_rejects_unknown_names(name: str) -> None:
    with pytest.raises(InvalidWindowKind, match="Unknown window function"):
        parse_window_kind(name)


def test_coefficients_reject_raw_strings_and_negative_length() -> None:
    with pytest.raises(InvalidWindowKind):
        coefficients("Hann", 8)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgument):
        coefficients(WindowKind.HANN, -1)
