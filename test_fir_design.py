#!/usr/bin/env python3
"""
Tests for frequency-sampling FIR synthesis and the window functions.
"""

import numpy as np
import pytest

from ciccomp import (MalformedInputError, chebyshev_window, design_fir, get_window,
                     kaiser_window)
from ciccomp.design import interp_grid_size


def _lowpass_spec(n_points=128, edge=0.5):
    freq = np.linspace(0, 1, n_points)
    gain = (freq <= edge).astype(float)
    return freq, gain


@pytest.mark.parametrize("num_taps", [31, 32, 33, 64])
def test_length_and_symmetry(num_taps):
    freq, gain = _lowpass_spec(4 * num_taps)
    fir = design_fir(num_taps, freq, gain, chebyshev_window(num_taps, 50))
    assert fir.num_taps == num_taps
    assert fir.is_symmetric()


def test_taps_are_read_only():
    freq, gain = _lowpass_spec()
    fir = design_fir(32, freq, gain, chebyshev_window(32, 50))
    with pytest.raises(ValueError):
        fir.taps[0] = 1.0


def test_flat_target_gives_centered_impulse():
    freq = np.linspace(0, 1, 64)
    gain = np.ones(64)
    fir = design_fir(15, freq, gain, np.ones(15))
    assert np.argmax(fir.taps) == 7
    assert fir.dc_gain == pytest.approx(1.0, abs=1e-6)


def test_window_scales_but_keeps_length():
    freq, gain = _lowpass_spec()
    plain = design_fir(31, freq, gain, np.ones(31))
    win = chebyshev_window(31, 50)
    shaped = design_fir(31, freq, gain, win)
    assert len(shaped.taps) == len(plain.taps)
    np.testing.assert_allclose(shaped.taps, plain.taps * win)


def test_mismatched_lengths_rejected():
    freq, gain = _lowpass_spec()
    with pytest.raises(MalformedInputError, match="magnitude vector"):
        design_fir(32, freq, gain[:-1], chebyshev_window(32, 50))


def test_non_monotonic_axis_rejected():
    freq, gain = _lowpass_spec()
    freq = freq.copy()
    freq[10], freq[11] = freq[11], freq[10]
    with pytest.raises(MalformedInputError, match="increasing"):
        design_fir(32, freq, gain, chebyshev_window(32, 50))


def test_too_few_points_rejected():
    freq, gain = _lowpass_spec(n_points=20)
    with pytest.raises(MalformedInputError):
        design_fir(32, freq, gain, chebyshev_window(32, 50))


def test_window_length_mismatch_rejected():
    freq, gain = _lowpass_spec()
    with pytest.raises(MalformedInputError, match="Window"):
        design_fir(32, freq, gain, chebyshev_window(31, 50))


def test_type_ii_needs_zero_at_nyquist():
    freq = np.linspace(0, 1, 128)
    with pytest.raises(MalformedInputError, match="Nyquist"):
        design_fir(32, freq, np.ones(128), chebyshev_window(32, 50))


def test_malformed_input_is_a_value_error():
    assert issubclass(MalformedInputError, ValueError)


def test_interp_grid_is_dense():
    assert interp_grid_size(32) == 513
    assert interp_grid_size(600) == 1025
    assert interp_grid_size(1024) == 1025


@pytest.mark.parametrize("window", [chebyshev_window, kaiser_window])
def test_windows_are_symmetric_and_peak_normalized(window):
    w = window(32, 50)
    assert len(w) == 32
    np.testing.assert_allclose(w, w[::-1], atol=1e-12)
    assert w.max() == pytest.approx(1.0, abs=1e-2)


def test_chebyshev_sidelobes_meet_attenuation():
    w = chebyshev_window(32, 50)
    W = np.abs(np.fft.rfft(w, 4096))
    W_db = 20 * np.log10(W / W[0] + 1e-300)
    # Outside the mainlobe every sidelobe sits at or below -50 dB
    first_rise = np.flatnonzero(np.diff(W_db) > 0)[0]
    assert W_db[first_rise:].max() <= -50 + 0.1


def test_get_window():
    assert get_window('chebwin') is chebyshev_window
    assert get_window('kaiser') is kaiser_window
    with pytest.raises(MalformedInputError, match="Unsupported window"):
        get_window('hann-ish')
