#!/usr/bin/env python3
"""
Tests for the inverse-CIC design target.
"""

import numpy as np
import pytest

from ciccomp import DesignParameters, design_frequency_axis, inverse_cic_target


@pytest.mark.parametrize("M,R,N", [(1, 2, 1), (3, 10, 1), (5, 64, 2), (4, 7, 3)])
def test_dc_sample_is_exactly_one(M, R, N):
    p = DesignParameters(stages=M, decimation=R, diff_delay=N, passband=0.2 * 1000 / R)
    assert inverse_cic_target(p).gain[0] == 1.0


def test_default_layout():
    p = DesignParameters()
    target = inverse_cic_target(p)

    assert len(target.gain) == p.num_design_points == 128
    np.testing.assert_array_equal(target.freq, design_frequency_axis(p))
    # round(128 * 25 / 50) + 1
    assert target.covered == 65
    assert np.all(target.gain[:65] >= 1.0)
    assert np.all(target.gain[65:] == 0.0)
    # Droop grows with frequency, so its inverse rises
    assert np.all(np.diff(target.gain[:65]) > 0)
    assert target.freq_hz[-1] == pytest.approx(50.0)


def test_matches_closed_form_inverse():
    p = DesignParameters()
    target = inverse_cic_target(p)
    M, R, N = p.stages, p.decimation, p.diff_delay

    f = target.freq[1:target.covered] / R
    expected = 1 / ((1 / (R * N) ** M)
                    * (np.sin(np.pi * f * R * N / 2) / np.sin(np.pi * f / 2)) ** M)
    np.testing.assert_allclose(target.gain[1:target.covered], expected, rtol=1e-12)


def test_passband_near_nyquist_keeps_last_sample_zero():
    p = DesignParameters(passband=49.9)
    target = inverse_cic_target(p)
    assert target.covered == len(target.gain) - 1
    assert target.gain[-1] == 0.0
    assert np.all(np.isfinite(target.gain))
