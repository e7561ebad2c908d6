#!/usr/bin/env python3
"""
End-to-end tests of the compensator design pipeline.
"""

import logging

import numpy as np
import pytest

from ciccomp import (DesignParameters, MalformedInputError, PreconditionViolation,
                     design_compensator, verify_cascade, cic_mainlobe)


@pytest.fixture(scope="module")
def reference_design():
    # M=3, R=10, N=1, Fs=1000 Hz, Fp=25 Hz, order 31
    return design_compensator(DesignParameters())


def test_reference_scenario(reference_design):
    p = reference_design.params
    assert len(reference_design.taps) == 32
    assert p.fs_out == 100.0
    assert p.passband < 0.5 * p.fs / p.decimation

    v = reference_design.verification
    assert v.dc_gain_db == pytest.approx(0.0, abs=0.1)
    assert v.is_flat(1.0)
    assert v.passband_ripple_db <= 1.0


def test_fp_is_the_minus_six_db_point(reference_design):
    v = reference_design.verification
    assert -9.0 < v.edge_gain_db < -3.0


def test_stopband_is_suppressed(reference_design):
    v = reference_design.verification
    assert v.stopband_peak_db < -20.0
    assert v.stopband_edge_hz == pytest.approx(32.5)


def test_taps_are_linear_phase(reference_design):
    assert reference_design.fir.is_symmetric()


def test_compensation_beats_plain_cic(reference_design):
    v = reference_design.verification
    flat = v.freq_hz <= v.flat_band_edge_hz
    cic_droop = np.max(np.abs(v.cic_mainlobe_db[flat]))
    assert v.passband_ripple_db < cic_droop


def test_cascade_is_product_of_responses(reference_design):
    v = reference_design.verification
    np.testing.assert_allclose(v.cascaded, v.cic_mainlobe * v.fir_magnitude)
    assert len(v.fir_response) == reference_design.params.num_freq_points
    assert v.cic_mainlobe[0] == 1.0


def test_verification_is_reproducible(reference_design):
    again = verify_cascade(reference_design.taps, reference_design.params)
    np.testing.assert_array_equal(again.cascaded_db, reference_design.verification.cascaded_db)


def test_pipeline_is_pure():
    a = design_compensator(DesignParameters())
    b = design_compensator(DesignParameters())
    np.testing.assert_array_equal(a.taps, b.taps)


def test_larger_design_is_flat():
    p = DesignParameters(stages=4, decimation=16, fs=2.048e6, passband=40e3, fir_order=63)
    design = design_compensator(p)
    assert len(design.taps) == 64
    assert design.verification.dc_gain_db == pytest.approx(0.0, abs=0.1)
    assert design.verification.is_flat(1.0)


def test_odd_length_design():
    design = design_compensator(DesignParameters(fir_order=40))
    assert len(design.taps) == 41
    assert design.fir.is_symmetric()


@pytest.mark.parametrize("fp", [60.0, 50.0, 0.0, -5.0])
def test_passband_precondition(fp):
    called = []

    def estimator(*args):
        called.append(args)
        return 1

    with pytest.raises(PreconditionViolation):
        design_compensator(DesignParameters(passband=fp), tap_estimator=estimator)
    assert called == []


@pytest.mark.parametrize("kwargs", [
    {"stages": 0},
    {"decimation": -2},
    {"diff_delay": 0},
    {"fs": 0.0},
    {"fir_order": -1},
    {"num_freq_points": 0},
    {"window": "triangle"},
])
def test_malformed_parameters(kwargs):
    with pytest.raises(MalformedInputError):
        design_compensator(DesignParameters(**kwargs))


def test_injected_estimator():
    calls = []

    def stub(passband_edge, stopband_edge, passband_ripple, stopband_atten, sample_rate):
        calls.append((passband_edge, stopband_edge, passband_ripple, stopband_atten, sample_rate))
        return 123

    design = design_compensator(DesignParameters(), tap_estimator=stub)
    assert design.equivalent_taps == 123
    assert calls == [(25.0, pytest.approx(32.5), 0.05, 0.01, 1000.0)]


def test_estimate_can_be_skipped():
    assert design_compensator(DesignParameters(), tap_estimator=None).equivalent_taps is None


def test_unreachable_estimate_does_not_abort():
    # R=1: stopband at 1.3*Fp lands beyond Fs/2
    design = design_compensator(DesignParameters(decimation=1, passband=400.0))
    assert design.equivalent_taps is None
    assert len(design.taps) == 32


def test_custom_window():
    calls = []

    def boxcar(length, attenuation_db):
        calls.append((length, attenuation_db))
        return np.ones(length)

    design = design_compensator(DesignParameters(), window=boxcar)
    assert calls == [(32, 50.0)]
    np.testing.assert_array_equal(design.fir.window, np.ones(32))


def test_mainlobe_matches_dc_normalized_model():
    p = DesignParameters()
    mainlobe = cic_mainlobe(p, 8)
    assert mainlobe[0] == 1.0
    assert np.all(np.diff(mainlobe) < 0)


def test_coarse_grid_still_sees_every_tap():
    # 8 bins over the output band, fewer than half the 32 taps
    fine = design_compensator(DesignParameters())
    coarse = design_compensator(DesignParameters(num_freq_points=8))
    np.testing.assert_array_equal(coarse.taps, fine.taps)

    v = coarse.verification
    assert len(v.fir_response) == 8
    assert v.fir_magnitude[0] == pytest.approx(abs(np.sum(coarse.taps)))
    assert v.dc_gain_db == pytest.approx(fine.verification.dc_gain_db, abs=1e-9)
    assert v.is_flat(1.0)


def test_log_names_injected_window(caplog):
    def boxcar(length, attenuation_db):
        return np.ones(length)

    with caplog.at_level(logging.INFO, logger="ciccomp.pipeline"):
        design_compensator(DesignParameters(), window=boxcar)
    designing = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Designing")]
    assert designing
    assert "boxcar window" in designing[0]
    assert "chebwin" not in designing[0]
