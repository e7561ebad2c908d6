#!/usr/bin/env python3
"""
End-to-end compensator design
=============================

    params ─▶ CIC model ─▶ inverse target ─▶ FIR design ─▶ cascade check
                  └──────▶ aliasing locator (diagnostic)

Every stage is a pure function of its inputs; the run either completes or
raises before producing any coefficients.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .aliasing import AliasingReport, locate_mainlobe_aliasing
from .cic import CICResponse, cic_response
from .design import FIRDesign, design_fir
from .errors import MalformedInputError
from .estimate import (PASSBAND_DEVIATION, STOPBAND_DEVIATION, STOPBAND_RATIO,
                       TapEstimator, herrmann_tap_estimate)
from .inverse import InverseTarget, inverse_cic_target
from .params import DesignParameters
from .verify import CascadeVerification, verify_cascade
from .windows import WindowFunc, get_window

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompensatorDesign:
    """Everything one design run produces."""
    params: DesignParameters
    cic: CICResponse
    aliasing: AliasingReport
    target: InverseTarget
    fir: FIRDesign
    verification: CascadeVerification
    equivalent_taps: Optional[int]

    @property
    def taps(self) -> np.ndarray:
        return self.fir.taps


def design_compensator(params: DesignParameters,
                       tap_estimator: Optional[TapEstimator] = herrmann_tap_estimate,
                       window: Optional[WindowFunc] = None) -> CompensatorDesign:
    """
    Design and verify the FIR compensator for one CIC parameter set.

    Parameters
    ----------
    params : DesignParameters
        Validated here; PreconditionViolation / MalformedInputError abort
        the run before any numeric work.
    tap_estimator : callable, optional
        Equivalent-lowpass length estimate for the summary; None skips it.
    window : callable, optional
        ``window(length, attenuation_db)``; defaults to ``params.window``.

    Returns
    -------
    CompensatorDesign
    """
    params.validate()
    if window is None:
        window = get_window(params.window)

    t0 = time.perf_counter()
    log.info("CIC: M=%d, R=%d, N=%d, Fs=%g Hz -> %g Hz",
             params.stages, params.decimation, params.diff_delay,
             params.fs, params.fs_out)

    equivalent_taps = None
    if tap_estimator is not None:
        try:
            equivalent_taps = tap_estimator(params.passband, STOPBAND_RATIO * params.passband,
                                            PASSBAND_DEVIATION, STOPBAND_DEVIATION, params.fs)
        except MalformedInputError as e:
            # Stopband at 1.3*Fp can land past Fs/2 when R is small
            log.warning("Skipping equivalent-FIR estimate: %s", e)
        else:
            log.debug("Equivalent lowpass FIR estimate: %d taps", equivalent_taps)

    cic = cic_response(params)
    aliasing = locate_mainlobe_aliasing(cic, params.decimation)
    log.debug("Mainlobe region %d bins, %d kept for alias display",
              aliasing.region_length, len(aliasing.indices))

    target = inverse_cic_target(params)
    log.debug("Inverse target: %d of %d design points cover 0..%g Hz",
              target.covered, len(target.gain), params.passband)

    weights = window(params.num_taps, params.window_atten_db)
    log.info("Designing %d taps (%s window, %g dB) over %d frequency points…",
             params.num_taps, getattr(window, "__name__", params.window),
             params.window_atten_db, len(target.freq))
    fir = design_fir(params.num_taps, target.freq, target.gain, weights)

    verification = verify_cascade(fir.taps, params)
    log.info("Cascade: DC %.3f dB, flat-band deviation %.3f dB (0..%g Hz), "
             "%.2f dB at Fp, stopband peak %.1f dB",
             verification.dc_gain_db, verification.passband_ripple_db,
             verification.flat_band_edge_hz, verification.edge_gain_db,
             verification.stopband_peak_db)
    log.info("Design complete in %.3f seconds", time.perf_counter() - t0)

    return CompensatorDesign(
        params=params,
        cic=cic,
        aliasing=aliasing,
        target=target,
        fir=fir,
        verification=verification,
        equivalent_taps=equivalent_taps,
    )
