#!/usr/bin/env python3
"""
Inverse-CIC design target
=========================

Builds the magnitude-vs-frequency vector handed to the FIR designer: the
reciprocal of the normalized CIC mainlobe over [0, Fp] (decimated rate),
zero everywhere above.  The zeros mean "suppress"; the compensator's own
roll-off plus the CIC stopband take care of the rest.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .cic import cic_magnitude, round_half_up
from .params import DesignParameters


@dataclass(frozen=True)
class InverseTarget:
    freq: np.ndarray      # normalized, Nyquist of the output rate == 1
    freq_hz: np.ndarray
    gain: np.ndarray      # desired linear magnitude
    covered: int          # leading samples carrying inverse-CIC values


def design_frequency_axis(params: DesignParameters) -> np.ndarray:
    """``num_design_points`` evenly spaced points from 0 to 1 (output Nyquist)."""
    return np.linspace(0.0, 1.0, params.num_design_points)


def inverse_cic_target(params: DesignParameters,
                       freq_axis: Optional[np.ndarray] = None) -> InverseTarget:
    """
    Reciprocal of the CIC mainlobe, sampled on the FIR design axis.

    Assumes ``params`` has been validated, in particular Fp < Fs/(2R).
    Sample i of the axis is x_i (output Nyquist units); the CIC is evaluated
    at x_i / (2R) cycles/sample of the input rate, which is the same as

        1 / ( (1/(RN)^M) * (sin(pi f R N/2) / sin(pi f/2))^M ),  f = x_i / R
    """
    if freq_axis is None:
        freq_axis = design_frequency_axis(params)
    freq_axis = np.asarray(freq_axis, dtype=np.float64)
    P = len(freq_axis)

    # Enough samples to reach Fp; the last sample always stays at zero
    covered = round_half_up(P * params.passband / params.nyquist_out) + 1
    covered = min(covered, P - 1)

    f_in = freq_axis[:covered] / (2 * params.decimation)
    droop = cic_magnitude(f_in, params.stages, params.decimation, params.diff_delay)
    droop /= params.dc_gain

    gain = np.zeros(P)
    gain[:covered] = 1.0 / droop
    if covered:
        gain[0] = 1.0   # exact, no 0/0 at DC

    return InverseTarget(
        freq=freq_axis,
        freq_hz=freq_axis * params.nyquist_out,
        gain=gain,
        covered=covered,
    )
