#!/usr/bin/env python3
"""
Tap-count estimates for an equivalent conventional lowpass FIR.

Used only in the design summary ("a plain tapped-delay-line lowpass would
need about this many taps").  Each estimator has the signature

    estimate(passband_edge, stopband_edge, passband_ripple,
             stopband_atten, sample_rate) -> int

with edges in Hz and ripple/attenuation given as linear deviations
(delta_p, delta_s), e.g. 0.05 and 0.01.
"""

from __future__ import annotations
import math
from typing import Callable, Dict

from scipy.signal import kaiserord

from .errors import MalformedInputError

TapEstimator = Callable[[float, float, float, float, float], int]

# Defaults of the equivalent-filter comparison: stopband at 1.3*Fp,
# 5 % passband ripple, 1 % (-40 dB) stopband.
STOPBAND_RATIO = 1.3
PASSBAND_DEVIATION = 0.05
STOPBAND_DEVIATION = 0.01


def _check_band(passband_edge, stopband_edge, passband_ripple, stopband_atten, sample_rate):
    if not 0 < passband_edge < stopband_edge < sample_rate / 2:
        raise MalformedInputError(
            f"Band edges must satisfy 0 < {passband_edge} < {stopband_edge} < {sample_rate / 2}"
        )
    if not (0 < passband_ripple < 1 and 0 < stopband_atten < 1):
        raise MalformedInputError("Ripple and attenuation are linear deviations in (0, 1)")


def herrmann_tap_estimate(passband_edge: float, stopband_edge: float,
                          passband_ripple: float, stopband_atten: float,
                          sample_rate: float) -> int:
    """
    Herrmann/Rabiner/Chan length estimate for a Parks-McClellan lowpass.

    L = D(dp, ds) / df - f(dp, ds) * df + 1, with df the transition width
    normalized to the sample rate.
    """
    _check_band(passband_edge, stopband_edge, passband_ripple, stopband_atten, sample_rate)
    d1 = math.log10(passband_ripple)
    d2 = math.log10(stopband_atten)

    D = ((0.005309 * d1**2 + 0.07114 * d1 - 0.4761) * d2
         - (0.00266 * d1**2 + 0.5941 * d1 + 0.4278))
    fK = 11.01217 + 0.51244 * (d1 - d2)
    df = (stopband_edge - passband_edge) / sample_rate

    return int(math.ceil(D / df - fK * df + 1))


def kaiser_tap_estimate(passband_edge: float, stopband_edge: float,
                        passband_ripple: float, stopband_atten: float,
                        sample_rate: float) -> int:
    """Kaiser-window length for the tighter of the two deviations."""
    _check_band(passband_edge, stopband_edge, passband_ripple, stopband_atten, sample_rate)
    ripple_db = -20 * math.log10(min(passband_ripple, stopband_atten))
    width = 2 * (stopband_edge - passband_edge) / sample_rate
    numtaps, _ = kaiserord(ripple_db, width)
    return int(numtaps)


ESTIMATORS: Dict[str, TapEstimator] = {
    'herrmann': herrmann_tap_estimate,
    'kaiser': kaiser_tap_estimate,
}


def get_estimator(name: str) -> TapEstimator:
    try:
        return ESTIMATORS[name]
    except KeyError:
        raise MalformedInputError(
            f"Unknown tap estimator: {name!r} (choose from {', '.join(ESTIMATORS)})"
        ) from None
