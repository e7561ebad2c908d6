#!/usr/bin/env python3
"""
Frequency-sampling FIR designer
===============================

Turns a piecewise-linear magnitude specification into a real, linear-phase
FIR filter of the requested length, then tapers it with a window:

1. interpolate the magnitude samples onto a dense uniform grid,
2. attach linear phase and inverse-transform (``scipy.signal.firwin2``),
3. keep ``num_taps`` samples and multiply by the window.

Single closed-form synthesis, no optimization loop.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.signal import firwin2

from .errors import MalformedInputError

log = logging.getLogger(__name__)

MIN_INTERP_POINTS = 512


@dataclass(frozen=True)
class FIRDesign:
    taps: np.ndarray      # read-only, len == num_taps
    window: np.ndarray
    freq: np.ndarray
    gain: np.ndarray
    nfreqs: int

    @property
    def num_taps(self) -> int:
        return len(self.taps)

    @property
    def dc_gain(self) -> float:
        return float(np.sum(self.taps))

    def is_symmetric(self, atol: float = 1e-12) -> bool:
        return bool(np.allclose(self.taps, self.taps[::-1], rtol=0, atol=atol))


def interp_grid_size(num_taps: int) -> int:
    """Smallest 2**k + 1 that is at least 513 and larger than ``num_taps``."""
    n = max(num_taps, MIN_INTERP_POINTS)
    return 1 + (1 << int(np.ceil(np.log2(n))))


def _check_inputs(num_taps: int, freq: np.ndarray, gain: np.ndarray,
                  window: np.ndarray) -> None:
    if int(num_taps) != num_taps or num_taps < 1:
        raise MalformedInputError(f"num_taps must be a positive integer, got {num_taps!r}")
    if freq.ndim != 1 or gain.ndim != 1:
        raise MalformedInputError("Frequency and magnitude vectors must be one-dimensional")
    if len(freq) != len(gain):
        raise MalformedInputError(
            f"Frequency axis has {len(freq)} points but magnitude vector has {len(gain)}"
        )
    if len(freq) <= num_taps:
        raise MalformedInputError(
            f"Need more frequency points than taps ({len(freq)} <= {num_taps})"
        )
    if freq[0] != 0 or freq[-1] != 1:
        raise MalformedInputError(
            f"Frequency axis must run from 0 to 1 (Nyquist), got {freq[0]}..{freq[-1]}"
        )
    if np.any(np.diff(freq) <= 0):
        raise MalformedInputError("Frequency axis must be strictly increasing")
    if np.any(gain < 0) or not np.all(np.isfinite(gain)):
        raise MalformedInputError("Magnitude vector must be finite and non-negative")
    if len(window) != num_taps:
        raise MalformedInputError(
            f"Window has {len(window)} weights for {num_taps} taps"
        )
    if num_taps % 2 == 0 and gain[-1] != 0:
        raise MalformedInputError(
            "An even-length (type II) filter must have zero gain at Nyquist"
        )


def design_fir(num_taps: int, freq, gain, window,
               nfreqs: Optional[int] = None) -> FIRDesign:
    """
    Frequency-sampling FIR design.

    Parameters
    ----------
    num_taps : int
        Filter length L (order + 1).
    freq : array_like
        Frequency axis, 0..1 with 1 at Nyquist, strictly increasing.
    gain : array_like
        Desired linear magnitude at each ``freq`` point.
    window : array_like
        L weights applied to the synthesized impulse response.
    nfreqs : int, optional
        Size of the interpolation grid; defaults to ``interp_grid_size``.

    Returns
    -------
    FIRDesign
    """
    freq = np.asarray(freq, dtype=np.float64)
    gain = np.asarray(gain, dtype=np.float64)
    window = np.asarray(window, dtype=np.float64)
    _check_inputs(num_taps, freq, gain, window)

    if nfreqs is None:
        nfreqs = interp_grid_size(num_taps)
    elif nfreqs <= num_taps:
        raise MalformedInputError(f"nfreqs ({nfreqs}) must exceed num_taps ({num_taps})")

    log.debug("firwin2: %d taps, %d spec points, %d-point grid",
              num_taps, len(freq), nfreqs)
    h = firwin2(num_taps, freq, gain, nfreqs=nfreqs, window=None)
    taps = h * window
    taps.setflags(write=False)

    return FIRDesign(taps=taps, window=window, freq=freq, gain=gain, nfreqs=nfreqs)
