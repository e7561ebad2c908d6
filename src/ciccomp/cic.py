#!/usr/bin/env python3
"""
CIC magnitude response model
============================

Closed-form magnitude of an M-stage, rate-change-R, differential-delay-N
cascaded-integrator-comb filter:

    |H(f)| = | sin(pi f R N) / sin(pi f) | ** M

with f in cycles/sample at the *pre-decimation* rate.  The removable
singularity at f = 0 is replaced by its limit (R N) ** M.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .params import DesignParameters


@dataclass(frozen=True)
class CICResponse:
    """Normalized CIC response on the pre-decimation grid [0, 0.5)."""
    freq: np.ndarray          # cycles/sample at Fs
    freq_hz: np.ndarray
    magnitude: np.ndarray     # linear, max == 1
    magnitude_db: np.ndarray  # 20*log10(magnitude), not clamped


def round_half_up(x: float) -> int:
    """Round .5 away from zero for the non-negative counts used here."""
    return int(np.floor(x + 0.5))


def cic_magnitude(freq, stages: int, decimation: int, diff_delay: int) -> np.ndarray:
    """
    Unnormalized CIC magnitude at arbitrary normalized frequencies.

    Parameters
    ----------
    freq : array_like
        Frequencies in cycles/sample at the CIC input rate.
    stages, decimation, diff_delay : int
        M, R and N.

    Returns
    -------
    np.ndarray
        |H(f)|, with the DC entries set to (R*N)**M.
    """
    f = np.atleast_1d(np.asarray(freq, dtype=np.float64))
    RN = decimation * diff_delay
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = np.sin(np.pi * f * RN) / np.sin(np.pi * f)
    ratio[f == 0] = RN
    return np.abs(ratio) ** stages


def to_db(magnitude, floor_db: Optional[float] = None) -> np.ndarray:
    """
    Linear magnitude to decibels.

    ``floor_db`` clamps the result for display; zeros map to -inf otherwise.
    """
    with np.errstate(divide='ignore'):
        db = 20 * np.log10(np.abs(np.asarray(magnitude, dtype=np.float64)))
    if floor_db is not None:
        db = np.maximum(db, floor_db)
    return db


def cic_response(params: DesignParameters) -> CICResponse:
    """Evaluate the normalized CIC response at ``num_freq_points`` bins of [0, Fs/2)."""
    P = params.num_freq_points
    freq = np.arange(P) / (2 * P)
    mag = cic_magnitude(freq, params.stages, params.decimation, params.diff_delay)
    mag = mag / mag.max()   # DC is the global maximum
    return CICResponse(
        freq=freq,
        freq_hz=freq * params.fs,
        magnitude=mag,
        magnitude_db=to_db(mag),
    )
