#!/usr/bin/env python3
"""
Locate where the folded CIC mainlobe matters after decimation.

The first ~2P/R bins of the pre-decimation response fold back onto the
output band.  Reversing that region gives the image of the mainlobe; bins
where the forward response already dominates its own image are kept for
plotting.  Nothing downstream consumes the result numerically.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .cic import CICResponse, round_half_up


@dataclass(frozen=True)
class AliasingReport:
    indices: np.ndarray    # kept bin indices into the mainlobe region
    mask: np.ndarray       # boolean, one entry per mainlobe-region bin
    freq_hz: np.ndarray    # frequencies of the kept bins
    alias_db: np.ndarray   # flipped-mainlobe level at the kept bins

    @property
    def region_length(self) -> int:
        return len(self.mask)


def locate_mainlobe_aliasing(cic: CICResponse, decimation: int) -> AliasingReport:
    P = len(cic.magnitude_db)
    n = min(max(round_half_up(2 * P / decimation), 1), P)

    mainlobe = cic.magnitude_db[:n]
    flipped = mainlobe[::-1]

    mask = mainlobe >= flipped
    mask[0] = True   # DC/center bin is always kept
    indices = np.flatnonzero(mask)

    return AliasingReport(
        indices=indices,
        mask=mask,
        freq_hz=cic.freq_hz[indices],
        alias_db=flipped[indices],
    )
