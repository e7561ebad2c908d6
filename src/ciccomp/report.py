#!/usr/bin/env python3
"""
Reporting, plotting and persistence of a compensator design.

Nothing here feeds back into the numbers; it only consumes the arrays held
by a ``CompensatorDesign``.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np

from .cic import round_half_up, to_db
from .params import DesignParameters
from .pipeline import CompensatorDesign

log = logging.getLogger(__name__)


# ───────────────────────── text summary ────────────────────────── #

def format_summary(design: CompensatorDesign) -> List[str]:
    p = design.params
    v = design.verification
    lines = [
        "=" * 60,
        "CIC COMPENSATION FILTER",
        "=" * 60,
        "",
        "CIC Configuration",
        "-" * 20,
        f"CIC filter order      : {p.stages} stages",
        f"Differential delay N  : {p.diff_delay}",
        f"Input sample rate     : {p.fs:g} Hz",
        f"Decimation factor R   : {p.decimation}",
        f"Output sample rate    : {p.fs_out:g} Hz",
        f"-6 dB passband width  : {p.passband:g} Hz",
        "",
        "Compensation FIR",
        "-" * 20,
        f"Taps                  : {p.num_taps}",
        f"Window                : {p.window} ({p.window_atten_db:g} dB)",
        f"Design points         : {len(design.target.freq)} "
        f"({design.target.covered} inside passband)",
    ]
    if design.equivalent_taps is not None:
        lines.append(f"[Equivalent tapped-delay line FIR lowpass filter requires "
                     f"approximately {design.equivalent_taps} taps]")
    lines += [
        "",
        "Cascaded Response",
        "-" * 20,
        f"DC gain               : {v.dc_gain_db:+.4f} dB",
        f"Flat-band deviation   : {v.passband_ripple_db:.4f} dB "
        f"(0 .. {v.flat_band_edge_hz:g} Hz)",
        f"Gain at Fp            : {v.edge_gain_db:+.2f} dB (expect about -6 dB)",
        f"Stopband peak         : {v.stopband_peak_db:.1f} dB "
        f"(>= {v.stopband_edge_hz:g} Hz)",
        "",
        "FIR coefficients",
        "-" * 20,
    ]
    lines += [f"  {i:3d}: {c:+.12e}" for i, c in enumerate(design.taps)]
    lines.append("=" * 60)
    return lines


def print_summary(design: CompensatorDesign) -> None:
    print("\n".join(format_summary(design)))


# ───────────────────────── plots ────────────────────────── #

def plot_design(design: CompensatorDesign, show: bool = True) -> list:
    """
    Draw the four design figures and return them.

    1. CIC response before decimation, with the dominant alias in red.
    2. Desired (inverse-CIC) vs. actual FIR response, linear.
    3. FIR response in dB.
    4. Cascade, FIR and CIC overlaid, full output band and zoom on Fp.
    """
    import matplotlib.pyplot as plt

    p = design.params
    cic = design.cic
    v = design.verification
    floor = p.threshold_db
    nyq_out = p.nyquist_out
    figs = []

    fig1, ax = plt.subplots(figsize=(10, 6))
    ax.plot(cic.freq_hz, to_db(cic.magnitude, floor), '-k')
    al = design.aliasing
    ax.plot(al.freq_hz, np.maximum(al.alias_db, floor), '-r',
            label='Most significant (not total) aliasing after decimation')
    ax.set_xlim(0, p.fs / 2)
    ax.set_ylim(floor, 5)
    ax.set_xlabel('Hz')
    ax.set_ylabel('dB')
    ax.set_title('CIC mag resp. before decimation')
    ax.grid(True, alpha=0.3)
    ax.legend()
    figs.append(fig1)

    fig2, ax = plt.subplots(figsize=(10, 6))
    ax.plot(design.target.freq_hz, design.target.gain, '-bs', markersize=2,
            label='Desired FIR resp.')
    ax.plot(v.freq_hz, v.fir_magnitude, '-r', label='Actual FIR resp.')
    ax.set_xlim(0, nyq_out)
    ax.set_ylim(0, 1.2 * design.target.gain.max())
    ax.set_xlabel('Hz')
    ax.set_ylabel('Linear')
    ax.set_title('Desired FIR resp. = Blue, Actual FIR resp. = Red')
    ax.grid(True, alpha=0.3)
    ax.legend()
    figs.append(fig2)

    fir_db = to_db(v.fir_magnitude, floor)
    fig3, ax = plt.subplots(figsize=(10, 6))
    ax.plot(v.freq_hz, fir_db)
    ax.set_xlim(0, nyq_out)
    ax.set_ylim(floor, fir_db.max() + 5)
    ax.set_xlabel('Hz')
    ax.set_ylabel('dB')
    ax.set_title('FIR Comp. Filter mag. resp.')
    ax.grid(True, alpha=0.3)
    figs.append(fig3)

    # CIC bins that fall inside the output band
    n_cic = min(round_half_up(len(cic.freq_hz) / p.decimation) + 1, len(cic.freq_hz))
    fig4, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 10))
    for ax, xlim, ylim in (
        (ax1, (0, nyq_out), (floor, fir_db.max() + 10)),
        (ax2, (0, 1.2 * p.passband), (-6 - p.diff_delay, fir_db.max() + 2)),
    ):
        ax.plot(v.freq_hz, to_db(v.cascaded, floor), '-k', label='Cascaded filter')
        ax.plot(cic.freq_hz[:n_cic], to_db(cic.magnitude[:n_cic], floor), '-r', label='CIC')
        ax.plot(v.freq_hz, fir_db, '-b', label='Comp. filter')
        ax.set_xlim(*xlim)
        ax.set_ylim(*ylim)
        ax.set_xlabel('Hz')
        ax.set_ylabel('dB')
        ax.set_title('Black = cascaded filter, Blue = comp. filter, Red = CIC')
        ax.grid(True, alpha=0.3)
    ax1.legend()
    fig4.tight_layout()
    figs.append(fig4)

    if show:
        plt.show()
    return figs


# ───────────────────────── persistence ────────────────────────── #

def default_stem(params: DesignParameters) -> str:
    return (f"cic_comp_M{params.stages}_R{params.decimation}_N{params.diff_delay}"
            f"_{int(params.fs)}Hz_{params.num_taps}tap")


def save_design(design: CompensatorDesign, stem: Union[str, Path]) -> Tuple[Path, Path, Path]:
    """Write ``<stem>.txt``, ``<stem>.npy`` and ``<stem>.npz`` (taps + parameters)."""
    stem = str(stem)
    txt = Path(stem + ".txt")
    npy = Path(stem + ".npy")
    npz = Path(stem + ".npz")

    np.savetxt(txt, design.taps, fmt="%.18e")
    np.save(npy, design.taps)
    np.savez(npz,
             taps=design.taps,
             params=json.dumps(design.params.to_dict()),
             verified=design.verification.is_flat())

    log.info("Saved %s, %s and %s", txt, npy, npz)
    return txt, npy, npz


def load_design(npz_path: Union[str, Path]) -> Tuple[np.ndarray, DesignParameters]:
    """Read back taps and parameters written by ``save_design``."""
    log.info("Loading filter from %s...", npz_path)
    with np.load(npz_path) as data:
        taps = np.array(data['taps'], dtype=np.float64)
        params = DesignParameters.from_dict(json.loads(str(data['params'])))
    return taps, params
