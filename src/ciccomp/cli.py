#!/usr/bin/env python3
"""
CIC compensation FIR designer – command line
============================================

Designs an FIR filter whose passband magnitude is the inverse of a CIC
decimator's mainlobe droop, then verifies the cascaded response.

CLI examples
------------
# Classic 3-stage, R=10 example (1 kHz in, 25 Hz passband, 32 taps):
python3 -m ciccomp.cli

# 5-stage CIC decimating 64x from 3.072 MHz, 63rd-order compensator:
python3 -m ciccomp.cli \\
    --stages 5 --decimation 64 --rate-in 3072000 \\
    --passband 18000 --order 62 --save

# Kaiser window instead of Dolph-Chebyshev, with plots:
python3 -m ciccomp.cli --window kaiser --window-atten 60 --plot

# Re-verify a saved design:
python3 -m ciccomp.cli --analyze cic_comp_M3_R10_N1_1000Hz_32tap.npz
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .estimate import ESTIMATORS, get_estimator
from .params import DesignParameters
from .pipeline import design_compensator
from .report import default_stem, load_design, plot_design, print_summary, save_design
from .verify import verify_cascade
from .windows import WINDOWS

log = logging.getLogger("ciccomp")

_DEFAULTS = DesignParameters()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ciccomp",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description=(
            "Frequency-sampling FIR designer that flattens the passband droop "
            "of a CIC decimation filter."
        ),
    )

    p.add_argument("--analyze", type=Path,
                   help="Re-verify a saved .npz design instead of designing a new one.")

    # ─── CIC ───
    g = p.add_argument_group("CIC")
    g.add_argument("--stages", "-M", type=int, default=_DEFAULTS.stages,
                   help="Number of cascaded CIC stages.")
    g.add_argument("--decimation", "-R", type=int, default=_DEFAULTS.decimation,
                   help="Decimation sample rate-change factor.")
    g.add_argument("--diff-delay", "-N", type=int, default=_DEFAULTS.diff_delay,
                   help="Differential delay of the comb stages.")
    g.add_argument("--rate-in", type=float, default=_DEFAULTS.fs,
                   help="CIC input sample rate before decimation (Hz).")
    g.add_argument("--passband", "-p", type=float, default=_DEFAULTS.passband,
                   help="Cascaded filters' -6 dB passband edge after decimation (Hz). "
                        "Must be below half the output sample rate.")

    # ─── FIR ───
    g = p.add_argument_group("Compensation FIR")
    g.add_argument("--order", type=int, default=_DEFAULTS.fir_order,
                   help="FIR order (one less than the number of taps).")
    g.add_argument("--window", choices=sorted(WINDOWS), default=_DEFAULTS.window,
                   help="Window applied to the frequency-sampled impulse response.")
    g.add_argument("--window-atten", type=float, default=_DEFAULTS.window_atten_db,
                   help="Window sidelobe attenuation (dB).")

    # ─── Grids / display ───
    g = p.add_argument_group("Analysis")
    g.add_argument("--freq-points", type=int, default=_DEFAULTS.num_freq_points,
                   help="Positive-frequency points used for spectra.")
    g.add_argument("--threshold", type=float, default=_DEFAULTS.threshold_db,
                   help="Minimum dB level in magnitude plots.")
    g.add_argument("--estimator", choices=sorted(ESTIMATORS), default="herrmann",
                   help="Length estimate for an equivalent conventional lowpass FIR.")
    g.add_argument("--tolerance", type=float, default=1.0,
                   help="Allowed cascaded flat-band deviation from 0 dB (dB).")

    # ─── Output ───
    g = p.add_argument_group("Output")
    g.add_argument("--save", action="store_true",
                   help="Write coefficients as .txt, .npy and .npz.")
    g.add_argument("--basename",
                   help="Filename stem for --save. Default describes the CIC, "
                        "e.g. 'cic_comp_M3_R10_N1_1000Hz_32tap'.")
    g.add_argument("--plot", action="store_true",
                   help="Show magnitude response plots (requires matplotlib).")
    g.add_argument("--no-analysis", action="store_true",
                   help="Skip the design report, only log the verification result.")

    # ─── Misc ───
    g = p.add_argument_group("Misc")
    g.add_argument("--debug", action="store_true",
                   help="Enable DEBUG-level logging for extra detail.")
    g.add_argument("--log-file", type=str,
                   help="Write all log output to this file in addition to the console.")
    return p


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
        handlers.append(logging.FileHandler(log_file, mode='w'))
    else:
        log_format = "%(levelname)s %(message)s"
    logging.basicConfig(
        handlers=handlers,
        level=logging.DEBUG if debug else logging.INFO,
        format=log_format,
        force=True,
    )


def analyze_saved_design(path: Path, tolerance: float) -> bool:
    taps, params = load_design(path)
    v = verify_cascade(taps, params)
    log.info("%d taps for M=%d, R=%d, N=%d, Fs=%g Hz, Fp=%g Hz",
             len(taps), params.stages, params.decimation, params.diff_delay,
             params.fs, params.passband)
    log.info("DC %.4f dB, flat-band deviation %.4f dB, %.2f dB at Fp, stopband peak %.1f dB",
             v.dc_gain_db, v.passband_ripple_db, v.edge_gain_db, v.stopband_peak_db)
    ok = v.is_flat(tolerance)
    if ok:
        log.info("✓ Cascade is flat within ±%g dB", tolerance)
    else:
        log.error("✗ Cascade deviates %.3f dB (> %g dB)", v.passband_ripple_db, tolerance)
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    a = build_parser().parse_args(argv)
    setup_logging(a.debug, a.log_file)

    if a.analyze:
        return 0 if analyze_saved_design(a.analyze, a.tolerance) else 1

    params = DesignParameters(
        stages=a.stages,
        decimation=a.decimation,
        diff_delay=a.diff_delay,
        fs=a.rate_in,
        passband=a.passband,
        fir_order=a.order,
        num_freq_points=a.freq_points,
        threshold_db=a.threshold,
        window=a.window,
        window_atten_db=a.window_atten,
    )
    design = design_compensator(params, tap_estimator=get_estimator(a.estimator))

    if not a.no_analysis:
        print_summary(design)

    if a.save:
        save_design(design, a.basename or default_stem(params))

    if a.plot:
        plot_design(design)

    v = design.verification
    if not v.is_flat(a.tolerance):
        log.warning("Cascade deviates %.3f dB from 0 dB below %g Hz (tolerance %g dB)",
                    v.passband_ripple_db, v.flat_band_edge_hz, a.tolerance)
        return 1
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except Exception as e:
        logging.error("Fatal: %s", e)
        logging.debug("Traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
