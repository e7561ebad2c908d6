#!/usr/bin/env python3
"""
Example: compare Chebyshev and Kaiser tapering for the same CIC.
"""

import logging

from ciccomp import DesignParameters, design_compensator


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s'
    )

    print("Compensating a 4-stage CIC, R=16, 2.048 MHz in, 40 kHz passband")
    print()

    results = {}
    for window in ('chebwin', 'kaiser'):
        params = DesignParameters(
            stages=4,
            decimation=16,
            diff_delay=1,
            fs=2.048e6,
            passband=40e3,
            fir_order=47,
            window=window,
            window_atten_db=60.0,
        )
        results[window] = design_compensator(params)

    print(f"{'window':<10}{'DC (dB)':>10}{'flat dev (dB)':>16}{'at Fp (dB)':>12}{'stop (dB)':>12}")
    print("-" * 60)
    for window, design in results.items():
        v = design.verification
        print(f"{window:<10}{v.dc_gain_db:>10.4f}{v.passband_ripple_db:>16.4f}"
              f"{v.edge_gain_db:>12.2f}{v.stopband_peak_db:>12.1f}")


if __name__ == "__main__":
    main()
