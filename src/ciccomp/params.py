#!/usr/bin/env python3
"""
Design parameters for a CIC compensation filter
===============================================

One immutable parameter set describes a single design run.  Defaults are the
classic 3-stage, R=10 example: 1 kHz in, 100 Hz out, 25 Hz passband, 32 taps.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any

from .errors import MalformedInputError, PreconditionViolation


# ───────────────────────── Data structures ────────────────────────── #

@dataclass(frozen=True)
class DesignParameters:
    """Complete parameter set of a compensator design."""
    stages: int = 3           # M, number of cascaded CIC stages
    decimation: int = 10      # R, sample rate-change factor
    diff_delay: int = 1       # N, differential delay
    fs: float = 1000.0        # CIC input sample rate (Hz)
    passband: float = 25.0    # Fp, -6 dB point of the cascade (Hz)
    fir_order: int = 31       # taps - 1
    num_freq_points: int = 512
    threshold_db: float = -80.0   # minimum dB level shown in plots
    window: str = 'chebwin'
    window_atten_db: float = 50.0

    # ── derived values ──

    @property
    def num_taps(self) -> int:
        return self.fir_order + 1

    @property
    def fs_out(self) -> float:
        return self.fs / self.decimation

    @property
    def nyquist_out(self) -> float:
        return self.fs / (2 * self.decimation)

    @property
    def num_design_points(self) -> int:
        """Frequency samples handed to the FIR designer (4x the tap count)."""
        return 4 * self.num_taps

    @property
    def dc_gain(self) -> float:
        """Unnormalized CIC gain at zero Hz, (R*N)^M."""
        return float(self.decimation * self.diff_delay) ** self.stages

    # ── validation ──

    def validate(self) -> None:
        """
        Raise before any numeric work if the parameter set is unusable.

        Scalar sanity problems are MalformedInputError; a passband that does
        not fit below half the output sample rate is a PreconditionViolation.
        """
        for name in ('stages', 'decimation', 'diff_delay'):
            value = getattr(self, name)
            if int(value) != value or value <= 0:
                raise MalformedInputError(f"{name} must be a positive integer, got {value!r}")
        if not self.fs > 0:
            raise MalformedInputError(f"Input sample rate must be positive, got {self.fs!r}")
        if int(self.fir_order) != self.fir_order or self.fir_order < 0:
            raise MalformedInputError(f"FIR order must be a non-negative integer, got {self.fir_order!r}")
        if self.num_freq_points < 1:
            raise MalformedInputError(f"num_freq_points must be >= 1, got {self.num_freq_points!r}")
        if not self.window_atten_db > 0:
            raise MalformedInputError(f"Window attenuation must be positive, got {self.window_atten_db!r} dB")

        if not 0 < self.passband < 0.5 * self.fs / self.decimation:
            raise PreconditionViolation(
                f"Fp = {self.passband} Hz passband width is too large! "
                f"Fp must be positive and less than one half the final "
                f"Fs/R = {self.fs_out} Hz sample rate."
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'DesignParameters':
        return cls(**d)
