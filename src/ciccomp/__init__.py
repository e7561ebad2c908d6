"""
ciccomp - FIR compensation filters for CIC decimators.
"""

from .errors import CompensatorError, PreconditionViolation, MalformedInputError
from .params import DesignParameters
from .cic import CICResponse, cic_magnitude, cic_response, to_db
from .aliasing import AliasingReport, locate_mainlobe_aliasing
from .inverse import InverseTarget, design_frequency_axis, inverse_cic_target
from .windows import chebyshev_window, kaiser_window, get_window
from .design import FIRDesign, design_fir
from .estimate import herrmann_tap_estimate, kaiser_tap_estimate, get_estimator
from .verify import CascadeVerification, cic_mainlobe, verify_cascade
from .pipeline import CompensatorDesign, design_compensator

__version__ = "0.1.0"
__all__ = [
    "CompensatorError",
    "PreconditionViolation",
    "MalformedInputError",
    "DesignParameters",
    "CICResponse",
    "cic_magnitude",
    "cic_response",
    "to_db",
    "AliasingReport",
    "locate_mainlobe_aliasing",
    "InverseTarget",
    "design_frequency_axis",
    "inverse_cic_target",
    "chebyshev_window",
    "kaiser_window",
    "get_window",
    "FIRDesign",
    "design_fir",
    "herrmann_tap_estimate",
    "kaiser_tap_estimate",
    "get_estimator",
    "CascadeVerification",
    "cic_mainlobe",
    "verify_cascade",
    "CompensatorDesign",
    "design_compensator",
]
