"""
Exceptions raised by the compensation filter designer.
"""


class CompensatorError(Exception):
    """Base class for all ciccomp errors."""


class PreconditionViolation(CompensatorError):
    """Passband edge does not fit below the decimated Nyquist rate."""


class MalformedInputError(CompensatorError, ValueError):
    """Inputs that can only come from a programming mistake."""
