"""
Tapering windows, addressed by name.

Every window is a pure function ``window(length, attenuation_db)`` returning
``length`` symmetric weights with the requested sidelobe attenuation.
"""

from typing import Callable, Dict

import numpy as np
from scipy.signal import kaiser_beta
from scipy.signal.windows import chebwin, kaiser

from .errors import MalformedInputError

WindowFunc = Callable[[int, float], np.ndarray]


def chebyshev_window(length: int, attenuation_db: float) -> np.ndarray:
    """Dolph-Chebyshev window, equiripple sidelobes at -attenuation_db."""
    return chebwin(length, at=attenuation_db, sym=True)


def kaiser_window(length: int, attenuation_db: float) -> np.ndarray:
    """Kaiser window with beta chosen for the requested stopband attenuation."""
    return kaiser(length, kaiser_beta(attenuation_db), sym=True)


WINDOWS: Dict[str, WindowFunc] = {
    'chebwin': chebyshev_window,
    'kaiser': kaiser_window,
}


def get_window(name: str) -> WindowFunc:
    try:
        return WINDOWS[name]
    except KeyError:
        raise MalformedInputError(
            f"Unsupported window type: {name!r} (choose from {', '.join(WINDOWS)})"
        ) from None
