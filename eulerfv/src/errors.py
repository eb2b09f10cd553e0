"""
Exception types raised by the solver core.

    InvalidStateError      - non-positive density or pressure
    ConfigurationError     - unsupported scheme choice or grid setup
    NumericDegeneracyError - vanishing denominator in a blend or weighting
"""

import numpy as np


class EulerFVError(Exception):
    """Base class for all solver faults."""


class InvalidStateError(EulerFVError, ValueError):
    """A state with non-positive density or pressure was encountered."""

    def __init__(self, quantity: str, value: float, index=None, where: str = ''):
        self.quantity = quantity
        self.value = value
        self.index = index
        self.where = where
        msg = f"Non-physical {quantity} = {value:.6e}"
        if index is not None:
            msg += f" at index {index}"
        if where:
            msg += f" ({where})"
        super().__init__(msg)


class ConfigurationError(EulerFVError, ValueError):
    """Invalid solver setup, detected before any stepping."""


class NumericDegeneracyError(EulerFVError, ArithmeticError):
    """Zero or non-finite denominator in a wave-speed blend or WENO weights."""


def check_physical(rho: np.ndarray, p: np.ndarray, where: str = '') -> None:
    """
    Raise InvalidStateError if any density or pressure is non-positive.

    NaNs count as non-physical, so the comparisons are written as "not > 0".
    """
    for name, values in (('density', rho), ('pressure', p)):
        values = np.asarray(values)
        bad = ~(values > 0)
        if np.any(bad):
            flat = int(np.argmax(bad.ravel()))
            if values.ndim > 1:
                index = tuple(int(k) for k in np.unravel_index(flat, values.shape))
            else:
                index = flat if values.ndim else None
            raise InvalidStateError(name, float(values.ravel()[flat]), index, where)
