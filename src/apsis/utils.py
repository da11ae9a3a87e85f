"""
Utility functions for the Apsis package.
"""

import warnings
from typing import Type

import numpy as np

from .config import config

TWO_PI = 2.0 * np.pi


def wrap_to_two_pi(angle: float) -> float:
    """Wrap an angle [rad] into [0, 2π)."""
    wrapped = float(np.mod(angle, TWO_PI))
    # np.mod can return exactly 2π for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def wrap_to_pi(angle: float) -> float:
    """Wrap an angle [rad] into (-π, π]."""
    wrapped = wrap_to_two_pi(angle)
    if wrapped > np.pi:
        wrapped -= TWO_PI
    return wrapped


def reflect_angle(angle: float, negative: bool) -> float:
    """Return 2π - angle, wrapped into [0, 2π), when the disambiguating quantity is negative."""
    return wrap_to_two_pi(TWO_PI - angle) if negative else angle


def as_vector3(vector, name: str = "vector") -> np.ndarray:
    """
    Convert array-like input to a float 3-vector.

    Raises (or warns, see ``config.STRICT_VALIDATION``) if the input does
    not have exactly three components.
    """
    arr = np.asarray(vector, dtype=float).reshape(-1)
    if arr.shape != (3,):
        validation_error(f"{name} must have 3 components, got shape {arr.shape}")
    return arr


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from apsis.utils import validation_error
    >>> from apsis import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)
