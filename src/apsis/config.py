"""
Global Configuration for Apsis Package
======================================

This module provides package-wide configuration settings that users can modify
to control the Kepler equation solver, orbit classification thresholds and
validation behavior.

Examples
--------
View current configuration:

>>> import apsis
>>> print(apsis.config)

Modify settings:

>>> apsis.config.KEPLER_TOLERANCE = 1e-10  # Looser Newton convergence
>>> apsis.config.STRICT_VALIDATION = False  # Warn instead of raising

Reset to defaults:

>>> apsis.config.reset()

Temporarily modify settings:

>>> with apsis.temp_config(CIRCULAR_TOLERANCE=1e-9):
...     # Near-circular orbits classified as circular for this block only
...     apsis.classify_orbit(elements)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class ApsisConfig:
    """
    Global configuration for Apsis package.

    Attributes
    ----------
    KEPLER_TOLERANCE : float
        Newton step size [rad] below which Kepler's equation is solved.
        Default: 1e-12
    KEPLER_MAX_ITERATIONS : int
        Maximum Newton iterations when inverting Kepler's equation.
        Default: 64
    CIRCULAR_TOLERANCE : float
        Eccentricity within this distance of 0 (or of 1) is snapped to
        circular (or parabolic) by the tolerance-aware classifier.
        Default: 0.0 (exact comparison)
    EQUATORIAL_TOLERANCE : float
        Inclination within this distance of 0 is snapped to equatorial by
        the tolerance-aware classifier.
        Default: 0.0 (exact comparison)
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    """

    # Kepler equation solver
    KEPLER_TOLERANCE: float = 1e-12
    KEPLER_MAX_ITERATIONS: int = 64

    # Classification thresholds
    CIRCULAR_TOLERANCE: float = 0.0
    EQUATORIAL_TOLERANCE: float = 0.0

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import apsis
        >>> apsis.config.KEPLER_MAX_ITERATIONS = 8  # Modify
        >>> apsis.config.reset()  # Back to defaults
        >>> apsis.config.KEPLER_MAX_ITERATIONS
        64
        """
        defaults = ApsisConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["ApsisConfig:"]
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_TOLERANCE = {self.KEPLER_TOLERANCE}")
        lines.append(f"    KEPLER_MAX_ITERATIONS = {self.KEPLER_MAX_ITERATIONS}")
        lines.append("  Classification:")
        lines.append(f"    CIRCULAR_TOLERANCE = {self.CIRCULAR_TOLERANCE}")
        lines.append(f"    EQUATORIAL_TOLERANCE = {self.EQUATORIAL_TOLERANCE}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        return "\n".join(lines)


# Global configuration instance
config = ApsisConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import apsis
    >>> with apsis.temp_config(STRICT_VALIDATION=False):
    ...     # Validation problems become warnings
    ...     apsis.KeplerianElements(eccentricity=-0.1).validate()
    >>> # Original config restored here
    >>> apsis.config.STRICT_VALIDATION
    True

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"ApsisConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
