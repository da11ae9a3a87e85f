'''Anomaly conversions for two-body orbits

Conversions between the true, eccentric (hyperbolic / parabolic) and mean
anomalies of a conic orbit. Every function branches on eccentricity:
elliptical (e < 1), parabolic (e == 1) and hyperbolic (e > 1). For a
non-elliptic orbit the "eccentric anomaly" argument or result is the
hyperbolic anomaly H or the parabolic anomaly D = tan(ν/2).

All angles are in radians.'''

import warnings
from typing import NamedTuple

import numpy as np
from scipy.optimize import newton

from .config import config
from .utils import wrap_to_two_pi


class CCoefficients(NamedTuple):
    """Universal variable coefficients C2(ψ), C3(ψ)"""
    c2: float
    c3: float


# ========== TRUE <-> ECCENTRIC ==========
def true_to_eccentric_anomaly(true_anomaly: float, eccentricity: float) -> float:
    """
    Compute the eccentric anomaly from the true anomaly.

    Returns the parabolic anomaly D = tan(ν/2) for a parabolic orbit and the
    hyperbolic anomaly H for a hyperbolic orbit.

    Parameters
    ----------
    true_anomaly : float
        True anomaly [rad]
    eccentricity : float
        Orbital eccentricity (>= 0)

    Returns
    -------
    float
        Eccentric anomaly in (-π, π] (elliptical), D or H otherwise

    Notes
    -----
    Inputs are not guarded: a hyperbolic true anomaly outside the
    asymptotes (1 + e cos ν <= 0) produces a meaningless or NaN result.
    """
    nu = float(true_anomaly)
    e = float(eccentricity)
    if e < 1.0:
        # Elliptical
        cos_nu = np.cos(nu)
        sin_nu = np.sin(nu)
        denominator = 1.0 + e * cos_nu
        sin_E = sin_nu * np.sqrt(1.0 - e**2) / denominator
        cos_E = (e + cos_nu) / denominator
        return float(np.arctan2(sin_E, cos_E))
    elif e == 1.0:
        # Parabolic
        return float(np.tan(0.5 * nu))
    else:
        # Hyperbolic
        return float(np.arcsinh(np.sin(nu) * np.sqrt(e**2 - 1.0)
                                / (1.0 + e * np.cos(nu))))


def eccentric_to_true_anomaly(anomaly: float, eccentricity: float) -> float:
    """
    Compute the true anomaly from the eccentric (hyperbolic / parabolic) anomaly.

    The quadrant follows the sign of the anomaly, so this is the exact
    inverse of :func:`true_to_eccentric_anomaly`.

    Parameters
    ----------
    anomaly : float
        Eccentric anomaly E, parabolic anomaly D or hyperbolic anomaly H
    eccentricity : float
        Orbital eccentricity (>= 0)

    Returns
    -------
    float
        True anomaly: in [0, 2π) for an elliptical orbit, in (-π, π)
        for parabolic and hyperbolic trajectories
    """
    x = float(anomaly)
    e = float(eccentricity)
    if e < 1.0:
        # Elliptical
        cos_E = np.cos(x)
        nu = np.arctan2(np.sqrt(1.0 - e**2) * np.sin(x), cos_E - e)
        return wrap_to_two_pi(nu)
    elif e == 1.0:
        # Parabolic
        return float(2.0 * np.arctan(x))
    else:
        # Hyperbolic, e*cosh(H) - 1 > 0 so only the numerator signs matter
        cosh_H = np.cosh(x)
        return float(np.arctan2(np.sqrt(e**2 - 1.0) * np.sinh(x), e - cosh_H))


# ========== ECCENTRIC <-> MEAN ==========
def eccentric_to_mean_anomaly(anomaly: float, eccentricity: float) -> float:
    """
    Kepler's equation: mean anomaly from the eccentric / hyperbolic /
    parabolic anomaly.

    - elliptical: M = E - e sin E
    - hyperbolic: M = e sinh H - H
    - parabolic:  M = D + D³/3 (Barker's equation)
    """
    x = float(anomaly)
    e = float(eccentricity)
    # Elliptical
    if e < 1.0:
        return float(x - e * np.sin(x))
    # Hyperbolic
    elif e > 1.0:
        return float(e * np.sinh(x) - x)
    # Parabolic
    else:
        return x + x**3 / 3.0


def mean_to_eccentric_anomaly(mean_anomaly: float, eccentricity: float) -> float:
    """
    Invert Kepler's equation for the eccentric / hyperbolic / parabolic anomaly.

    Elliptical and hyperbolic orbits are solved by Newton iteration with
    ``config.KEPLER_TOLERANCE`` and ``config.KEPLER_MAX_ITERATIONS``;
    the parabolic case uses the closed-form solution of Barker's cubic.

    Parameters
    ----------
    mean_anomaly : float
        Mean anomaly [rad]
    eccentricity : float
        Orbital eccentricity (>= 0)

    Returns
    -------
    float
        Anomaly satisfying ``eccentric_to_mean_anomaly(result, e) == M``

    Warns
    -----
    RuntimeWarning
        If the Newton iteration does not converge; the last iterate is returned.
    """
    M = float(mean_anomaly)
    e = float(eccentricity)

    if e == 1.0:
        # Cardano's solution of D³ + 3D - 3M = 0
        A = 1.5 * M
        B = np.cbrt(A + np.sqrt(A**2 + 1.0))
        return float(B - 1.0 / B)

    if e < 1.0:
        def kepler(E):
            return E - e * np.sin(E) - M

        def kepler_prime(E):
            return 1.0 - e * np.cos(E)

        # Vallado starting guess, exact root when sin(M) == 0
        guess = M + e * np.sign(np.sin(M))
    else:
        def kepler(H):
            return e * np.sinh(H) - H - M

        def kepler_prime(H):
            return e * np.cosh(H) - 1.0

        guess = np.arcsinh(M / e)

    root, result = newton(kepler, guess, fprime=kepler_prime,
                          tol=config.KEPLER_TOLERANCE,
                          maxiter=config.KEPLER_MAX_ITERATIONS,
                          full_output=True, disp=False)
    if not result.converged:
        warnings.warn(
            f"Kepler equation did not converge for M={M}, e={e} after "
            f"{result.iterations} iterations ({result.flag})",
            RuntimeWarning, stacklevel=2)
    return float(root)


# ========== UNIVERSAL VARIABLES ==========
def calculate_coefficients(psi: float) -> CCoefficients:
    """
    Compute the universal variable coefficients C2 and C3.

    Parameters
    ----------
    psi : float
        Universal variable argument ψ (positive for ellipses, negative
        for hyperbolas)

    Returns
    -------
    CCoefficients
        (c2, c3) at the given argument; a truncated Taylor series is
        used for |ψ| <= 1e-6
    """
    psi = float(psi)
    if psi > 1.0e-6:
        sqrt_psi = np.sqrt(psi)
        return CCoefficients(c2=float((1.0 - np.cos(sqrt_psi)) / psi),
                             c3=float((sqrt_psi - np.sin(sqrt_psi)) / sqrt_psi**3))
    elif psi < -1.0e-6:
        sqrt_psi = np.sqrt(-psi)
        return CCoefficients(c2=float((1.0 - np.cosh(sqrt_psi)) / psi),
                             c3=float((np.sinh(sqrt_psi) - sqrt_psi) / sqrt_psi**3))
    else:
        # Taylor series truncated after the linear term
        return CCoefficients(c2=0.5 - psi / 24.0, c3=1.0 / 6.0 - psi / 120.0)
