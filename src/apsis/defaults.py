"""
Default Physical Constants and Body Parameters
==============================================

Central body parameters for two-body calculations, in SI units
(m, s, m³/s²). Gravitational parameters are never read implicitly by the
orbit functions; pass ``EARTH.mu`` (or any other value) explicitly.

Examples
--------
>>> from apsis import Orbit, EARTH
>>> orbit = Orbit.from_newtonian(r, v, EARTH.mu)
"""
from dataclasses import dataclass
from typing import Optional

# Speed of light in vacuum [m/s]
SPEED_LIGHT = 299792458.0

# Earth gravitational parameter [m³/s²]
EARTH_GRAVITATIONAL_PARAMETER = 3.986004418e14

# WGS84 equatorial radius [m]
EARTH_EQUATORIAL_RADIUS = 6378137.0

# Earth rotation rate [rad/s]
EARTH_ROTATION_RATE = 7.2921150e-5


@dataclass(frozen=True)
class BodyParams:
    """
    Immutable parameters for a central body.

    Attributes
    ----------
    mu : float
        Gravitational parameter [m³/s²]
    radius : float
        Equatorial radius [m]
    rotation_rate : float, optional
        Angular rotation rate [rad/s]
    name : str, optional
        Body identifier
    """
    mu: float
    radius: float
    rotation_rate: Optional[float] = None
    name: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if self.mu <= 0:
            raise ValueError(f"Gravitational parameter must be positive, got {self.mu}")
        if self.radius <= 0:
            raise ValueError(f"Radius must be positive, got {self.radius}")

    def circular_speed(self, altitude: float) -> float:
        """Speed [m/s] of a circular orbit at the given altitude [m]"""
        return (self.mu / (self.radius + altitude)) ** 0.5


"""
Predefined bodies
Values taken from Vallado, Fundamentals of Astrodynamics, Fifth Edition, 2022, Appendix D
(Earth values from WGS84), converted to SI units
"""
EARTH = BodyParams(
    mu=EARTH_GRAVITATIONAL_PARAMETER,
    radius=EARTH_EQUATORIAL_RADIUS,
    rotation_rate=EARTH_ROTATION_RATE,
    name='Earth'
)

MOON = BodyParams(
    mu=4.902799e12,
    radius=1738.0e3,
    rotation_rate=2.661700e-6,
    name='Moon'
)

MARS = BodyParams(
    mu=4.305e13,
    radius=3397.2e3,
    rotation_rate=7.0882181e-5,
    name='Mars'
)

SUN = BodyParams(
    mu=1.32712428e20,
    radius=6.96e8,
    rotation_rate=None,
    name='Sun'
)
