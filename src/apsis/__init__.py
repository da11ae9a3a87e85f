"""
Apsis: Two-Body Orbital Mechanics

A Python package for converting between Newtonian state vectors and
Keplerian orbital elements, classifying conic orbits and propagating
them in time through Kepler's equation.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import KeplerianElements, KeplerianElements as KE
from .orbital_elements import (OrbitClassification, AngleKind, PositionAngle,
                               Orientation, EphemerisState)
from .orbit import Orbit, OrbitField, DeltaTimeAnomaly

# State conversions and classification
from .orbital_elements import (newtonian_to_kepler, kepler_to_newtonian,
                               classify_orbit, is_valid, is_closed, is_circular,
                               is_parabolic, is_hyperbolic, is_equatorial,
                               calculate_period, calculate_mean_radial_period,
                               calculate_radius)

# Anomaly conversions
from .anomaly import (CCoefficients, true_to_eccentric_anomaly,
                      eccentric_to_true_anomaly, eccentric_to_mean_anomaly,
                      mean_to_eccentric_anomaly, calculate_coefficients)

# Launch manoeuvres
from .manoeuvre import (LaunchVelocityInputs, LaunchVelocityResult,
                        launch_velocity_components)

# Commonly-used celestial bodies and constants
from .defaults import BodyParams, EARTH, MOON, MARS, SUN
from .defaults import (SPEED_LIGHT, EARTH_GRAVITATIONAL_PARAMETER,
                       EARTH_EQUATORIAL_RADIUS, EARTH_ROTATION_RATE)

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from apsis import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "KeplerianElements",
    "OrbitClassification",
    "AngleKind",
    "PositionAngle",
    "Orientation",
    "EphemerisState",
    "Orbit",
    "OrbitField",
    "DeltaTimeAnomaly",
    "CCoefficients",
    "LaunchVelocityInputs",
    "LaunchVelocityResult",
    "BodyParams",
    # Abbreviations
    "KE",
    # Functions
    "newtonian_to_kepler",
    "kepler_to_newtonian",
    "classify_orbit",
    "is_valid",
    "is_closed",
    "is_circular",
    "is_parabolic",
    "is_hyperbolic",
    "is_equatorial",
    "calculate_period",
    "calculate_mean_radial_period",
    "calculate_radius",
    "true_to_eccentric_anomaly",
    "eccentric_to_true_anomaly",
    "eccentric_to_mean_anomaly",
    "mean_to_eccentric_anomaly",
    "calculate_coefficients",
    "launch_velocity_components",
    # Constants
    "EARTH",
    "MOON",
    "MARS",
    "SUN",
    "SPEED_LIGHT",
    "EARTH_GRAVITATIONAL_PARAMETER",
    "EARTH_EQUATORIAL_RADIUS",
    "EARTH_ROTATION_RATE",
]
