'''Keplerian orbital elements for the two-body problem
KeplerianElements, OrbitClassification and the Newtonian <-> Keplerian
state conversions (Vallado, Fundamentals of Astrodynamics and Applications,
4th Edition, Algorithms 9 and 10)'''

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

import numpy as np

from .config import config
from .defaults import SPEED_LIGHT
from .utils import TWO_PI, as_vector3, reflect_angle, validation_error, wrap_to_two_pi

UNIT_Z = np.array([0.0, 0.0, 1.0])


# define an enumerated list of orbit classes
class OrbitClassification(Enum):
    INVALID = 'invalid'
    CIRCULAR_EQUATORIAL = 'circular_equatorial'
    CIRCULAR_INCLINED = 'circular_inclined'
    ELLIPTICAL_EQUATORIAL = 'elliptical_equatorial'
    ELLIPTICAL_INCLINED = 'elliptical_inclined'
    PARABOLIC = 'parabolic'
    HYPERBOLIC = 'hyperbolic'

    @property
    def is_circular(self) -> bool:
        return self in (OrbitClassification.CIRCULAR_EQUATORIAL,
                        OrbitClassification.CIRCULAR_INCLINED)

    @property
    def is_elliptical(self) -> bool:
        return self in (OrbitClassification.ELLIPTICAL_EQUATORIAL,
                        OrbitClassification.ELLIPTICAL_INCLINED)


# angles that locate the orbiting body or its periapsis
class AngleKind(Enum):
    TRUE_ANOMALY = 'true_anomaly'
    ARGUMENT_LATITUDE = 'argument_latitude'
    TRUE_LONGITUDE = 'true_longitude'
    TRUE_LONGITUDE_OF_PERIAPSIS = 'true_longitude_of_periapsis'
    ARGUMENT_PERIGEE = 'argument_perigee'


@dataclass(frozen=True)
class PositionAngle:
    """
    An angle tagged with the element it stands for.

    Which angle locates the body depends on the orbit class: true longitude
    for circular equatorial orbits, argument of latitude for circular
    inclined orbits and true anomaly otherwise.
    """
    kind: AngleKind
    value: float


class Orientation(NamedTuple):
    """Node, periapsis and position angles [rad] used to rotate out of the perifocal frame"""
    node: float
    perigee: float
    anomaly: float


@dataclass(frozen=True)
class EphemerisState:
    """
    Newtonian state of a body relative to the central body.

    Attributes
    ----------
    pos : np.ndarray
        Position [m]
    vel : np.ndarray
        Velocity [m/s]
    light_time : float
        Geometric light time, distance / c [s]
    """
    pos: np.ndarray
    vel: np.ndarray
    light_time: float = 0.0

    @classmethod
    def zero(cls):
        """Sentinel state returned for invalid elements"""
        return cls(np.zeros(3), np.zeros(3), 0.0)

    def is_zero(self) -> bool:
        return (not np.any(self.pos)) and (not np.any(self.vel))

    def isclose(self, other, rtol=None, atol=None) -> bool:
        """Compare position and velocity within tolerance"""
        rtol = config.EQUALITY_RTOL if rtol is None else rtol
        atol = config.EQUALITY_ATOL if atol is None else atol
        return (np.allclose(self.pos, other.pos, rtol=rtol, atol=atol) and
                np.allclose(self.vel, other.vel, rtol=rtol, atol=atol))

    def __repr__(self):
        return (f"EphemerisState(pos={self.pos.tolist()}, vel={self.vel.tolist()}, "
                f"light_time={self.light_time})")


#define basic orbital element class
@dataclass(frozen=True)
class KeplerianElements:
    """
    Keplerian orbital elements of a two-body conic orbit.

    Units are SI throughout: lengths in m, angles in rad and the
    gravitational parameter in m³/s². The all-zero instance is the
    sentinel for an undefined orbit and classifies as INVALID.

    Node and argument of perigee are meaningless for equatorial orbits and
    the true anomaly is meaningless for circular orbits; the substitute
    angles (true longitude of periapsis, argument of latitude, true
    longitude) take over. Use :attr:`position_angle` and
    :meth:`orientation` rather than reading the raw fields.

    Retrograde equatorial orbits (i = π) still classify as inclined. Their
    node is 0, and the argument of perigee and argument of latitude are
    measured from the reference axis in the direction of motion.

    Attributes
    ----------
    semi_parameter : float
        Size of the conic section p [m], finite for parabolic orbits
    semi_major_axis : float
        a [m]: positive for ellipses, +inf for parabolas, negative for hyperbolas
    eccentricity : float
        e >= 0
    inclination : float
        Angle from the pole to the angular momentum vector, [0, π]
    node : float
        Right ascension of the ascending node, [0, 2π)
    argument_perigee : float
        Angle from the ascending node to periapsis, [0, 2π)
    true_anomaly : float
        Angle from periapsis to the body, [0, 2π)
    true_longitude_of_periapsis : float
        Angle from the reference axis to periapsis (elliptical equatorial)
    argument_latitude : float
        Angle from the ascending node to the body (circular inclined)
    true_longitude : float
        Angle from the reference axis to the body (circular equatorial)
    gravitational_parameter : float
        μ of the central body [m³/s²]
    """
    semi_parameter: float = 0.0
    semi_major_axis: float = 0.0
    eccentricity: float = 0.0
    inclination: float = 0.0
    node: float = 0.0
    argument_perigee: float = 0.0
    true_anomaly: float = 0.0
    true_longitude_of_periapsis: float = 0.0
    argument_latitude: float = 0.0
    true_longitude: float = 0.0
    gravitational_parameter: float = 0.0

    # ========== VALIDATION ==========
    def validate(self):
        """
        Check the elements describe a physical conic.

        Failures go through :func:`apsis.utils.validation_error`, so they
        raise ``ValueError`` or warn depending on ``config.STRICT_VALIDATION``.

        Returns
        -------
        KeplerianElements
            self, to allow chaining
        """
        values = dataclasses.astuple(self)
        if np.any(np.isnan(values)):
            validation_error("Elements contain NaN")
        if self.eccentricity < 0:
            validation_error(f"Eccentricity must be non-negative, got {self.eccentricity}")
        if self.inclination < 0 or self.inclination > np.pi:
            validation_error(f"Inclination out of range [0, π]: {self.inclination}")
        if self.gravitational_parameter <= 0:
            validation_error(f"Gravitational parameter must be positive, "
                             f"got {self.gravitational_parameter}")
        if self.semi_parameter <= 0 or not np.isfinite(self.semi_parameter):
            validation_error(f"Semi-parameter must be positive and finite, "
                             f"got {self.semi_parameter}")
        if self.eccentricity < 1 and self.semi_major_axis <= 0:
            validation_error(f"Elliptic orbit (e={self.eccentricity}) "
                             f"requires positive semi-major axis, got a={self.semi_major_axis}")
        if self.eccentricity > 1 and self.semi_major_axis >= 0:
            validation_error(f"Hyperbolic orbit (e={self.eccentricity}) "
                             f"requires negative semi-major axis, got a={self.semi_major_axis}")
        return self

    @classmethod
    def validated(cls, **kwargs):
        """Construct elements and run :meth:`validate` on them"""
        return cls(**kwargs).validate()

    # ========== FACTORY METHODS ==========
    @classmethod
    def from_newtonian(cls, position, velocity, gravitational_parameter):
        """Shortcut for :func:`newtonian_to_kepler`"""
        return newtonian_to_kepler(position, velocity, gravitational_parameter)

    @classmethod
    def circular(cls, radius, gravitational_parameter, inclination=0.0,
                 node=0.0, angle=0.0):
        """
        Elements of a circular orbit.

        Parameters
        ----------
        radius : float
            Orbit radius [m]
        gravitational_parameter : float
            μ [m³/s²]
        inclination, node : float, optional
            Orbit plane orientation [rad]
        angle : float, optional
            Position in the orbit: true longitude if equatorial, argument
            of latitude otherwise [rad]
        """
        elements = cls(semi_parameter=radius, semi_major_axis=radius,
                       inclination=inclination, node=node,
                       gravitational_parameter=gravitational_parameter)
        return elements.with_position_angle(angle)

    # ========== CLASSIFICATION ==========
    @property
    def classification(self) -> OrbitClassification:
        return classify_orbit(self)

    @property
    def position_angle(self) -> Optional[PositionAngle]:
        """The angle that locates the body for this orbit class (None if invalid)"""
        classification = self.classification
        if classification == OrbitClassification.INVALID:
            return None
        if classification == OrbitClassification.CIRCULAR_EQUATORIAL:
            return PositionAngle(AngleKind.TRUE_LONGITUDE, self.true_longitude)
        if classification == OrbitClassification.CIRCULAR_INCLINED:
            return PositionAngle(AngleKind.ARGUMENT_LATITUDE, self.argument_latitude)
        return PositionAngle(AngleKind.TRUE_ANOMALY, self.true_anomaly)

    @property
    def periapsis_angle(self) -> Optional[PositionAngle]:
        """The angle that locates periapsis (None for circular or invalid orbits)"""
        classification = self.classification
        if classification == OrbitClassification.INVALID or classification.is_circular:
            return None
        if (classification == OrbitClassification.ELLIPTICAL_EQUATORIAL
                or abs(self.inclination) <= config.EQUATORIAL_TOLERANCE):
            return PositionAngle(AngleKind.TRUE_LONGITUDE_OF_PERIAPSIS,
                                 self.true_longitude_of_periapsis)
        return PositionAngle(AngleKind.ARGUMENT_PERIGEE, self.argument_perigee)

    def with_position_angle(self, value: float):
        """Return a copy with the active position angle replaced"""
        angle = self.position_angle
        kind = AngleKind.TRUE_ANOMALY if angle is None else angle.kind
        return dataclasses.replace(self, **{kind.value: float(value)})

    def orientation(self) -> Orientation:
        """Angles (node, perigee, anomaly) selected by orbit class"""
        classification = self.classification
        if classification == OrbitClassification.CIRCULAR_EQUATORIAL:
            return Orientation(0.0, 0.0, self.true_longitude)
        elif classification == OrbitClassification.CIRCULAR_INCLINED:
            return Orientation(self.node, 0.0, self.argument_latitude)
        elif classification == OrbitClassification.ELLIPTICAL_EQUATORIAL:
            return Orientation(0.0, self.true_longitude_of_periapsis, self.true_anomaly)
        elif abs(self.inclination) <= config.EQUATORIAL_TOLERANCE:
            # open equatorial orbits have no node either
            return Orientation(0.0, self.true_longitude_of_periapsis, self.true_anomaly)
        else:
            return Orientation(self.node, self.argument_perigee, self.true_anomaly)

    # ========== ORBITAL PROPERTIES ==========
    def period(self) -> float:
        return calculate_period(self)

    def mean_radial_period(self) -> float:
        return calculate_mean_radial_period(self)

    def radius(self) -> float:
        return calculate_radius(self)

    def specific_energy(self) -> float:
        """Specific orbital energy -μ/2a [J/kg], zero for a parabola"""
        if is_parabolic(self):
            return 0.0
        return -self.gravitational_parameter / (2.0 * self.semi_major_axis)

    def specific_angular_momentum(self) -> float:
        """Specific angular momentum sqrt(μp) [m²/s]"""
        return float(np.sqrt(self.gravitational_parameter * self.semi_parameter))

    def mean_motion(self) -> float:
        """Mean motion [rad/s], the reciprocal of the mean radial period"""
        return 1.0 / calculate_mean_radial_period(self)

    # ========== CONVERSIONS ==========
    def to_newtonian(self) -> EphemerisState:
        """Shortcut for :func:`kepler_to_newtonian`"""
        return kepler_to_newtonian(self)

    def isclose(self, other, rtol=None, atol=None) -> bool:
        """Element-wise comparison within tolerance"""
        if not isinstance(other, KeplerianElements):
            return False
        rtol = config.EQUALITY_RTOL if rtol is None else rtol
        atol = config.EQUALITY_ATOL if atol is None else atol
        return bool(np.allclose(dataclasses.astuple(self), dataclasses.astuple(other),
                                rtol=rtol, atol=atol, equal_nan=True))

    def __str__(self):
        #Human-readable representation
        return (f"Keplerian Elements ({self.classification.value}):\n"
                f"  p     = {self.semi_parameter:16.4f} m\n"
                f"  a     = {self.semi_major_axis:16.4f} m\n"
                f"  e     = {self.eccentricity:16.6f}\n"
                f"  i     = {np.degrees(self.inclination):16.4f}°\n"
                f"  RAAN  = {np.degrees(self.node):16.4f}°\n"
                f"  ω     = {np.degrees(self.argument_perigee):16.4f}°\n"
                f"  ν     = {np.degrees(self.true_anomaly):16.4f}°\n"
                f"  ϖ     = {np.degrees(self.true_longitude_of_periapsis):16.4f}°\n"
                f"  u     = {np.degrees(self.argument_latitude):16.4f}°\n"
                f"  λ     = {np.degrees(self.true_longitude):16.4f}°\n"
                f"  μ     = {self.gravitational_parameter:16.6e} m³/s²")


# ========== PREDICATES ==========
def is_valid(elements: KeplerianElements) -> bool:
    """
    True if the elements describe an orbit.

    The all-zero sentinel (a == 0), negative eccentricity, NaN and a
    non-positive semi-major axis on a closed or parabolic orbit are
    invalid. Hyperbolic orbits carry a negative semi-major axis.
    """
    a = elements.semi_major_axis
    e = elements.eccentricity
    if np.isnan(a) or np.isnan(e) or np.isnan(elements.inclination):
        return False
    if a == 0.0 or e < 0.0:
        return False
    return a > 0.0 or e > 1.0


def is_closed(elements: KeplerianElements) -> bool:
    return elements.eccentricity < 1.0


def is_circular(elements: KeplerianElements) -> bool:
    return elements.eccentricity == 0.0


def is_parabolic(elements: KeplerianElements) -> bool:
    return elements.eccentricity == 1.0


def is_hyperbolic(elements: KeplerianElements) -> bool:
    return elements.eccentricity > 1.0


def is_equatorial(elements: KeplerianElements) -> bool:
    """True if the orbit lies exactly in the reference plane (prograde or retrograde)"""
    return elements.inclination == 0.0 or elements.inclination == np.pi


def classify_orbit(elements: KeplerianElements,
                   circular_tol: Optional[float] = None,
                   equatorial_tol: Optional[float] = None) -> OrbitClassification:
    """
    Classify an orbit from its eccentricity and inclination.

    With zero tolerances (the default, unless changed in ``config``) the
    comparisons against e = 0, e = 1 and i = 0 are exact, so an orbit with
    e = 1e-15 is elliptical, not circular.

    Parameters
    ----------
    elements : KeplerianElements
    circular_tol : float, optional
        Eccentricities within this distance of 0 or 1 are classified as
        circular or parabolic. Defaults to ``config.CIRCULAR_TOLERANCE``
    equatorial_tol : float, optional
        Inclinations within this distance of 0 are classified as
        equatorial. Defaults to ``config.EQUATORIAL_TOLERANCE``

    Returns
    -------
    OrbitClassification
    """
    if not is_valid(elements):
        return OrbitClassification.INVALID

    e_tol = config.CIRCULAR_TOLERANCE if circular_tol is None else circular_tol
    i_tol = config.EQUATORIAL_TOLERANCE if equatorial_tol is None else equatorial_tol
    e = elements.eccentricity
    equatorial = abs(elements.inclination) <= i_tol

    if e - 1.0 > e_tol:
        return OrbitClassification.HYPERBOLIC
    elif abs(e - 1.0) <= e_tol:
        return OrbitClassification.PARABOLIC
    elif e > e_tol:
        if equatorial:
            return OrbitClassification.ELLIPTICAL_EQUATORIAL
        return OrbitClassification.ELLIPTICAL_INCLINED
    else:
        if equatorial:
            return OrbitClassification.CIRCULAR_EQUATORIAL
        return OrbitClassification.CIRCULAR_INCLINED


# ========== SCALAR QUANTITIES ==========
def calculate_period(elements: KeplerianElements) -> float:
    """Orbital period [s], +inf for invalid or open orbits"""
    if (is_valid(elements) and is_closed(elements)
            and elements.gravitational_parameter > 0.0):
        return float(TWO_PI * np.sqrt(elements.semi_major_axis**3
                                      / elements.gravitational_parameter))
    return np.inf


def calculate_mean_radial_period(elements: KeplerianElements) -> float:
    """
    Time [s] for the mean anomaly to advance one radian.

    - closed:     sqrt(a³/μ)
    - hyperbolic: sqrt(-a³/μ)
    - parabolic:  sqrt(p³/μ)/2, the reciprocal of the parabolic mean
      motion 2·sqrt(μ/p³) in Barker's equation

    +inf for invalid elements or a non-positive μ.
    """
    mu = elements.gravitational_parameter
    if not is_valid(elements) or mu <= 0.0:
        return np.inf
    # Elliptical
    if is_closed(elements):
        return float(np.sqrt(elements.semi_major_axis**3 / mu))
    # Hyperbolic
    elif is_hyperbolic(elements):
        return float(np.sqrt(abs(elements.semi_major_axis)**3 / mu))
    # Parabolic
    else:
        return float(0.5 * np.sqrt(elements.semi_parameter**3 / mu))


def calculate_radius(elements: KeplerianElements) -> float:
    """Instantaneous distance [m] from the central body"""
    return float(elements.semi_parameter
                 / (1.0 + elements.eccentricity * np.cos(elements.true_anomaly)))


# ========== STATE CONVERSIONS ==========
def _acos(x: float) -> float:
    # rounding can push a cosine just outside [-1, 1]
    return float(np.arccos(np.clip(x, -1.0, 1.0)))


def newtonian_to_kepler(position, velocity, gravitational_parameter: float) -> KeplerianElements:
    """
    Compute Keplerian elements from a position and velocity state vector.

    Based upon Algorithm 9 of Vallado, Fundamentals of Astrodynamics and
    Applications, 4th Edition.

    Parameters
    ----------
    position : array-like
        Position (x, y, z) [m] in the body centred frame
    velocity : array-like
        Velocity (x, y, z) [m/s] in the body centred frame
    gravitational_parameter : float
        μ of the central body [m³/s²]

    Returns
    -------
    KeplerianElements
        All angles in [0, 2π). The all-zero sentinel (classified INVALID)
        if position or velocity is zero.
    """
    rvec = as_vector3(position, "position")
    vvec = as_vector3(velocity, "velocity")
    mu = float(gravitational_parameter)

    r = float(np.linalg.norm(rvec))
    speed_sq = float(np.dot(vvec, vvec))
    # Invalid orbit
    if r == 0.0 or speed_sq == 0.0:
        return KeplerianElements()

    hvec = np.cross(rvec, vvec)
    h = float(np.linalg.norm(hvec))
    nvec = np.cross(UNIT_Z, hvec)
    n = float(np.linalg.norm(nvec))
    rdotv = float(np.dot(rvec, vvec))
    evec = ((speed_sq - mu / r) * rvec - rdotv * vvec) / mu
    energy = 0.5 * speed_sq - mu / r

    e = float(np.linalg.norm(evec))
    if e == 1.0:
        # Parabola
        p = h * h / mu
        a = np.inf
    else:
        a = -mu / (2.0 * energy)
        p = a * (1.0 - e * e)

    i = _acos(hvec[2] / h)

    node = argument_perigee = argument_latitude = 0.0
    if n > 0.0:
        node = reflect_angle(_acos(nvec[0] / n), nvec[1] < 0.0)
        if e > 0.0:
            argument_perigee = reflect_angle(_acos(np.dot(nvec, evec) / (e * n)),
                                             evec[2] < 0.0)
        # Special case parameter - circular inclined
        argument_latitude = reflect_angle(_acos(np.dot(nvec, rvec) / (n * r)),
                                          rvec[2] < 0.0)

    true_anomaly = true_longitude_of_periapsis = 0.0
    if e > 0.0:
        true_anomaly = reflect_angle(_acos(np.dot(evec, rvec) / (e * r)), rdotv < 0.0)
        # Special case parameter - elliptical equatorial
        true_longitude_of_periapsis = reflect_angle(_acos(evec[0] / e), evec[1] < 0.0)

    # Special case parameter - circular equatorial
    true_longitude = reflect_angle(_acos(rvec[0] / r), rvec[1] < 0.0)

    if n == 0.0 and hvec[2] < 0.0:
        # Retrograde equatorial (i = π): no node line, so the node is taken
        # along x and angles are measured from it in the direction of motion
        argument_latitude = wrap_to_two_pi(TWO_PI - true_longitude)
        if e > 0.0:
            argument_perigee = wrap_to_two_pi(TWO_PI - true_longitude_of_periapsis)

    return KeplerianElements(
        semi_parameter=float(p),
        semi_major_axis=float(a),
        eccentricity=e,
        inclination=i,
        node=node,
        argument_perigee=argument_perigee,
        true_anomaly=true_anomaly,
        true_longitude_of_periapsis=true_longitude_of_periapsis,
        argument_latitude=argument_latitude,
        true_longitude=true_longitude,
        gravitational_parameter=mu,
    )


def _rotation_z(angle):
    # rotation about z-axis
    return np.array([
        [np.cos(angle), -np.sin(angle), 0],
        [np.sin(angle),  np.cos(angle), 0],
        [0,              0,             1]
    ])


def _rotation_x(angle):
    # rotation about x-axis
    return np.array([
        [1,  0,              0            ],
        [0,  np.cos(angle), -np.sin(angle)],
        [0,  np.sin(angle),  np.cos(angle)]
    ])


def kepler_to_newtonian(elements: KeplerianElements) -> EphemerisState:
    """
    Convert Keplerian elements to a position and velocity state vector.

    Based upon Algorithm 10 of Vallado, Fundamentals of Astrodynamics and
    Applications, 4th Edition. The light time is purely geometric
    (distance / c, no aberration).

    Returns
    -------
    EphemerisState
        The zero state if the elements are invalid
    """
    # Invalid elements
    if not is_valid(elements):
        return EphemerisState.zero()

    node, perigee, anomaly = elements.orientation()
    e = elements.eccentricity
    p = elements.semi_parameter

    cos_nu = np.cos(anomaly)
    sin_nu = np.sin(anomaly)
    distance = p / (1.0 + e * cos_nu)
    coeff = np.sqrt(elements.gravitational_parameter / p)

    # state within the orbital plane
    r_pqw = np.array([distance * cos_nu, distance * sin_nu, 0.0])
    v_pqw = np.array([-coeff * sin_nu, coeff * (e + cos_nu), 0.0])

    # rotate from perifocal frame to the body centred frame
    DCM = _rotation_z(node) @ _rotation_x(elements.inclination) @ _rotation_z(perigee)
    return EphemerisState(pos=DCM @ r_pqw, vel=DCM @ v_pqw,
                          light_time=float(distance / SPEED_LIGHT))
