'''Two-body orbit state
Orbit class definition: a Keplerian element set plus cached derived
quantities, propagated in time through Kepler's equation'''

import copy
import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from .anomaly import (eccentric_to_mean_anomaly, eccentric_to_true_anomaly,
                      mean_to_eccentric_anomaly, true_to_eccentric_anomaly)
from .orbital_elements import (EphemerisState, KeplerianElements,
                               OrbitClassification, calculate_mean_radial_period,
                               calculate_radius, classify_orbit, is_closed,
                               kepler_to_newtonian, newtonian_to_kepler)
from .utils import TWO_PI, wrap_to_pi, wrap_to_two_pi


@dataclass(frozen=True)
class DeltaTimeAnomaly:
    """
    Anomalies reached after a time step.

    Attributes
    ----------
    mean_anomaly : float
        Mean anomaly [rad], in [0, 2π) for closed orbits and signed for open ones
    eccentric_anomaly : float
        Eccentric, hyperbolic or parabolic anomaly [rad]. For circular
        orbits this is the advanced position angle.
    number_revolutions : int
        Whole revolutions completed (periapsis passages for elliptical
        orbits, always 0 for open orbits)
    true_anomaly : float
        Position angle reached, in [0, 2π): true anomaly, or the argument of
        latitude / true longitude for circular orbits [rad]
    """
    mean_anomaly: float = 0.0
    eccentric_anomaly: float = 0.0
    number_revolutions: int = 0
    true_anomaly: float = 0.0


# enumerated list of readable Orbit fields
class OrbitField(Enum):
    SEMI_PARAMETER = 'semi_parameter'
    SEMI_MAJOR_AXIS = 'semi_major_axis'
    ECCENTRICITY = 'eccentricity'
    INCLINATION = 'inclination'
    NODE = 'node'
    ARGUMENT_PERIGEE = 'argument_perigee'
    TRUE_ANOMALY = 'true_anomaly'
    TRUE_LONGITUDE_OF_PERIAPSIS = 'true_longitude_of_periapsis'
    ARGUMENT_LATITUDE = 'argument_latitude'
    TRUE_LONGITUDE = 'true_longitude'
    GRAVITATIONAL_PARAMETER = 'gravitational_parameter'
    CLASSIFICATION = 'classification'
    PERIOD = 'period'
    ECCENTRIC_ANOMALY = 'eccentric_anomaly'
    MEAN_RADIAL_PERIOD = 'mean_radial_period'
    RADIUS = 'radius'
    MEAN_ANOMALY = 'mean_anomaly'


_ELEMENT_FIELDS = frozenset(f.name for f in dataclasses.fields(KeplerianElements))


class Orbit:
    """
    Mutable two-body orbit state.

    Wraps a :class:`KeplerianElements` set together with quantities derived
    from it (classification, eccentric and mean anomaly, mean radial period,
    period and radius). The derived quantities are computed on construction
    and kept consistent by :meth:`update`, the only method that changes
    state.

    An INVALID orbit is absorbing: :meth:`update` does nothing,
    :meth:`anomaly_from_delta_time` returns zeros and
    :meth:`delta_time_from_true_anomaly` returns +inf.

    Parameters
    ----------
    elements : KeplerianElements
        Initial element set

    Examples
    --------
    >>> from apsis import Orbit, EARTH
    >>> orbit = Orbit.from_newtonian([7000e3, 0, 0], [0, 7546, 0], EARTH.mu)
    >>> orbit.update(600.0)
    >>> orbit.state().pos
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, elements: KeplerianElements):
        if not isinstance(elements, KeplerianElements):
            raise TypeError(f"elements must be KeplerianElements, got {type(elements)}")
        e = elements.eccentricity
        self._elements = elements
        self._classification = classify_orbit(elements)
        self._eccentric_anomaly = true_to_eccentric_anomaly(elements.true_anomaly, e)
        if is_closed(elements):
            # closed orbits keep E and M in [0, 2π), the range update() produces
            self._eccentric_anomaly = wrap_to_two_pi(self._eccentric_anomaly)
        self._mean_radial_period = calculate_mean_radial_period(elements)
        self._period = (TWO_PI * self._mean_radial_period
                        if is_closed(elements) else np.inf)
        self._radius = calculate_radius(elements)
        self._mean_anomaly = eccentric_to_mean_anomaly(self._eccentric_anomaly, e)

    @classmethod
    def from_keplerian_elements(cls, elements: KeplerianElements):
        """Create an orbit from Keplerian elements"""
        return cls(elements)

    @classmethod
    def from_newtonian(cls, position, velocity, gravitational_parameter: float):
        """
        Create an orbit from a Newtonian state.

        Parameters
        ----------
        position : array-like
            (x, y, z) [m]
        velocity : array-like
            (x, y, z) [m/s]
        gravitational_parameter : float
            Central body μ [m³/s²]
        """
        return cls(newtonian_to_kepler(position, velocity, gravitational_parameter))

    # ========== PROPERTY ACCESS ==========
    @property
    def elements(self) -> KeplerianElements:
        return self._elements

    @property
    def classification(self) -> OrbitClassification:
        return self._classification

    @property
    def eccentric_anomaly(self) -> float:
        """
        Eccentric (hyperbolic / parabolic) anomaly [rad].

        In [0, 2π) for closed orbits; signed for open ones, negative on the
        inbound leg.
        """
        return self._eccentric_anomaly

    @property
    def mean_radial_period(self) -> float:
        """Time [s] to sweep one radian of mean anomaly"""
        return self._mean_radial_period

    @property
    def period(self) -> float:
        """Orbital period [s], +inf for open orbits"""
        return self._period

    @property
    def radius(self) -> float:
        """Current distance from the central body [m]"""
        return self._radius

    @property
    def mean_anomaly(self) -> float:
        """Mean anomaly [rad], in [0, 2π) for closed orbits and signed for open ones"""
        return self._mean_anomaly

    def get(self, field: Union[OrbitField, str]):
        """
        Read a field by enumerated name.

        Parameters
        ----------
        field : OrbitField or str
            Field, or its string value (e.g. 'period')

        Raises
        ------
        KeyError
            If a string does not name a field
        TypeError
            If field is neither OrbitField nor str
        """
        if isinstance(field, str):
            try:
                field = OrbitField(field)
            except ValueError:
                raise KeyError(f"Unknown orbit field '{field}'. "
                               f"Use: {[f.value for f in OrbitField]}") from None
        elif not isinstance(field, OrbitField):
            raise TypeError(f"field must be OrbitField or str, got {type(field)}")

        if field.value in _ELEMENT_FIELDS:
            return getattr(self._elements, field.value)
        return getattr(self, field.value)

    def as_dict(self) -> dict:
        """All fields keyed by their string value"""
        return {f.value: self.get(f) for f in OrbitField}

    # ========== PROPAGATION ==========
    def anomaly_from_delta_time(self, delta_time: float) -> DeltaTimeAnomaly:
        """
        Compute the anomalies reached after ``delta_time`` seconds.

        Does not change the orbit.

        Parameters
        ----------
        delta_time : float
            Time step [s], may be negative

        Returns
        -------
        DeltaTimeAnomaly
            All zeros for an INVALID orbit
        """
        dt = float(delta_time)
        e = self._elements.eccentricity

        # Orbital elements are invalid
        if self._classification == OrbitClassification.INVALID:
            return DeltaTimeAnomaly()

        # Circular orbit, constant angular rate
        if self._classification.is_circular:
            fraction = np.mod(dt, self._period) / self._period
            angle = wrap_to_two_pi(self._elements.position_angle.value + TWO_PI * fraction)
            return DeltaTimeAnomaly(
                mean_anomaly=angle,
                eccentric_anomaly=angle,
                number_revolutions=int(np.floor(dt / self._period)),
                true_anomaly=angle
            )

        mean_anomaly = self._mean_anomaly + dt / self._mean_radial_period

        # Elliptical orbit
        if self._classification.is_elliptical:
            revolutions = (int(np.floor(mean_anomaly / TWO_PI))
                           - int(np.floor(self._mean_anomaly / TWO_PI)))
            mean_anomaly = wrap_to_two_pi(mean_anomaly)
            eccentric_anomaly = mean_to_eccentric_anomaly(mean_anomaly, e)
            return DeltaTimeAnomaly(
                mean_anomaly=mean_anomaly,
                eccentric_anomaly=eccentric_anomaly,
                number_revolutions=revolutions,
                true_anomaly=eccentric_to_true_anomaly(eccentric_anomaly, e)
            )

        # Hyperbolic or parabolic trajectory
        eccentric_anomaly = mean_to_eccentric_anomaly(mean_anomaly, e)
        return DeltaTimeAnomaly(
            mean_anomaly=mean_anomaly,
            eccentric_anomaly=eccentric_anomaly,
            number_revolutions=0,
            true_anomaly=wrap_to_two_pi(eccentric_to_true_anomaly(eccentric_anomaly, e))
        )

    def update(self, delta_time: float):
        """
        Advance the orbit by ``delta_time`` seconds in place.

        Circular orbits advance their position angle (true longitude or
        argument of latitude); other orbits advance the true anomaly and
        every cached quantity with it. An INVALID orbit is left unchanged.
        """
        if self._classification == OrbitClassification.INVALID:
            return

        anomaly = self.anomaly_from_delta_time(delta_time)

        if self._classification.is_circular:
            self._elements = self._elements.with_position_angle(anomaly.true_anomaly)
            return

        elements = dataclasses.replace(self._elements, true_anomaly=anomaly.true_anomaly)
        radius = calculate_radius(elements)
        # commit together so the cache never mixes epochs
        self._elements = elements
        self._mean_anomaly = anomaly.mean_anomaly
        self._eccentric_anomaly = anomaly.eccentric_anomaly
        self._radius = radius

    def propagated(self, delta_time: float):
        """Return a copy advanced by ``delta_time`` seconds, leaving self unchanged"""
        result = copy.copy(self)
        result.update(delta_time)
        return result

    def delta_time_from_true_anomaly(self, true_anomaly: float) -> float:
        """
        Time [s] to reach the given position angle.

        - circular: mean radial period times the angle, measured from
          angle zero (the reference axis or the node) rather than from the
          current position
        - elliptical: may be negative (past) and may span several
          revolutions when the angle differs from the current true
          anomaly by more than 2π
        - hyperbolic: the angle is taken in (-π, π], +inf outside the
          asymptotes (-π + acos(1/e), π - acos(1/e))
        - parabolic: the angle is taken in (-π, π], direct conversion

        Open orbits pass each angle at most once, so 2π - 1 and -1 give
        the same time.

        Does not change the orbit.

        Returns
        -------
        float
            +inf for an INVALID orbit or an unreachable anomaly
        """
        nu = float(true_anomaly)
        e = self._elements.eccentricity

        # Orbital elements are invalid
        if self._classification == OrbitClassification.INVALID:
            return np.inf

        # Circular orbit
        if self._classification.is_circular:
            return self._mean_radial_period * nu

        # Elliptical orbit
        if self._classification.is_elliptical:
            return self._mean_radial_period * (
                self._unwrapped_mean_anomaly(nu)
                - self._unwrapped_mean_anomaly(self._elements.true_anomaly))

        # Hyperbolic or parabolic trajectory
        nu = wrap_to_pi(nu)
        if self._classification == OrbitClassification.HYPERBOLIC:
            critical_angle = np.arccos(1.0 / e)
            if nu > np.pi - critical_angle or nu < -np.pi + critical_angle:
                # never reached on this trajectory
                return np.inf

        anomaly_end = true_to_eccentric_anomaly(nu, e)
        mean_anomaly_end = eccentric_to_mean_anomaly(anomaly_end, e)
        return self._mean_radial_period * (mean_anomaly_end - self._mean_anomaly)

    def _unwrapped_mean_anomaly(self, true_anomaly: float) -> float:
        """
        Mean anomaly continuous in the true anomaly across revolutions.

        The true anomaly is split into a whole number of revolutions and a
        remainder in [-π, π); the remainder goes through Kepler's equation.
        """
        e = self._elements.eccentricity
        revolutions = np.floor((true_anomaly + np.pi) / TWO_PI)
        remainder = true_anomaly - TWO_PI * revolutions
        mean_anomaly = eccentric_to_mean_anomaly(
            true_to_eccentric_anomaly(remainder, e), e)
        return float(TWO_PI * revolutions + mean_anomaly)

    # ========== UTILITY METHODS ==========
    def state(self) -> EphemerisState:
        """Current Newtonian state (zero state if INVALID)"""
        return kepler_to_newtonian(self._elements)

    def summary(self):
        """Print a summary of the orbit state"""
        print(f"Orbit Classification: {self._classification.value}")
        print(f"  a = {self._elements.semi_major_axis:.6e} m, "
              f"p = {self._elements.semi_parameter:.6e} m, "
              f"e = {self._elements.eccentricity:.8f}")
        print(f"  i = {np.degrees(self._elements.inclination):.6f}°")
        angle = self._elements.position_angle
        if angle is not None:
            print(f"  {angle.kind.value} = {np.degrees(angle.value):.6f}°")
        print(f"  Period = {self._period:.6e} s, "
              f"Mean radial period = {self._mean_radial_period:.6e} s")
        print(f"  Radius = {self._radius:.6e} m")
        print(f"  Eccentric anomaly = {self._eccentric_anomaly:.8f} rad, "
              f"Mean anomaly = {self._mean_anomaly:.8f} rad")

    def __repr__(self):
        return (f"Orbit({self._classification.value}, "
                f"a={self._elements.semi_major_axis:.6e} m, "
                f"e={self._elements.eccentricity:.6f}, "
                f"r={self._radius:.6e} m)")

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of Orbits.
        """
        @staticmethod
        def update(orbits, delta_time):
            """Advance every orbit in place by the same time step"""
            for o in orbits:
                o.update(delta_time)

        @staticmethod
        def states(orbits):
            """Current Newtonian states"""
            return [o.state() for o in orbits]

        @staticmethod
        def get(orbits, field):
            """Read one field from every orbit"""
            return np.array([o.get(field) for o in orbits])

        @staticmethod
        def to_dataframe(orbits, index=None):
            """
            Convert a list of Orbits to a pandas DataFrame.

            Parameters
            ----------
            orbits : list of Orbit
            index : array-like, optional
                Index for the DataFrame (e.g., time values).
                If None, uses integer index.

            Returns
            -------
            pd.DataFrame
                One column per OrbitField (classification as its string value)

            Raises
            ------
            ValueError
                If index length doesn't match number of orbits
            """
            # pandas isn't needed unless this function is used
            try:
                import pandas as pd
            except ImportError:
                raise ImportError("pandas required for to_dataframe()")

            columns = [f.value for f in OrbitField]
            if not orbits:
                return pd.DataFrame(columns=columns)

            if index is not None and len(index) != len(orbits):
                raise ValueError(
                    f"Index length ({len(index)}) must match "
                    f"number of orbits ({len(orbits)})"
                )

            rows = []
            for o in orbits:
                row = o.as_dict()
                row['classification'] = row['classification'].value
                rows.append(row)
            return pd.DataFrame(rows, columns=columns, index=index)
