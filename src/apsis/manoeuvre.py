'''Launch manoeuvre estimates
Rough direct-ascent launch azimuth and velocity components for reaching a
circular orbit of given inclination from a rotating body'''

import warnings
from dataclasses import dataclass

import numpy as np

from .defaults import BodyParams


@dataclass(frozen=True)
class LaunchVelocityInputs:
    """
    Attributes
    ----------
    target_inclination : float
        Required orbital inclination [rad]
    site_latitude : float
        Launch site latitude [rad]
    orbital_velocity : float
        Required (circular) orbital speed [m/s]
    site_velocity : float
        Equatorial surface speed of the rotating body [m/s]; scaled by
        cos(latitude) to give the eastward speed of the site
    """
    target_inclination: float = 0.0
    site_latitude: float = 0.0
    orbital_velocity: float = 0.0
    site_velocity: float = 0.0

    @classmethod
    def for_body(cls, body: BodyParams, target_inclination: float,
                 site_latitude: float, altitude: float):
        """
        Inputs for a circular orbit at ``altitude`` [m] above a spherical body.

        Raises
        ------
        ValueError
            If the body has no rotation rate
        """
        if body.rotation_rate is None:
            raise ValueError(f"Body {body.name} has no rotation rate")
        return cls(
            target_inclination=target_inclination,
            site_latitude=site_latitude,
            orbital_velocity=body.circular_speed(altitude),
            site_velocity=body.rotation_rate * body.radius,
        )


@dataclass(frozen=True)
class LaunchVelocityResult:
    """
    Attributes
    ----------
    vx : float
        Eastward velocity to be supplied by the launcher [m/s]
    vy : float
        Northward velocity to be supplied by the launcher [m/s]
    azimuth_inertial : float
        Launch azimuth ignoring body rotation [rad]
    azimuth : float
        Launch azimuth including body rotation [rad]
    """
    vx: float = 0.0
    vy: float = 0.0
    azimuth_inertial: float = 0.0
    azimuth: float = 0.0

    @property
    def delta_v(self) -> float:
        """Speed the launcher must supply [m/s]"""
        return float(np.hypot(self.vx, self.vy))


def launch_velocity_components(inputs: LaunchVelocityInputs) -> LaunchVelocityResult:
    """
    Velocity components and azimuth needed to reach the target inclination.

    The inertial azimuth follows from sin(β) = cos(i) / cos(φ); the site's
    rotational speed is then removed from the eastward component.

    Parameters
    ----------
    inputs : LaunchVelocityInputs

    Returns
    -------
    LaunchVelocityResult
        Zero result if the inclination is not reachable in a single
        manoeuvre from the site latitude

    Warns
    -----
    RuntimeWarning
        If the site latitude exceeds the target inclination
    """
    if inputs.site_latitude > inputs.target_inclination:
        warnings.warn(
            f"Cannot achieve inclination {np.degrees(inputs.target_inclination):g}° "
            f"from launch site at latitude {np.degrees(inputs.site_latitude):g}° "
            f"in a single manoeuvre",
            RuntimeWarning, stacklevel=2)
        return LaunchVelocityResult()

    cos_latitude = np.cos(inputs.site_latitude)
    if cos_latitude == 0.0:
        # azimuth is undefined at the poles
        azimuth_inertial = 0.5 * np.pi
    else:
        azimuth_inertial = float(np.arcsin(
            np.clip(np.cos(inputs.target_inclination) / cos_latitude, -1.0, 1.0)))

    vx = inputs.orbital_velocity * np.sin(azimuth_inertial) - inputs.site_velocity * cos_latitude
    vy = inputs.orbital_velocity * np.cos(azimuth_inertial)
    return LaunchVelocityResult(
        vx=float(vx),
        vy=float(vy),
        azimuth_inertial=azimuth_inertial,
        azimuth=float(np.arctan2(vx, vy)),
    )
