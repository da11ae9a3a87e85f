"""Tests for launch azimuth and velocity estimates."""

import pytest
import numpy as np

from apsis import (LaunchVelocityInputs, LaunchVelocityResult,
                   launch_velocity_components, EARTH, MOON)


@pytest.fixture
def cape_canaveral():
    """ISS inclination from Cape Canaveral, 300 km circular orbit."""
    return LaunchVelocityInputs(
        target_inclination=np.radians(51.6),
        site_latitude=np.radians(28.5),
        orbital_velocity=7730.0,
        site_velocity=465.101,
    )


class TestLaunchVelocity:
    """Launch velocity components."""

    def test_inertial_azimuth(self, cape_canaveral):
        result = launch_velocity_components(cape_canaveral)
        assert np.sin(result.azimuth_inertial) * np.cos(np.radians(28.5)) == pytest.approx(
            np.cos(np.radians(51.6)))
        assert np.degrees(result.azimuth_inertial) == pytest.approx(44.98, abs=0.01)

    def test_components(self, cape_canaveral):
        result = launch_velocity_components(cape_canaveral)
        cos_lat = np.cos(np.radians(28.5))
        assert result.vx == pytest.approx(
            7730.0 * np.sin(result.azimuth_inertial) - 465.101 * cos_lat)
        assert result.vy == pytest.approx(7730.0 * np.cos(result.azimuth_inertial))
        assert result.azimuth == pytest.approx(np.arctan2(result.vx, result.vy))

    def test_rotation_helps(self, cape_canaveral):
        result = launch_velocity_components(cape_canaveral)
        assert result.azimuth < result.azimuth_inertial
        assert result.delta_v < cape_canaveral.orbital_velocity

    def test_equatorial_site_due_east(self):
        result = launch_velocity_components(LaunchVelocityInputs(
            target_inclination=0.0, site_latitude=0.0,
            orbital_velocity=7800.0, site_velocity=465.0))
        assert result.azimuth_inertial == pytest.approx(0.5 * np.pi)
        assert result.vx == pytest.approx(7800.0 - 465.0)
        assert result.vy == pytest.approx(0.0, abs=1e-9)

    def test_retrograde_target(self):
        result = launch_velocity_components(LaunchVelocityInputs.for_body(
            EARTH, target_inclination=np.radians(98.0),
            site_latitude=np.radians(-19.0), altitude=500e3))
        assert result.azimuth_inertial < 0.0
        assert result.delta_v > EARTH.circular_speed(500e3)

    def test_unreachable_inclination_warns(self):
        inputs = LaunchVelocityInputs(target_inclination=np.radians(20.0),
                                      site_latitude=np.radians(45.0),
                                      orbital_velocity=7700.0, site_velocity=465.0)
        with pytest.warns(RuntimeWarning, match="Cannot achieve inclination"):
            result = launch_velocity_components(inputs)
        assert result == LaunchVelocityResult()


class TestLaunchInputs:
    """Inputs derived from body parameters."""

    def test_for_body(self):
        inputs = LaunchVelocityInputs.for_body(EARTH, np.radians(51.6), np.radians(28.5), 300e3)
        assert inputs.orbital_velocity == pytest.approx(EARTH.circular_speed(300e3))
        assert inputs.site_velocity == pytest.approx(465.1, abs=0.1)

    def test_for_body_without_rotation(self):
        from apsis import SUN
        with pytest.raises(ValueError, match="rotation rate"):
            LaunchVelocityInputs.for_body(SUN, 0.5, 0.1, 1e6)

    def test_slow_rotator(self):
        inputs = LaunchVelocityInputs.for_body(MOON, 0.5, 0.1, 100e3)
        assert inputs.site_velocity < 5.0
