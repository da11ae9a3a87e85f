"""Tests for physical constants and body parameters."""

import pytest
import numpy as np

from apsis import (BodyParams, EARTH, MOON, MARS, SUN,
                   EARTH_GRAVITATIONAL_PARAMETER, EARTH_EQUATORIAL_RADIUS)


class TestBodyParams:
    """Predefined bodies and validation."""

    def test_earth(self):
        assert EARTH.mu == EARTH_GRAVITATIONAL_PARAMETER == 3.986004418e14
        assert EARTH.radius == EARTH_EQUATORIAL_RADIUS == 6378137.0
        assert EARTH.rotation_rate == pytest.approx(7.2921150e-5)
        assert EARTH.name == 'Earth'

    @pytest.mark.parametrize("body", [EARTH, MOON, MARS, SUN])
    def test_positive(self, body):
        assert body.mu > 0
        assert body.radius > 0

    def test_circular_speed(self):
        assert EARTH.circular_speed(400e3) == pytest.approx(
            np.sqrt(EARTH.mu / (EARTH.radius + 400e3)))
        assert 7600.0 < EARTH.circular_speed(400e3) < 7700.0

    def test_frozen(self):
        with pytest.raises(AttributeError):
            EARTH.mu = 1.0

    @pytest.mark.parametrize("mu, radius", [(0.0, 1.0), (-1.0, 1.0), (1.0, 0.0)])
    def test_invalid(self, mu, radius):
        with pytest.raises(ValueError):
            BodyParams(mu=mu, radius=radius)
