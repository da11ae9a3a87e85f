"""
Test suite for anomaly conversions and Kepler's equation.

Tests include:
1. True <-> eccentric anomaly for every conic
2. Kepler's equation and its Newton inversion
3. Universal variable C2/C3 coefficients
"""

import pytest
import numpy as np

from apsis import (true_to_eccentric_anomaly, eccentric_to_true_anomaly,
                   eccentric_to_mean_anomaly, mean_to_eccentric_anomaly,
                   calculate_coefficients, temp_config)


def angle_diff(a, b):
    """Smallest signed difference between two angles"""
    return np.mod(a - b + np.pi, 2 * np.pi) - np.pi


# =============================================================================
# True <-> Eccentric
# =============================================================================

class TestTrueEccentric:
    """Conversions between true and eccentric (hyperbolic, parabolic) anomaly."""

    @pytest.mark.parametrize("e", [0.0, 0.1, 0.5, 0.9, 0.999])
    @pytest.mark.parametrize("nu", np.linspace(0.0, 2 * np.pi, 13)[:-1])
    def test_elliptical_roundtrip(self, e, nu):
        E = true_to_eccentric_anomaly(nu, e)
        assert -np.pi <= E <= np.pi
        nu_back = eccentric_to_true_anomaly(E, e)
        assert 0.0 <= nu_back < 2 * np.pi
        assert abs(angle_diff(nu_back, nu)) < 1e-10

    @pytest.mark.parametrize("e", [1.5, 3.0])
    @pytest.mark.parametrize("nu", [-1.5, -1.0, -0.2, 0.0, 0.7, 1.5])
    def test_hyperbolic_roundtrip(self, e, nu):
        H = true_to_eccentric_anomaly(nu, e)
        assert not np.isnan(H)
        assert np.isclose(eccentric_to_true_anomaly(H, e), nu, atol=1e-12)

    @pytest.mark.parametrize("nu", [-2.5, -1.0, 0.0, 0.3, 2.9])
    def test_parabolic_roundtrip(self, nu):
        D = true_to_eccentric_anomaly(nu, 1.0)
        assert np.isclose(D, np.tan(nu / 2))
        assert np.isclose(eccentric_to_true_anomaly(D, 1.0), nu, atol=1e-12)

    def test_circular_anomalies_coincide(self):
        for nu in [0.3, 2.0, 4.0]:
            assert np.isclose(true_to_eccentric_anomaly(nu, 0.0), angle_diff(nu, 0.0))

    def test_quadrant_preserved(self):
        """Second-half anomalies come back in the second half"""
        e = 0.6
        nu = 1.5 * np.pi
        E = true_to_eccentric_anomaly(nu, e)
        assert E < 0.0
        assert np.isclose(eccentric_to_true_anomaly(E, e), nu)

    def test_periapsis_and_apoapsis(self):
        assert true_to_eccentric_anomaly(0.0, 0.4) == 0.0
        assert np.isclose(abs(true_to_eccentric_anomaly(np.pi, 0.4)), np.pi)


# =============================================================================
# Kepler's Equation
# =============================================================================

class TestKeplerEquation:
    """Mean anomaly from eccentric anomaly and its inversion."""

    def test_elliptical(self):
        assert np.isclose(eccentric_to_mean_anomaly(1.0, 0.5), 1.0 - 0.5 * np.sin(1.0))

    def test_hyperbolic(self):
        assert np.isclose(eccentric_to_mean_anomaly(1.0, 2.0), 2.0 * np.sinh(1.0) - 1.0)

    def test_parabolic(self):
        assert np.isclose(eccentric_to_mean_anomaly(1.0, 1.0), 4.0 / 3.0)

    @pytest.mark.parametrize("e", [0.0, 0.3, 0.9, 0.99])
    @pytest.mark.parametrize("M", [0.0, 0.1, 1.0, np.pi, 4.0, 6.2])
    def test_elliptical_inverse(self, e, M):
        E = mean_to_eccentric_anomaly(M, e)
        assert abs(eccentric_to_mean_anomaly(E, e) - M) < 1e-10

    @pytest.mark.parametrize("e", [1.1, 2.0, 5.0])
    @pytest.mark.parametrize("M", [-10.0, -1.0, 0.0, 0.5, 3.0, 50.0])
    def test_hyperbolic_inverse(self, e, M):
        H = mean_to_eccentric_anomaly(M, e)
        assert abs(eccentric_to_mean_anomaly(H, e) - M) < 1e-9

    @pytest.mark.parametrize("M", [-5.0, -0.5, 0.0, 1.0, 20.0])
    def test_parabolic_inverse(self, M):
        D = mean_to_eccentric_anomaly(M, 1.0)
        assert np.isclose(eccentric_to_mean_anomaly(D, 1.0), M, atol=1e-10)

    def test_full_chain(self):
        """True -> mean -> true recovers the starting anomaly"""
        e = 0.7
        nu = 2.2
        M = eccentric_to_mean_anomaly(true_to_eccentric_anomaly(nu, e), e)
        nu_back = eccentric_to_true_anomaly(mean_to_eccentric_anomaly(M, e), e)
        assert np.isclose(nu_back, nu)

    def test_non_convergence_warns(self):
        with temp_config(KEPLER_MAX_ITERATIONS=1):
            with pytest.warns(RuntimeWarning, match="did not converge"):
                E = mean_to_eccentric_anomaly(0.3, 0.9)
        assert np.isfinite(E)


# =============================================================================
# Universal Variables
# =============================================================================

class TestCoefficients:
    """C2 and C3 for positive, negative and near-zero arguments."""

    def test_zero(self):
        c2, c3 = calculate_coefficients(0.0)
        assert c2 == 0.5
        assert c3 == pytest.approx(1.0 / 6.0)

    def test_positive(self):
        psi = np.pi**2
        result = calculate_coefficients(psi)
        assert result.c2 == pytest.approx(2.0 / np.pi**2)
        assert result.c3 == pytest.approx(1.0 / np.pi**2)

    def test_negative(self):
        result = calculate_coefficients(-1.0)
        assert result.c2 == pytest.approx(np.cosh(1.0) - 1.0)
        assert result.c3 == pytest.approx(np.sinh(1.0) - 1.0)

    @pytest.mark.parametrize("psi", [1.0e-6, -1.0e-6])
    def test_series_is_continuous(self, psi):
        inside = calculate_coefficients(0.99 * psi)
        outside = calculate_coefficients(1.01 * psi)
        assert inside.c2 == pytest.approx(outside.c2, abs=1e-6)
        assert inside.c3 == pytest.approx(outside.c3, abs=1e-6)
