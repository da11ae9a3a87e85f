"""Tests for the package-wide configuration."""

import pytest

import apsis
from apsis import config, temp_config
from apsis.utils import validation_error


@pytest.fixture(autouse=True)
def restore_config():
    yield
    config.reset()


class TestConfig:
    """Defaults, reset and temporary overrides."""

    def test_defaults(self):
        assert config.KEPLER_TOLERANCE == 1e-12
        assert config.KEPLER_MAX_ITERATIONS == 64
        assert config.CIRCULAR_TOLERANCE == 0.0
        assert config.EQUATORIAL_TOLERANCE == 0.0
        assert config.STRICT_VALIDATION is True
        assert config.EQUALITY_RTOL == 1e-12
        assert config.EQUALITY_ATOL == 1e-14

    def test_package_shares_instance(self):
        assert apsis.config is config

    def test_reset(self):
        config.KEPLER_MAX_ITERATIONS = 8
        config.STRICT_VALIDATION = False
        config.reset()
        assert config.KEPLER_MAX_ITERATIONS == 64
        assert config.STRICT_VALIDATION is True

    def test_temp_config_restores(self):
        with temp_config(KEPLER_TOLERANCE=1e-6, CIRCULAR_TOLERANCE=1e-9) as cfg:
            assert cfg.KEPLER_TOLERANCE == 1e-6
            assert config.CIRCULAR_TOLERANCE == 1e-9
        assert config.KEPLER_TOLERANCE == 1e-12
        assert config.CIRCULAR_TOLERANCE == 0.0

    def test_temp_config_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with temp_config(STRICT_VALIDATION=False):
                raise RuntimeError("boom")
        assert config.STRICT_VALIDATION is True

    def test_temp_config_unknown_key(self):
        with pytest.raises(AttributeError, match="no attribute"):
            with temp_config(NOT_A_SETTING=1):
                pass

    def test_repr(self):
        text = repr(config)
        assert text.startswith("ApsisConfig:")
        assert "KEPLER_MAX_ITERATIONS = 64" in text


class TestValidationError:
    """Strict and lenient validation."""

    def test_strict_raises(self):
        with pytest.raises(ValueError, match="bad"):
            validation_error("bad value")

    def test_custom_error_class(self):
        with pytest.raises(TypeError):
            validation_error("bad type", TypeError)

    def test_lenient_warns(self):
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="bad"):
                validation_error("bad value")
