"""Tests for boundary_functions module."""

import numpy as np
from scipy.stats import gamma

from mcdiffusion.basic_simulators import boundary_functions


class TestConstantBoundary:
    """Test constant boundary function."""

    def test_constant_scalar(self):
        """Test constant boundary with scalar input."""
        result = boundary_functions.constant(t=0, a=1.5)
        assert result == 1.5

    def test_constant_array(self):
        """Test constant boundary with array input."""
        t = np.array([0.0, 0.1, 0.2, 0.3])
        result = boundary_functions.constant(t=t, a=2.0)
        assert isinstance(result, np.ndarray)
        assert np.all(result == 2.0)
        assert result.shape == t.shape

    def test_constant_integer_grid_keeps_float_height(self):
        """Integer time grids must not truncate the height."""
        result = boundary_functions.constant(t=np.arange(3), a=0.75)
        assert np.all(result == 0.75)


class TestAngleBoundary:
    """Test angle (linear collapsing) boundary function."""

    def test_angle_flat_at_zero_angle(self):
        result = boundary_functions.angle(t=1, a=1.0, theta=0.0)
        assert np.isclose(result, 1.0)

    def test_angle_collapse(self):
        """Test that angle boundary collapses linearly."""
        t = np.linspace(0, 5, 10)
        a = 2.0
        theta = 1.0
        result = boundary_functions.angle(t=t, a=a, theta=theta)

        expected = a - t * np.tan(theta)
        assert np.allclose(result, expected)
        assert np.all(np.diff(result) < 0)


class TestExponentialBoundary:
    def test_exponential_starts_at_a(self):
        assert np.isclose(boundary_functions.exponential(t=0, a=1.3, rate=2.0), 1.3)

    def test_exponential_half_life(self):
        """Height halves after ln(2) / rate seconds."""
        rate = 4.0
        result = boundary_functions.exponential(t=np.log(2) / rate, a=1.0, rate=rate)
        assert np.isclose(result, 0.5)


class TestGeneralizedLogisticBoundary:
    """Test generalized logistic boundary function."""

    def test_generalized_logistic_array(self):
        t = np.array([0, 1, 2, 3, 4, 5], dtype=float)
        result = boundary_functions.generalized_logistic(
            t=t, a=1.0, B=2.0, M=3.0, v=0.5
        )
        assert isinstance(result, np.ndarray)
        assert result.shape == t.shape

    def test_generalized_logistic_shape(self):
        """Generalized logistic collapses over time."""
        t = np.linspace(0, 10, 100)
        result = boundary_functions.generalized_logistic(
            t=t, a=1.0, B=1.0, M=5.0, v=0.5
        )
        assert np.all(np.diff(result) <= 0)


class TestWeibullCDFBoundary:
    """Test Weibull CDF (decay) boundary function."""

    def test_weibull_cdf_at_zero(self):
        """Test that Weibull boundary equals a at t=0."""
        result = boundary_functions.weibull_cdf(t=0, a=3.0, alpha=2.0, beta=1.5)
        assert np.isclose(result, 3.0)

    def test_weibull_cdf_decay(self):
        """Test that Weibull boundary decays over time."""
        t = np.linspace(0, 5, 10)
        a = 2.0
        alpha = 1.0
        beta = 1.0
        result = boundary_functions.weibull_cdf(t=t, a=a, alpha=alpha, beta=beta)

        expected = a * np.exp(-np.power(t / beta, alpha))
        assert np.allclose(result, expected)
        assert np.all(np.diff(result) <= 0)


class TestGammaCDFBoundary:
    def test_gamma_cdf_matches_survival_function(self):
        t = np.linspace(0, 3, 31)
        result = boundary_functions.gamma_cdf(t=t, a=1.5, shape=2.0, scale=0.4)
        assert np.allclose(result, 1.5 * (1 - gamma.cdf(t, a=2.0, scale=0.4)))

    def test_gamma_cdf_starts_at_a(self):
        assert np.isclose(boundary_functions.gamma_cdf(t=0.0, a=0.8), 0.8)


class TestBoundaryConfig:
    """Test the table of built-in boundaries."""

    def test_boundary_function_type_alias(self):
        assert hasattr(boundary_functions, "BoundaryFunction")

    def test_all_params_start_with_height(self):
        for name, spec in boundary_functions.boundary_config.items():
            assert callable(spec["fun"]), name
            assert spec["params"][0] == "a", name

    def test_all_profiles_start_at_height(self):
        """Every profile except generalized_logistic equals a at t = 0."""
        t = np.array([0.0])
        for name, spec in boundary_functions.boundary_config.items():
            if name == "generalized_logistic":
                continue
            assert np.allclose(spec["fun"](t, a=1.7), 1.7), name
