"""
Tests for the boundary registry and boundary profile evaluation.
"""

import numpy as np
import pytest

from mcdiffusion.config import (
    BoundaryProfile,
    BoundaryRegistry,
    CallableBoundaryProfile,
    get_boundary_registry,
    register_boundary,
    resolve_boundary_profile,
)
from mcdiffusion.exceptions import ConfigurationError

T = np.arange(0, 1.001, 0.1)


@pytest.fixture
def custom_boundary_name():
    """Register a custom boundary and remove it again afterwards."""
    name = "test_hyperbolic_boundary"

    def hyperbolic(t, a=1.0, half_time=0.5):
        return a * half_time / (half_time + t)

    register_boundary(name=name, function=hyperbolic, params=["a", "half_time"])
    yield name
    get_boundary_registry().unregister(name)


class TestBoundaryRegistry:
    """Tests for BoundaryRegistry."""

    def test_builtin_boundaries_loaded(self):
        """Test that built-in boundaries are automatically loaded."""
        boundaries = get_boundary_registry().list_boundaries()
        for name in ["constant", "angle", "exponential", "weibull_cdf", "gamma_cdf"]:
            assert name in boundaries
        assert boundaries == sorted(boundaries)

    def test_register_custom_boundary(self, custom_boundary_name):
        registry = get_boundary_registry()
        assert registry.is_registered(custom_boundary_name)

        profile = registry.get(custom_boundary_name)
        assert profile.params == ["a", "half_time"]
        assert np.allclose(profile.evaluate([2.0, 0.5], T), 2.0 * 0.5 / (0.5 + T))

    def test_get_nonexistent_boundary_raises_error(self):
        with pytest.raises(KeyError, match="not registered"):
            get_boundary_registry().get("nonexistent_boundary")

    def test_register_duplicate_boundary_raises_error(self):
        registry = BoundaryRegistry()
        registry.register("flat", lambda t, a=1.0: a, ["a"])
        with pytest.raises(ValueError, match="already registered"):
            registry.register("flat", lambda t, a=1.0: a, ["a"])

    def test_unregister(self):
        registry = BoundaryRegistry()
        registry.register("flat", lambda t, a=1.0: a, ["a"])
        registry.unregister("flat")
        assert not registry.is_registered("flat")

    def test_repr(self):
        registry = BoundaryRegistry()
        assert repr(registry) == "BoundaryRegistry(0 boundaries registered)"


class TestBoundaryProfile:
    def test_positional_params(self):
        profile = get_boundary_registry().get("weibull_cdf")
        result = profile.evaluate([1.5, 2.0, 0.8], T)
        assert np.allclose(result, 1.5 * np.exp(-np.power(T / 0.8, 2.0)))

    def test_omitted_params_use_function_defaults(self):
        profile = get_boundary_registry().get("exponential")
        assert np.allclose(profile.evaluate([2.0], T), 2.0 * np.exp(-T))

    def test_scalar_result_is_broadcast(self):
        profile = BoundaryProfile("flat", lambda t, a=1.0: a, ["a"])
        result = profile.evaluate([0.7], T)
        assert result.shape == T.shape
        assert np.all(result == 0.7)

    def test_too_many_params_raises(self):
        profile = get_boundary_registry().get("constant")
        with pytest.raises(ConfigurationError, match="at most 1"):
            profile.evaluate([1.0, 2.0], T)

    def test_wrong_shape_raises(self):
        profile = CallableBoundaryProfile(lambda b, t: np.ones(3), name="short")
        with pytest.raises(ConfigurationError, match="shape"):
            profile.evaluate([1.0], T)

    def test_evaluate_returns_copy(self):
        heights = np.ones(T.shape)
        profile = CallableBoundaryProfile(lambda b, t: heights)
        profile.evaluate([1.0], T)[0] = 5.0
        assert heights[0] == 1.0


class TestResolveBoundaryProfile:
    def test_by_name(self):
        assert resolve_boundary_profile("angle").name == "angle"

    def test_profile_passes_through(self):
        profile = BoundaryProfile("flat", lambda t, a=1.0: a, ["a"])
        assert resolve_boundary_profile(profile) is profile

    def test_callable_is_wrapped(self):
        def linear_drop(b, t):
            return b[0] - b[1] * t

        profile = resolve_boundary_profile(linear_drop)
        assert isinstance(profile, CallableBoundaryProfile)
        assert profile.name == "linear_drop"
        assert np.allclose(profile.evaluate([1.0, 0.5], T), 1.0 - 0.5 * T)

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigurationError, match="not registered"):
            resolve_boundary_profile("no_such_boundary")

    def test_unsupported_type_raises(self):
        with pytest.raises(ConfigurationError, match="registered name"):
            resolve_boundary_profile(3.0)
