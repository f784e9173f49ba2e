"""Global registry for boundary profiles.

This module provides a centralized registry mapping profile names to
``BoundaryProfile`` objects. Each profile exposes a single operation,
``evaluate(b, t)``, which maps a boundary parameter vector ``b`` (first entry:
initial height) and a time grid ``t`` onto boundary heights.

Examples
--------
Register a custom boundary:

>>> from mcdiffusion.config import register_boundary
>>>
>>> def hyperbolic(t, a=1.0, half_time=0.5):
...     return a * half_time / (half_time + t)
>>>
>>> register_boundary("hyperbolic", hyperbolic, ["a", "half_time"])
>>> sim_options["up_boundary"] = "hyperbolic"
>>> sim_options["up_boundary_params"] = [1.2, 0.8]

List available boundaries:

>>> from mcdiffusion.config import get_boundary_registry
>>> print(get_boundary_registry().list_boundaries())
"""

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from mcdiffusion.exceptions import ConfigurationError


class BoundaryProfile:
    """A named boundary profile.

    Parameters
    ----------
    name : str
        Name of the profile (e.g., "weibull_cdf").
    function : Callable
        Boundary function with signature ``(t, **params) -> float or array``.
    params : list[str]
        Parameter names in the order in which they appear in the boundary
        parameter vector. The first one is the initial height ``a``.
    """

    def __init__(self, name: str, function: Callable, params: list[str]):
        self.name = name
        self.function = function
        self.params = list(params)

    def evaluate(self, b: Sequence[float] | np.ndarray, t: np.ndarray) -> np.ndarray:
        """Evaluate the profile on the time grid.

        Parameters
        ----------
        b : sequence of float
            Boundary parameters, matched positionally against ``self.params``.
            Trailing parameters may be omitted and fall back to the function
            defaults.
        t : np.ndarray
            Time grid.

        Returns
        -------
        np.ndarray
            Boundary heights, same shape as ``t``.
        """
        b = np.atleast_1d(np.asarray(b, dtype=np.float64))
        if b.size > len(self.params):
            raise ConfigurationError(
                f"Boundary '{self.name}' takes at most {len(self.params)} "
                f"parameter(s) {self.params}, got {b.size}"
            )
        kwargs = {name: float(value) for name, value in zip(self.params, b)}
        return _as_trajectory(self.function(t, **kwargs), t, self.name)

    def __repr__(self) -> str:
        return f"BoundaryProfile(name={self.name!r}, params={self.params})"


class CallableBoundaryProfile(BoundaryProfile):
    """Wrap a plain ``(b, t) -> heights`` callable as a boundary profile."""

    def __init__(self, function: Callable, name: str | None = None):
        super().__init__(name or getattr(function, "__name__", "custom"), function, [])

    def evaluate(self, b: Sequence[float] | np.ndarray, t: np.ndarray) -> np.ndarray:
        b = np.atleast_1d(np.asarray(b, dtype=np.float64))
        return _as_trajectory(self.function(b, t), t, self.name)


def _as_trajectory(heights: Any, t: np.ndarray, name: str) -> np.ndarray:
    heights = np.asarray(heights, dtype=np.float64)
    if heights.ndim == 0:
        return np.full(t.shape, float(heights))
    if heights.shape != t.shape:
        raise ConfigurationError(
            f"Boundary '{name}' returned shape {heights.shape}, "
            f"expected {t.shape} to match the time grid"
        )
    return heights.copy()


class BoundaryRegistry:
    """Global registry for boundary profiles.

    This registry maintains a mapping of boundary names to BoundaryProfile
    objects.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._boundaries: dict[str, BoundaryProfile] = {}

    def register(
        self,
        name: str,
        function: Callable,
        params: list[str],
    ) -> None:
        """Register a boundary function.

        Parameters
        ----------
        name : str
            Unique name for the boundary (e.g., "angle", "weibull_cdf")
        function : Callable
            Boundary function with signature (t, **params) -> float or array
        params : list[str]
            List of parameter names the function expects, starting with 'a'

        Raises
        ------
        ValueError
            If name already registered
        """
        if name in self._boundaries:
            raise ValueError(
                f"Boundary '{name}' is already registered. "
                f"Use a different name or unregister the existing boundary first."
            )
        self._boundaries[name] = BoundaryProfile(name, function, params)

    def unregister(self, name: str) -> None:
        """Remove a boundary from the registry.

        Raises
        ------
        KeyError
            If boundary name not registered
        """
        self.get(name)
        del self._boundaries[name]

    def get(self, name: str) -> BoundaryProfile:
        """Get boundary profile by name.

        Raises
        ------
        KeyError
            If boundary name not registered
        """
        if name not in self._boundaries:
            available = self.list_boundaries()
            raise KeyError(
                f"Boundary '{name}' is not registered. "
                f"Available boundaries: {available}"
            )
        return self._boundaries[name]

    def is_registered(self, name: str) -> bool:
        """Check if boundary name is registered."""
        return name in self._boundaries

    def list_boundaries(self) -> list[str]:
        """List all registered boundary names (sorted)."""
        return sorted(self._boundaries.keys())

    def __repr__(self) -> str:
        """String representation of registry."""
        n_boundaries = len(self._boundaries)
        return f"BoundaryRegistry({n_boundaries} boundaries registered)"


# Global singleton instance
_GLOBAL_BOUNDARY_REGISTRY = BoundaryRegistry()


def register_boundary(
    name: str,
    function: Callable,
    params: list[str],
) -> None:
    """Register a boundary function globally.

    Once registered, the boundary can be selected by name through the
    'up_boundary' and 'lower_boundary' simulation options.

    Parameters
    ----------
    name : str
        Unique name for the boundary
    function : Callable
        Boundary function with signature (t, **params) -> float or array
    params : list[str]
        List of parameter names the function expects (must start with 'a')

    Raises
    ------
    ValueError
        If name already registered
    """
    _GLOBAL_BOUNDARY_REGISTRY.register(name, function, params)


def get_boundary_registry() -> BoundaryRegistry:
    """Get the global boundary registry."""
    return _GLOBAL_BOUNDARY_REGISTRY


def resolve_boundary_profile(boundary: str | BoundaryProfile | Callable) -> BoundaryProfile:
    """Turn a boundary option into a BoundaryProfile.

    Parameters
    ----------
    boundary : str, BoundaryProfile or Callable
        A registered boundary name, a profile, or a callable with signature
        ``(b, t) -> heights``.

    Returns
    -------
    BoundaryProfile

    Raises
    ------
    ConfigurationError
        If the name is not registered or the value is of an unsupported type.
    """
    if isinstance(boundary, BoundaryProfile):
        return boundary
    if isinstance(boundary, str):
        try:
            return _GLOBAL_BOUNDARY_REGISTRY.get(boundary)
        except KeyError as e:
            raise ConfigurationError(e.args[0]) from e
    if callable(boundary):
        return CallableBoundaryProfile(boundary)
    raise ConfigurationError(
        f"Boundary must be a registered name, a BoundaryProfile or a callable, "
        f"got {type(boundary).__name__}"
    )


# Initialize with all built-in boundaries automatically
from mcdiffusion.basic_simulators.boundary_functions import boundary_config  # noqa: E402

for boundary_name, boundary_spec in boundary_config.items():
    register_boundary(
        name=boundary_name,
        function=boundary_spec["fun"],
        params=boundary_spec["params"],
    )
