"""
Class-based interface for Monte Carlo choice / reaction-time simulations.

This module provides an object-oriented wrapper around ``simulator()`` that
holds validated simulation options and supports custom boundary profiles.
"""

import inspect
import warnings
from collections.abc import Callable, Sequence
from copy import deepcopy
from typing import Any

import numpy as np

from mcdiffusion.basic_simulators.results import SimulationResult
from mcdiffusion.basic_simulators.simulator import simulator
from mcdiffusion.config.boundary_registry import (
    BoundaryProfile,
    get_boundary_registry,
    resolve_boundary_profile,
)
from mcdiffusion.config.config import (
    get_default_sim_options,
    update_sim_options,
    validate_sim_options,
)
from mcdiffusion.exceptions import ConfigurationError


class Simulator:
    """Class-based interface for Monte Carlo choice / reaction-time simulations.

    Examples
    --------
    Basic usage with default options:

    >>> sim = Simulator(trials=500)
    >>> result = sim.simulate([-0.256, 0.0, 0.256], random_state=1)

    Collapsing boundaries by name:

    >>> sim = Simulator(
    ...     up_boundary="weibull_cdf",
    ...     up_boundary_params=[1.0, 2.0, 1.5],
    ...     lower_boundary="weibull_cdf",
    ...     lower_boundary_params=[1.0, 2.0, 1.5],
    ... )

    Custom boundary function with signature (b, t) -> heights:

    >>> def hyperbolic(b, t):
    ...     return b[0] * b[1] / (b[1] + t)
    >>> sim = Simulator(up_boundary=hyperbolic, up_boundary_params=[1.0, 0.5])

    Attributes
    ----------
    config : dict
        The full simulation options dictionary
    """

    def __init__(
        self,
        sim_options: dict | None = None,
        up_boundary: str | Callable | BoundaryProfile | None = None,
        lower_boundary: str | Callable | BoundaryProfile | None = None,
        **option_overrides,
    ):
        """Initialize a Simulator instance.

        Parameters
        ----------
        sim_options : dict or None
            Simulation options to start from. Missing keys are filled in from
            ``get_default_sim_options()``.
        up_boundary, lower_boundary : str, Callable, BoundaryProfile or None
            Boundary profile. Can be:
            - A registered boundary name (e.g., "angle", "weibull_cdf")
            - A callable with signature func(b, t) -> np.ndarray
            - None to keep the profile from the options
        **option_overrides
            Option values to override, e.g. trials, delta_t, max_t, theta,
            up_boundary_params, lower_boundary_params.

        Raises
        ------
        ConfigurationError
            If the resulting options are invalid
        """
        self._config = self._build_config(
            sim_options, up_boundary, lower_boundary, option_overrides
        )

    def _build_config(
        self,
        sim_options: dict | None,
        up_boundary: str | Callable | BoundaryProfile | None,
        lower_boundary: str | Callable | BoundaryProfile | None,
        option_overrides: dict,
    ) -> dict:
        """Build the options dictionary from inputs."""
        config = get_default_sim_options()
        if sim_options is not None:
            config = update_sim_options(config, **deepcopy(sim_options))
        config = update_sim_options(config, **option_overrides)

        if up_boundary is not None:
            self._apply_custom_boundary(config, "up", up_boundary, option_overrides)
        if lower_boundary is not None:
            self._apply_custom_boundary(
                config, "lower", lower_boundary, option_overrides
            )

        validate_sim_options(config, stacklevel=4)
        return config

    def _apply_custom_boundary(
        self,
        config: dict,
        which: str,
        boundary: str | Callable | BoundaryProfile,
        option_overrides: dict,
    ) -> None:
        """Apply a custom boundary to the configuration.

        Raises
        ------
        ConfigurationError
            If the boundary specification is invalid
        """
        if isinstance(boundary, str):
            if not get_boundary_registry().is_registered(boundary):
                raise ConfigurationError(
                    f"Unknown boundary '{boundary}'. Available boundaries: "
                    f"{get_boundary_registry().list_boundaries()}"
                )
        elif callable(boundary) and not isinstance(boundary, BoundaryProfile):
            self._validate_boundary_function(boundary)
            if f"{which}_boundary_params" not in option_overrides:
                warnings.warn(
                    f"Custom {which} boundary provided without "
                    f"'{which}_boundary_params'. Using {config[f'{which}_boundary_params']}.",
                    UserWarning,
                    stacklevel=3,
                )
        config[f"{which}_boundary"] = resolve_boundary_profile(boundary)

    def _validate_boundary_function(self, func: Callable) -> None:
        """Validate that a boundary function accepts (b, t).

        Raises
        ------
        ConfigurationError
            If function signature is invalid
        """
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError):
            return
        positional = [
            p
            for p in sig.parameters.values()
            if p.kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ]
        has_varargs = any(
            p.kind == inspect.Parameter.VAR_POSITIONAL for p in sig.parameters.values()
        )
        if len(positional) < 2 and not has_varargs:
            raise ConfigurationError(
                f"Boundary function '{getattr(func, '__name__', 'custom')}' must accept "
                "the boundary parameters and the time grid as (b, t)"
            )

    def simulate(
        self,
        coherence: Sequence[float] | np.ndarray,
        random_state: int | None = None,
        rng: np.random.Generator | None = None,
        chunk_size: int | None = None,
    ) -> SimulationResult:
        """Run a simulation for the given coherence levels.

        Parameters
        ----------
        coherence : sequence of float or np.ndarray
            Signed coherence levels.
        random_state : int or None
            Seed for this run. If None, the configured seed is used; if that is
            None too, a fresh seed is generated and recorded in
            ``result.sim_options`` and ``result.metadata`` only. The stored
            ``config`` keeps ``random_state=None``, so every such call draws
            a new seed.
        rng : np.random.Generator or None
            Random source to use instead of seeding a new one.
        chunk_size : int or None
            Number of time steps simulated per block.

        Returns
        -------
        SimulationResult
        """
        sim_options = deepcopy(self._config)
        if random_state is not None:
            sim_options["random_state"] = random_state
        return simulator(coherence, sim_options, rng=rng, chunk_size=chunk_size)

    def validate_options(self) -> None:
        """Re-validate the stored options.

        Raises
        ------
        ConfigurationError
            If options are invalid
        """
        validate_sim_options(self._config, stacklevel=3)

    @property
    def config(self) -> dict:
        """Get a copy of the full simulation options."""
        return deepcopy(self._config)
