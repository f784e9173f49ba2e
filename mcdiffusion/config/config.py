"""Simulation options for the Monte Carlo choice / reaction-time simulator.

Simulation options are plain dictionaries. Use ``get_default_sim_options()``
to obtain a fresh copy of the defaults and ``update_sim_options()`` to merge
overrides into it.

Variables:
---------
THETA_PARAMS: list[str]
    Names of the nine entries of the ``theta`` parameter vector, in order.
COARSE_DELTA_T: float
    Time steps above this value (in seconds) trigger a PrecisionWarning.
"""

import numbers
import warnings
from copy import deepcopy
from typing import Any

import numpy as np

from mcdiffusion.exceptions import ConfigurationError, PrecisionWarning

THETA_PARAMS = [
    "kappa",
    "coh_bias",
    "u_bias",
    "sigma",
    "b_sigma",
    "tnd_up",
    "tnd_up_sd",
    "tnd_lower",
    "tnd_lower_sd",
]

THETA_DEFAULTS = [10.0, 0.0, 0.0, 1.0, 0.0, 0.3, 0.05, 0.3, 0.05]

COARSE_DELTA_T = 1e-3


def get_default_sim_options() -> dict:
    """Get the default simulation options.

    Returns
    -------
    dict
        Options dictionary with keys:
        - 'delta_t': time step in seconds
        - 'max_t': simulation horizon in seconds
        - 'trials': number of trials per coherence level
        - 'random_state': seed, None means "generate one at run time"
        - 'theta': the nine model parameters (see THETA_PARAMS)
        - 'up_boundary', 'lower_boundary': profile names or callables
        - 'up_boundary_params', 'lower_boundary_params': profile parameters,
          the first entry is the initial boundary height
    """
    return {
        "delta_t": 1e-3,
        "max_t": 5.0,
        "trials": 1000,
        "random_state": None,
        "theta": list(THETA_DEFAULTS),
        "up_boundary": "constant",
        "up_boundary_params": [1.0],
        "lower_boundary": "constant",
        "lower_boundary_params": [1.0],
    }


def update_sim_options(sim_options: dict | None = None, **overrides: Any) -> dict:
    """Merge keyword overrides into a copy of the simulation options.

    Parameters
    ----------
    sim_options : dict or None
        Options to start from. If None, the defaults are used.
    **overrides
        Option values to replace. Keys must already exist in the options.

    Returns
    -------
    dict
        A new options dictionary; ``sim_options`` is not modified.

    Raises
    ------
    ConfigurationError
        If an override names an unknown option.
    """
    merged = deepcopy(sim_options) if sim_options is not None else get_default_sim_options()
    unknown = sorted(set(overrides) - set(merged))
    if unknown:
        raise ConfigurationError(
            f"Unknown simulation option(s): {unknown}. "
            f"Available options: {sorted(merged)}"
        )
    merged.update(overrides)
    return merged


def _check_boundary_params(params: Any, which: str) -> None:
    if params is None or np.size(params) == 0:
        raise ConfigurationError(
            f"Valid {which} boundary parameter must be provided "
            f"('{which}_boundary_params' is empty)."
        )
    b0 = np.atleast_1d(np.asarray(params, dtype=np.float64))[0]
    if np.isnan(b0):
        raise ConfigurationError(
            f"Valid {which} boundary parameter must be provided "
            f"(initial boundary height is NaN)."
        )


def validate_sim_options(sim_options: dict, stacklevel: int = 2) -> None:
    """Validate simulation options.

    Checks every option that can be checked without evaluating a boundary
    profile. Issues a PrecisionWarning for a coarse time step.

    Parameters
    ----------
    sim_options : dict
        Options to validate.
    stacklevel : int
        Passed to ``warnings.warn`` so the warning points at the caller of
        the public entry point.

    Raises
    ------
    ConfigurationError
        If an option is unknown, missing or malformed.
    """
    known = get_default_sim_options()
    unknown = sorted(set(sim_options) - set(known))
    if unknown:
        raise ConfigurationError(
            f"Unknown simulation option(s): {unknown}. "
            f"Available options: {sorted(known)}"
        )
    missing = [k for k in known if k not in sim_options]
    if missing:
        raise ConfigurationError(f"Simulation options missing required field(s): {missing}")

    delta_t = sim_options["delta_t"]
    max_t = sim_options["max_t"]
    trials = sim_options["trials"]

    if not isinstance(delta_t, numbers.Real) or not delta_t > 0:
        raise ConfigurationError(f"delta_t must be a positive number, got {delta_t!r}")
    if not isinstance(max_t, numbers.Real) or not max_t > 0:
        raise ConfigurationError(f"max_t must be a positive number, got {max_t!r}")
    if (
        isinstance(trials, bool)
        or not isinstance(trials, numbers.Integral)
        or trials < 1
    ):
        raise ConfigurationError(f"trials must be an integer >= 1, got {trials!r}")

    theta = sim_options["theta"]
    if isinstance(theta, dict):
        missing_theta = [p for p in THETA_PARAMS if p not in theta]
        if missing_theta:
            raise ConfigurationError(f"theta is missing parameter(s): {missing_theta}")
    elif np.size(theta) != len(THETA_PARAMS):
        raise ConfigurationError(
            f"theta must have {len(THETA_PARAMS)} entries "
            f"({', '.join(THETA_PARAMS)}), got {np.size(theta)}"
        )

    _check_boundary_params(sim_options["up_boundary_params"], "up")
    _check_boundary_params(sim_options["lower_boundary_params"], "lower")

    if delta_t > COARSE_DELTA_T:
        warnings.warn(
            f"Time step size is too coarse (delta_t={delta_t} s > {COARSE_DELTA_T} s).",
            PrecisionWarning,
            stacklevel=stacklevel,
        )
