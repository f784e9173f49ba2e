"""Monte Carlo simulation of choices and reaction times.

The decision variable of every trial is a discretized drift-diffusion process
starting at 0. Evidence accumulates until it meets the upper boundary
(choice 1) or the negated lower boundary (choice 0). Both boundaries may
collapse over time. A non-decision time drawn from a normal distribution of
the winning side is added to the decision time.

Main entry point is ``simulator()``; see also the class-based interface
``mcdiffusion.basic_simulators.Simulator``.
"""

import logging
import numbers
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from mcdiffusion.basic_simulators.drift_functions import drift_noise
from mcdiffusion.basic_simulators.results import SimulationResult, assemble_results
from mcdiffusion.basic_simulators.theta_processor import DecodedTheta, decode_theta
from mcdiffusion.config.boundary_registry import BoundaryProfile, resolve_boundary_profile
from mcdiffusion.config.config import update_sim_options, validate_sim_options
from mcdiffusion.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Collapsing boundaries stop at this fraction of the initial height.
BOUNDARY_FLOOR_FRACTION = 1e-3

NOT_REACHED = -1


def _get_unique_seed() -> int:
    """Draw a fresh 32-bit seed from OS entropy."""
    return int(np.random.SeedSequence().generate_state(1)[0])


def make_time_grid(delta_t: float, max_t: float) -> np.ndarray:
    """Time points 0, delta_t, 2 * delta_t, ... up to and including max_t.

    Returns
    -------
    np.ndarray
        Grid of length floor(max_t / delta_t) + 1.
    """
    nt = int(np.floor(max_t / delta_t * (1 + 1e-10))) + 1
    return np.arange(nt, dtype=np.float64) * delta_t


def make_boundary(
    boundary: str | BoundaryProfile | Callable,
    b: Sequence[float] | np.ndarray,
    t: np.ndarray,
    lower: bool = False,
) -> np.ndarray:
    """Evaluate a boundary profile and apply the collapse floor.

    Heights at or below BOUNDARY_FLOOR_FRACTION * b[0] are raised to that
    value, so a collapsed boundary cannot be crossed by noise alone.

    Parameters
    ----------
    boundary : str, BoundaryProfile or Callable
        Boundary profile (see ``resolve_boundary_profile``).
    b : sequence of float
        Boundary parameters; b[0] is the initial height.
    t : np.ndarray
        Time grid.
    lower : bool
        If True, the trajectory is negated after clamping.

    Returns
    -------
    np.ndarray
        Boundary trajectory, same length as t.
    """
    b = np.atleast_1d(np.asarray(b, dtype=np.float64))
    if b.size == 0 or np.isnan(b[0]):
        which = "lower" if lower else "up"
        raise ConfigurationError(f"Valid {which} boundary parameter must be provided.")

    heights = resolve_boundary_profile(boundary).evaluate(b, t)
    floor = b[0] * BOUNDARY_FLOOR_FRACTION
    heights[heights <= floor] = floor
    if lower:
        heights = -1.0 * heights
    return heights


def _update_first_index(first: np.ndarray, hits: np.ndarray, offset: int) -> None:
    """Record the first hitting step of trials that have not hit yet."""
    new_hits = hits.any(axis=0) & (first == NOT_REACHED)
    if np.any(new_hits):
        first[new_hits] = hits[:, new_hits].argmax(axis=0) + offset


def first_passage(
    mu: float,
    sd: float,
    up_boundary: np.ndarray,
    lower_boundary: np.ndarray,
    trials: int,
    rng: np.random.Generator,
    chunk_size: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Simulate accumulation paths and find first passage at each boundary.

    Increments for steps 1 .. nt-1 are drawn as an (nt - 1, trials) matrix of
    N(mu, sd) values in time order. With ``chunk_size`` the matrix is drawn
    block by block with the running sum carried over, which consumes the
    generator in the same order and gives identical paths.

    Parameters
    ----------
    mu, sd : float
        Per-step mean and sd of the evidence increments.
    up_boundary, lower_boundary : np.ndarray
        Upper and (negated) lower boundary trajectories, length nt.
    trials : int
        Number of paths.
    rng : np.random.Generator
        Random source.
    chunk_size : int or None
        Number of time steps per block. None draws all steps at once.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        First grid index at which each path is >= the upper boundary, and
        first index at which it is <= the lower boundary; NOT_REACHED (-1)
        where the boundary is never met.
    """
    nt = up_boundary.shape[0]
    iu = np.full(trials, NOT_REACHED, dtype=np.int64)
    il = np.full(trials, NOT_REACHED, dtype=np.int64)

    # Grid index 0: the path sits at the starting point 0.
    if 0.0 >= up_boundary[0]:
        iu[:] = 0
    if 0.0 <= lower_boundary[0]:
        il[:] = 0

    step = nt - 1 if chunk_size is None else chunk_size
    carry = np.zeros((1, trials))
    start = 1
    while start < nt:
        stop = min(nt, start + step)
        increments = rng.normal(mu, sd, size=(stop - start, trials))
        path = np.cumsum(np.concatenate([carry, increments], axis=0), axis=0)[1:]
        _update_first_index(iu, path >= up_boundary[start:stop, None], start)
        _update_first_index(il, path <= lower_boundary[start:stop, None], start)
        carry = path[-1:]
        start = stop

    return iu, il


def resolve_race(
    iu: np.ndarray,
    il: np.ndarray,
    delta_t: float,
    tnd_up: np.ndarray,
    tnd_lower: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Turn first-passage indices into choices and reaction times.

    The earlier boundary wins; on equal indices the upper boundary wins.

    Parameters
    ----------
    iu, il : np.ndarray
        First-passage grid indices (NOT_REACHED if never reached).
    delta_t : float
        Time step.
    tnd_up, tnd_lower : np.ndarray
        Non-decision times drawn for each trial for either outcome.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        choices (1.0, 0.0 or NaN) and rts (NaN where undecided).
    """
    reached_up = iu != NOT_REACHED
    reached_lower = il != NOT_REACHED
    up_wins = reached_up & (~reached_lower | (iu <= il))
    lower_wins = reached_lower & ~up_wins

    choices = np.full(iu.shape, np.nan)
    rts = np.full(iu.shape, np.nan)
    choices[up_wins] = 1.0
    choices[lower_wins] = 0.0
    rts[up_wins] = iu[up_wins] * delta_t + tnd_up[up_wins]
    rts[lower_wins] = il[lower_wins] * delta_t + tnd_lower[lower_wins]
    return choices, rts


def _check_tnd(theta: DecodedTheta) -> None:
    for name in ("tnd_up_sd", "tnd_lower_sd"):
        if getattr(theta, name) < 0:
            raise ConfigurationError(f"{name} must be >= 0, got {getattr(theta, name)}")


def simulator(
    coherence: Sequence[float] | np.ndarray,
    sim_options: dict[str, Any] | None = None,
    rng: np.random.Generator | None = None,
    chunk_size: int | None = None,
    **option_overrides: Any,
) -> SimulationResult:
    """Generate choice and reaction-time data by Monte Carlo simulation.

    Parameters
    ----------
    coherence : sequence of float or np.ndarray
        Signed coherence, one entry per stimulus level.
    sim_options : dict or None
        Simulation options (see ``mcdiffusion.config.get_default_sim_options``).
        If ``random_state`` is None and no ``rng`` is given, a seed is
        generated and written back into the options used.
    rng : np.random.Generator or None
        Random source. If None, ``np.random.default_rng(random_state)`` is used.
    chunk_size : int or None
        Number of time steps simulated per block, to bound memory. Results do
        not depend on it.
    **option_overrides
        Option values merged into a copy of ``sim_options`` before the run.

    Returns
    -------
    SimulationResult
        trials * len(coherence) rows (coherence, choice, rt), grouped by
        coherence level in input order, trial index ascending. RTs are
        decision time plus a normal non-decision time and are not clipped,
        so a large ``tnd_*_sd`` relative to ``tnd_*`` can give rt < 0.

    Raises
    ------
    ConfigurationError
        If options or inputs are invalid. Raised before any random draw.
    """
    if sim_options is None or option_overrides:
        sim_options = update_sim_options(sim_options, **option_overrides)
    validate_sim_options(sim_options, stacklevel=3)

    coherence = np.atleast_1d(np.asarray(coherence, dtype=np.float64))
    if coherence.ndim != 1 or coherence.size == 0:
        raise ConfigurationError("coherence must be a non-empty 1D sequence.")
    if chunk_size is not None and (
        not isinstance(chunk_size, numbers.Integral) or chunk_size < 1
    ):
        raise ConfigurationError(f"chunk_size must be an integer >= 1, got {chunk_size!r}")

    delta_t = float(sim_options["delta_t"])
    max_t = float(sim_options["max_t"])
    trials = int(sim_options["trials"])

    theta = decode_theta(sim_options["theta"])
    _check_tnd(theta)
    drift, noise = drift_noise(coherence, theta)

    t = make_time_grid(delta_t, max_t)
    up_boundary = make_boundary(
        sim_options["up_boundary"], sim_options["up_boundary_params"], t
    )
    lower_boundary = make_boundary(
        sim_options["lower_boundary"],
        sim_options["lower_boundary_params"],
        t,
        lower=True,
    )

    if rng is None:
        if sim_options["random_state"] is None:
            sim_options["random_state"] = _get_unique_seed()
            logger.info("Generated random seed %d", sim_options["random_state"])
        rng = np.random.default_rng(sim_options["random_state"])

    nd = coherence.shape[0]
    logger.debug(
        "Simulating %d trials x %d coherence levels on %d time points",
        trials,
        nd,
        t.shape[0],
    )

    mu = drift * delta_t
    sd = noise * np.sqrt(delta_t)
    choices = np.empty((trials, nd))
    rts = np.empty((trials, nd))
    for i in range(nd):
        iu, il = first_passage(
            mu[i], sd[i], up_boundary, lower_boundary, trials, rng, chunk_size
        )
        tnd_up = rng.normal(theta.tnd_up, theta.tnd_up_sd, size=trials)
        tnd_lower = rng.normal(theta.tnd_lower, theta.tnd_lower_sd, size=trials)
        choices[:, i], rts[:, i] = resolve_race(iu, il, delta_t, tnd_up, tnd_lower)
        logger.debug(
            "coherence=%g: %d undecided of %d",
            coherence[i],
            int(np.isnan(choices[:, i]).sum()),
            trials,
        )

    metadata = {
        "random_state": sim_options["random_state"],
        "delta_t": delta_t,
        "max_t": max_t,
        "trials": trials,
        "nt": t.shape[0],
        "theta": theta.to_dict(),
        "up_boundary": up_boundary,
        "lower_boundary": lower_boundary,
    }
    return assemble_results(
        coherence, choices, rts, metadata=metadata, sim_options=sim_options
    )
