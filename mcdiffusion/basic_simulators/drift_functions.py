"""Drift and diffusion terms as a function of signed coherence.

Both terms are instantaneous (per-second) rates. The simulator turns them into
per-step statistics: mean ``drift * delta_t`` and sd ``noise * sqrt(delta_t)``.
"""

import numpy as np

from mcdiffusion.basic_simulators.theta_processor import DecodedTheta
from mcdiffusion.exceptions import ConfigurationError


def coherence_drift(
    coherence: float | np.ndarray,
    kappa: float = 1.0,
    coh_bias: float = 0.0,
    u_bias: float = 0.0,
) -> np.ndarray:
    """Drift rate for each coherence level.

    Arguments
    ---------
        coherence: float or np.ndarray
            Signed coherence.
        kappa: float
            Drift sensitivity. Defaults to 1.0.
        coh_bias: float
            Coherence offset. Defaults to 0.0.
        u_bias: float
            Unconditional drift bias. Defaults to 0.0.

    Returns
    -------
        np.ndarray: kappa * (coherence + coh_bias) + u_bias
    """
    coherence = np.asarray(coherence, dtype=np.float64)
    return kappa * (coherence + coh_bias) + u_bias


def coherence_noise(
    coherence: float | np.ndarray,
    sigma: float = 1.0,
    b_sigma: float = 0.0,
) -> np.ndarray:
    """Diffusion coefficient (noise sd per sqrt(second)) for each coherence level.

    The variance grows linearly with the stimulus strength:
    sigma^2 + b_sigma * |coherence|.

    Raises
    ------
    ConfigurationError
        If the resulting variance is negative for any coherence level.
    """
    coherence = np.asarray(coherence, dtype=np.float64)
    variance = sigma**2 + b_sigma * np.abs(coherence)
    if np.any(variance < 0):
        raise ConfigurationError(
            f"Noise variance sigma^2 + b_sigma * |coherence| must be >= 0 "
            f"(sigma={sigma}, b_sigma={b_sigma})"
        )
    return np.sqrt(variance)


def drift_noise(
    coherence: float | np.ndarray, theta: DecodedTheta
) -> tuple[np.ndarray, np.ndarray]:
    """Drift and noise for each coherence level from decoded parameters.

    Returns
    -------
        tuple[np.ndarray, np.ndarray]: (drift, noise), both shaped like coherence.
    """
    coherence = np.asarray(coherence, dtype=np.float64)
    if not np.all(np.isfinite(coherence)):
        raise ConfigurationError("Coherence values must be finite.")
    drift = coherence_drift(coherence, theta.kappa, theta.coh_bias, theta.u_bias)
    noise = coherence_noise(coherence, theta.sigma, theta.b_sigma)
    return drift, noise
