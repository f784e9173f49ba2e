"""Decode the flat theta vector into named model parameters."""

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass

import numpy as np

from mcdiffusion.config.config import THETA_PARAMS
from mcdiffusion.exceptions import ConfigurationError


@dataclass(frozen=True)
class DecodedTheta:
    """Named view on the nine model parameters.

    Attributes
    ----------
    kappa : float
        Drift sensitivity to coherence.
    coh_bias : float
        Offset added to coherence before scaling by kappa.
    u_bias : float
        Unconditional drift bias.
    sigma : float
        Base noise standard deviation (per sqrt(second)).
    b_sigma : float
        Coherence-dependent noise variance term.
    tnd_up, tnd_up_sd : float
        Mean and sd of the non-decision time for upper (rightward) choices.
    tnd_lower, tnd_lower_sd : float
        Mean and sd of the non-decision time for lower (leftward) choices.
    """

    kappa: float
    coh_bias: float
    u_bias: float
    sigma: float
    b_sigma: float
    tnd_up: float
    tnd_up_sd: float
    tnd_lower: float
    tnd_lower_sd: float

    def to_dict(self) -> dict:
        return asdict(self)

    def to_array(self) -> np.ndarray:
        return np.array([getattr(self, p) for p in THETA_PARAMS], dtype=np.float64)


def decode_theta(theta: Sequence[float] | np.ndarray | Mapping[str, float]) -> DecodedTheta:
    """Unpack theta into a DecodedTheta.

    Parameters
    ----------
    theta : sequence, np.ndarray or mapping
        Either the nine values in the order
        [kappa, coh_bias, u_bias, sigma, b_sigma,
        tnd_up, tnd_up_sd, tnd_lower, tnd_lower_sd],
        or a mapping with these keys.

    Returns
    -------
    DecodedTheta

    Raises
    ------
    ConfigurationError
        If theta does not have exactly nine entries, or a key is missing.
    """
    if isinstance(theta, Mapping):
        missing = [p for p in THETA_PARAMS if p not in theta]
        if missing:
            raise ConfigurationError(f"theta is missing parameter(s): {missing}")
        return DecodedTheta(**{p: float(theta[p]) for p in THETA_PARAMS})

    values = np.asarray(theta, dtype=np.float64).ravel()
    if values.size != len(THETA_PARAMS):
        raise ConfigurationError(
            f"theta must have {len(THETA_PARAMS)} entries "
            f"({', '.join(THETA_PARAMS)}), got {values.size}"
        )
    return DecodedTheta(*(float(v) for v in values))
