"""Define a collection of boundary profiles for the simulators in the package.

Every profile takes the time grid ``t`` as first argument and the initial
boundary height ``a`` as second argument, and returns the (positive) boundary
height at each time point. The lower boundary uses the same convention and is
negated by the simulator.
"""

# External
from collections.abc import Callable

import numpy as np
from scipy.stats import gamma  # type: ignore

# Collection of boundary functions


# Constant boundary
def constant(t: float | np.ndarray = 0, a: float = 1.0) -> float | np.ndarray:
    """Constant boundary function.

    Arguments
    ---------
        t (float or np.ndarray, optional): Time point(s). Defaults to 0.
        a (float, optional): Boundary height. Defaults to 1.0.

    Returns
    -------
        float or np.ndarray: Constant boundary value = a (scalar if t is scalar, array if t is array)
    """
    if isinstance(t, np.ndarray):
        return np.full(t.shape, a, dtype=np.float64)
    return a


# Angle boundary with linear collapse
def angle(
    t: float | np.ndarray = 1, a: float = 1.0, theta: float = 1.0
) -> np.ndarray | float:
    """Linear collapsing boundary at angle theta.

    Arguments
    ---------
        t (float or np.ndarray, optional): Time point(s). Defaults to 1.
        a (float, optional): Starting height. Defaults to 1.0.
        theta (float, optional): Collapse angle in radians. Defaults to 1.0.

    Returns
    -------
        np.ndarray or float: Boundary value = a - t * tan(theta)
    """
    return a + np.multiply(t, (-np.sin(theta) / np.cos(theta)))


# Exponential decay boundary
def exponential(
    t: float | np.ndarray = 1, a: float = 1.0, rate: float = 1.0
) -> np.ndarray | float:
    """Exponentially collapsing boundary.

    Arguments
    ---------
        t (float or np.ndarray, optional): Time point(s). Defaults to 1.
        a (float, optional): Starting height. Defaults to 1.0.
        rate (float, optional): Decay rate in 1/s. Defaults to 1.0.

    Returns
    -------
        np.ndarray or float: Boundary value = a * exp(-rate * t)
    """
    return a * np.exp(-rate * np.asarray(t, dtype=np.float64))


# Generalized logistic boundary
def generalized_logistic(
    t: float | np.ndarray = 1,
    a: float = 1.0,
    B: float = 2.0,  # noqa: N803
    M: float = 3.0,  # noqa: N803
    v: float = 0.5,  # noqa: N803
) -> np.ndarray | float:
    """Generalized logistic boundary function.

    Arguments
    ---------
        t (float or np.ndarray, optional): Time point(s). Defaults to 1.
        a (float, optional): Boundary height before the collapse. Defaults to 1.0.
        B (float, optional): Growth rate. Defaults to 2.0.
        M (float, optional): Time of maximum growth. Defaults to 3.0.
        v (float, optional): Affects near which asymptote maximum growth occurs.
        Defaults to 0.5.

    Returns
    -------
        np.ndarray or float: Boundary value = a + logistic_decay(t)
    """
    offset = 1 - (1 / np.power(1 + np.exp(-B * (t - M)), 1 / v))
    return a + offset


# Weibull decay boundary
def weibull_cdf(
    t: float | np.ndarray = 1,
    a: float = 1.0,
    alpha: float = 1.0,
    beta: float = 1.0,
) -> np.ndarray | float:
    """Weibull decay boundary function.

    Arguments
    ---------
        t (float or np.ndarray, optional): Time point(s). Defaults to 1.
        a (float, optional): Starting height. Defaults to 1.0.
        alpha (float, optional): Shape parameter. Defaults to 1.0.
        beta (float, optional): Scale parameter. Defaults to 1.0.

    Returns
    -------
        np.ndarray or float: Boundary value = a * exp(-(t/beta)^alpha)
    """
    return a * np.exp(-np.power(np.divide(t, beta), alpha))


def gamma_cdf(
    t: float | np.ndarray = 1,
    a: float = 1.0,
    shape: float = 2.0,
    scale: float = 0.5,
) -> np.ndarray | float:
    """Boundary that collapses following the survival function of a gamma.

    Arguments
    ---------
        t: (float, np.ndarray)
            Time points in seconds at which to evaluate the bound.
        a: float
            Starting height. Defaults to 1.0.
        shape: float
            Shape parameter of the gamma distribution. Defaults to 2.0.
        scale: float
            Scale parameter of the gamma distribution (seconds). Defaults to 0.5.

    Returns
    -------
        np.ndarray or float: Boundary value = a * (1 - GammaCDF(t))
    """
    return a * gamma.sf(t, a=shape, loc=0, scale=scale)


# Define Type alias for boundary functions
BoundaryFunction = Callable[..., float | np.ndarray]

constant: BoundaryFunction = constant  # noqa: PLW0127
angle: BoundaryFunction = angle  # noqa: PLW0127
exponential: BoundaryFunction = exponential  # noqa: PLW0127
generalized_logistic: BoundaryFunction = generalized_logistic  # noqa: PLW0127
weibull_cdf: BoundaryFunction = weibull_cdf  # noqa: PLW0127
gamma_cdf: BoundaryFunction = gamma_cdf  # noqa: PLW0127

boundary_config = {
    "constant": {"fun": constant, "params": ["a"]},
    "angle": {"fun": angle, "params": ["a", "theta"]},
    "exponential": {"fun": exponential, "params": ["a", "rate"]},
    "weibull_cdf": {"fun": weibull_cdf, "params": ["a", "alpha", "beta"]},
    "generalized_logistic": {
        "fun": generalized_logistic,
        "params": ["a", "B", "M", "v"],
    },
    "gamma_cdf": {"fun": gamma_cdf, "params": ["a", "shape", "scale"]},
}
