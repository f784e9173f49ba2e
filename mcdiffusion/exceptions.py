"""Exceptions and warnings raised by the simulators in the package."""


class ConfigurationError(ValueError):
    """Raised when simulation options are missing or malformed.

    All configuration checks run before the first random draw, so a raised
    ConfigurationError never leaves partial results behind.
    """


class PrecisionWarning(UserWarning):
    """Issued when the time step is too coarse for an accurate first passage."""
