__version__ = "0.1.0"

from .basic_simulators import Simulator, SimulationResult
from .basic_simulators.simulator import simulator
from .config import get_default_sim_options, update_sim_options
from .exceptions import ConfigurationError, PrecisionWarning

__all__ = [
    "basic_simulators",
    "config",
    "Simulator",
    "SimulationResult",
    "simulator",
    "get_default_sim_options",
    "update_sim_options",
    "ConfigurationError",
    "PrecisionWarning",
]
