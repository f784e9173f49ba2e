from . import boundary_functions
from . import drift_functions
from . import theta_processor
from . import results
from . import simulator
from .simulator_class import Simulator
from .results import SimulationResult

__all__ = [
    "boundary_functions",
    "drift_functions",
    "theta_processor",
    "results",
    "simulator",
    "Simulator",
    "SimulationResult",
]
