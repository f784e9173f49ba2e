from .config import (
    THETA_PARAMS,
    THETA_DEFAULTS,
    COARSE_DELTA_T,
    get_default_sim_options,
    update_sim_options,
    validate_sim_options,
)
from .boundary_registry import (
    BoundaryProfile,
    BoundaryRegistry,
    CallableBoundaryProfile,
    get_boundary_registry,
    register_boundary,
    resolve_boundary_profile,
)

__all__ = [
    "THETA_PARAMS",
    "THETA_DEFAULTS",
    "COARSE_DELTA_T",
    "get_default_sim_options",
    "update_sim_options",
    "validate_sim_options",
    "BoundaryProfile",
    "BoundaryRegistry",
    "CallableBoundaryProfile",
    "get_boundary_registry",
    "register_boundary",
    "resolve_boundary_profile",
]
