"""Achievable wrench polytopes and their spherical approximations.

Provides tools for:
- Building the H-representation A @ w <= b of the wrench set of a linear
  actuation model with bounded actuator forces
- Capacity-margin, Chebyshev-centre and max-radius sphere approximations
- A provisional Coriolis-adjusted margin
"""

from .actuation import ActuationModel
from .coriolis import sphere_approximation_coriolis
from .enumeration import (
    enumerate_wrench_vertices,
    force_combinations,
    iter_force_combinations,
)
from .errors import (
    ApproximationFailedError,
    DimensionMismatchError,
    EmptyPolytopeError,
    HullComputationError,
    InvalidBoundsError,
    InvalidHalfspaceError,
    TractabilityError,
    WrenchSetError,
)
from .hull import HullBackend, HullResult, QhullBackend
from .margins import BoundingSphere
from .polytope import (
    PolytopeBuilder,
    PolytopeBuildResult,
    PolytopeConfig,
    WrenchPolytope,
    build_wrench_polytope,
)
from .spheres import ApproximationConfig, SphereApproximator

__all__ = [
    "ActuationModel",
    "ApproximationConfig",
    "ApproximationFailedError",
    "BoundingSphere",
    "DimensionMismatchError",
    "EmptyPolytopeError",
    "HullBackend",
    "HullComputationError",
    "HullResult",
    "InvalidBoundsError",
    "InvalidHalfspaceError",
    "PolytopeBuilder",
    "PolytopeBuildResult",
    "PolytopeConfig",
    "QhullBackend",
    "SphereApproximator",
    "TractabilityError",
    "WrenchPolytope",
    "WrenchSetError",
    "build_wrench_polytope",
    "enumerate_wrench_vertices",
    "force_combinations",
    "iter_force_combinations",
    "sphere_approximation_coriolis",
]
