"""Exception types raised by wrench set construction and approximation."""


class WrenchSetError(Exception):
    """Base class for all wrench set errors."""


class DimensionMismatchError(WrenchSetError, ValueError):
    """Structure matrix, force bounds and offset have inconsistent shapes."""


class InvalidBoundsError(WrenchSetError, ValueError):
    """A lower force bound exceeds its upper bound."""


class TractabilityError(WrenchSetError, ValueError):
    """Too many actuators to enumerate all 2^m bound combinations."""


class HullComputationError(WrenchSetError, RuntimeError):
    """The convex hull backend could not process the vertex cloud."""


class EmptyPolytopeError(WrenchSetError, ValueError):
    """A sphere approximation was requested on a polytope with no half-spaces."""


class ApproximationFailedError(WrenchSetError, RuntimeError):
    """The optimizer did not converge or the problem is infeasible."""


class InvalidHalfspaceError(WrenchSetError, ValueError):
    """A half-space row has a zero normal or a non-finite entry."""
