"""Linear actuation model mapping actuator forces to wrenches.

The model is defined as:

    w = As @ f + offset,    F_l <= f <= F_u

where As is the (n, m) structure matrix, n the wrench dimension and m the
number of actuators.
"""

from dataclasses import dataclass

import numpy as np

from .errors import DimensionMismatchError, InvalidBoundsError


@dataclass(frozen=True, eq=False)
class ActuationModel:
    """Structure matrix, force bounds and wrench offset.

    Attributes:
        As: Structure matrix (n, m).
        F_u: Upper actuator force bounds (m,).
        F_l: Lower actuator force bounds (m,).
        offset: Additive wrench offset (n,). Defaults to zeros.
    """

    As: np.ndarray
    F_u: np.ndarray
    F_l: np.ndarray
    offset: np.ndarray | None = None

    def __post_init__(self) -> None:
        As = np.atleast_2d(np.asarray(self.As, dtype=np.float64))
        if np.asarray(self.As).ndim > 2:
            raise DimensionMismatchError(
                f"Structure matrix must be 2-D, got shape {np.shape(self.As)}"
            )
        n, m = As.shape

        F_u = np.asarray(self.F_u, dtype=np.float64).ravel()
        F_l = np.asarray(self.F_l, dtype=np.float64).ravel()
        if F_u.shape != (m,):
            raise DimensionMismatchError(
                f"F_u has {F_u.size} entries, structure matrix has {m} columns"
            )
        if F_l.shape != (m,):
            raise DimensionMismatchError(
                f"F_l has {F_l.size} entries, structure matrix has {m} columns"
            )

        if self.offset is None:
            offset = np.zeros(n)
        else:
            offset = np.asarray(self.offset, dtype=np.float64).ravel()
        if offset.shape != (n,):
            raise DimensionMismatchError(
                f"offset has {offset.size} entries, structure matrix has {n} rows"
            )

        bad = np.flatnonzero(F_l > F_u)
        if bad.size:
            raise InvalidBoundsError(
                f"F_l > F_u for actuator(s) {bad.tolist()}"
            )

        # Frozen dataclass: normalised arrays are written through object.__setattr__
        object.__setattr__(self, "As", As)
        object.__setattr__(self, "F_u", F_u)
        object.__setattr__(self, "F_l", F_l)
        object.__setattr__(self, "offset", offset)

    @classmethod
    def from_jacobian(
        cls,
        L: np.ndarray,
        f_u: np.ndarray,
        f_l: np.ndarray,
        offset: np.ndarray | None = None,
    ) -> "ActuationModel":
        """Create a model from a cable Jacobian, w = -L^T f.

        Args:
            L: Cable length Jacobian (m, n).
            f_u: Upper cable force bounds (m,).
            f_l: Lower cable force bounds (m,).
            offset: Additive wrench offset (n,).

        Returns:
            ActuationModel with As = -L^T.
        """
        L = np.atleast_2d(np.asarray(L, dtype=np.float64))
        return cls(As=-L.T, F_u=f_u, F_l=f_l, offset=offset)

    @property
    def n_dofs(self) -> int:
        """Wrench dimension n."""
        return self.As.shape[0]

    @property
    def n_actuators(self) -> int:
        """Number of actuators m."""
        return self.As.shape[1]

    def wrench(self, f: np.ndarray) -> np.ndarray:
        """Map actuator force vector(s) to wrench space.

        Args:
            f: Force vector (m,) or stacked forces (N, m).

        Returns:
            Wrench (n,) or stacked wrenches (N, n).
        """
        f = np.asarray(f, dtype=np.float64)
        return f @ self.As.T + self.offset
