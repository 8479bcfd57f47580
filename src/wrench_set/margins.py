"""Sphere value object and facet distance helpers shared by approximations."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class BoundingSphere:
    """Sphere approximating a wrench polytope.

    A radius <= 0 means no enclosed sphere exists at this centre; inf is
    kept as returned when no facet bounds the margin.
    """

    center: np.ndarray
    radius: float

    def __post_init__(self) -> None:
        center = np.array(self.center, dtype=np.float64).ravel()
        center.setflags(write=False)
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "radius", float(self.radius))

    @property
    def is_feasible(self) -> bool:
        return self.radius > 0

    @property
    def is_unbounded(self) -> bool:
        return bool(np.isinf(self.radius))


def facet_norms(A: np.ndarray) -> np.ndarray:
    """Euclidean norm of every half-space normal (k,)."""
    return np.linalg.norm(A, axis=1)


def capacity_margins(A: np.ndarray, b: np.ndarray, G: np.ndarray) -> np.ndarray:
    """Signed distance from G to every bounding hyperplane.

    Positive entries mean G lies inside that half-space.
    """
    return (b - A @ G) / facet_norms(A)

