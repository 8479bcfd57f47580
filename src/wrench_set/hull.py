"""Convex hull computation behind a narrow backend interface.

A backend takes a point cloud (N, n) and returns the facet-to-vertex index
table and the hull volume, raising HullComputationError when the cloud is
degenerate (coincident, lower-dimensional or too few points).
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np
from scipy.spatial import ConvexHull

from .errors import HullComputationError


@dataclass(frozen=True, eq=False)
class HullResult:
    """Facet table and volume of a convex hull.

    Attributes:
        simplices: Facet-to-vertex index table (n_facets, n). Row i lists
            the indices of the points spanning facet i.
        volume: Hull volume (area for n=2).
    """

    simplices: np.ndarray
    volume: float

    @property
    def n_facets(self) -> int:
        return self.simplices.shape[0]


class HullBackend(Protocol):
    """Anything able to compute a facet table for a point cloud.

    compute should raise HullComputationError on a degenerate cloud. The
    builder also treats a plain RuntimeError or ValueError (for example
    scipy's QhullError) as a failed hull.
    """

    def compute(self, points: np.ndarray) -> HullResult:
        ...


class QhullBackend:
    """Hull backend using scipy.spatial.ConvexHull (Qhull).

    Qhull triangulates non-simplicial facets, so a square face of a 3-D box
    shows up as two facets with the same supporting hyperplane.
    """

    def __init__(self, qhull_options: Optional[str] = None):
        self.qhull_options = qhull_options

    def compute(self, points: np.ndarray) -> HullResult:
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] < 2:
            raise HullComputationError(
                f"Qhull needs points of dimension >= 2, got shape {points.shape}"
            )
        if points.shape[0] <= points.shape[1]:
            raise HullComputationError(
                f"{points.shape[0]} points cannot span a "
                f"{points.shape[1]}-dimensional hull"
            )
        try:
            hull = ConvexHull(points, qhull_options=self.qhull_options)
        except (RuntimeError, ValueError) as e:
            # QhullError derives from RuntimeError
            raise HullComputationError(f"Qhull failed: {e}") from e

        return HullResult(
            simplices=np.asarray(hull.simplices, dtype=np.int64),
            volume=float(hull.volume),
        )
