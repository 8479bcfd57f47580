"""Coriolis-adjusted capacity margin (provisional).

The intended geometric adjustment is not settled: when the ray from G to
the nearest point of a facet moves the second wrench coordinate against
the sign of sin(q2), the margin is replaced by the horizontal distance from
G to that facet's hyperplane at the reference height G[1]. This module
implements that closed form as-is and keeps it apart from the stable
approximations in wrench_set.spheres until the semantics are confirmed.

Only the first two wrench coordinates take part in the adjustment.
"""

import logging

import numpy as np

from .errors import DimensionMismatchError, EmptyPolytopeError
from .margins import BoundingSphere, capacity_margins, facet_norms
from .polytope import WrenchPolytope

logger = logging.getLogger(__name__)


def coriolis_margins(
    A: np.ndarray,
    b: np.ndarray,
    G: np.ndarray,
    q2: float,
    coefficient_tol: float = 1e-12,
) -> np.ndarray:
    """Per-facet direction-aware margins.

    Args:
        A: Half-space normals (k, n), n >= 2.
        b: Half-space offsets (k,).
        G: Reference wrench (n,).
        q2: Joint angle whose sin sign selects the allowed direction.
        coefficient_tol: |A[j, 0]| at or below this gives an inf margin.

    Returns:
        Margins (k,). inf marks facets that never bind in the horizontal
        direction.
    """
    s = capacity_margins(A, b, G)
    norms = facet_norms(A)
    t = np.sign(np.sin(q2))

    for j in range(len(b)):
        p = G + s[j] * A[j] / norms[j]
        if t * (p[1] - G[1]) >= 0:
            continue
        # Boundary ray crosses the reference height the wrong way:
        # intersect the hyperplane with the line w[1] = G[1] instead.
        if abs(A[j, 0]) <= coefficient_tol:
            s[j] = np.inf
            continue
        pd = (b[j] - A[j, 1] * G[1]) / A[j, 0]
        s[j] = abs(pd - G[0]) if np.isfinite(pd) else np.inf

    return s


def sphere_approximation_coriolis(
    polytope: WrenchPolytope,
    G: np.ndarray,
    q2: float,
    coefficient_tol: float = 1e-12,
) -> BoundingSphere:
    """Capacity-margin sphere at G with the provisional Coriolis adjustment.

    Raises:
        EmptyPolytopeError: The polytope has no half-spaces.
        DimensionMismatchError: G does not match the polytope dimension or
            the dimension is below 2.
    """
    if polytope.is_empty:
        raise EmptyPolytopeError("no feasible half-spaces")
    if polytope.n_dofs < 2:
        raise DimensionMismatchError(
            "Coriolis-adjusted margin needs a wrench dimension of at least 2"
        )
    G = np.asarray(G, dtype=np.float64).ravel()
    if G.shape != (polytope.n_dofs,):
        raise DimensionMismatchError(
            f"G has {G.size} entries, polytope dimension is {polytope.n_dofs}"
        )

    logger.debug("Provisional Coriolis-adjusted margin at q2=%.4f", q2)
    A = np.asarray(polytope.A, dtype=np.float64)
    b = np.asarray(polytope.b, dtype=np.float64)
    s = coriolis_margins(A, b, G, q2, coefficient_tol)
    return BoundingSphere(center=G, radius=float(np.min(s)))
