"""Spherical approximations of a wrench polytope.

All approximations work on the H-representation A @ w <= b of a built
WrenchPolytope:

- capacity: largest sphere centred at a given point (closed form)
- chebyshev: largest inscribed sphere over all centres (linear program)
- max_radius: largest inscribed sphere that also contains a reference
  point with a buffer (SLSQP)
- coriolis: provisional direction-aware margin, see wrench_set.coriolis

Inequality constraints follow the scipy.optimize convention: c(z) >= 0
means feasible, with z = [center, radius].
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.optimize import linprog, minimize

from .coriolis import sphere_approximation_coriolis
from .errors import (
    ApproximationFailedError,
    DimensionMismatchError,
    EmptyPolytopeError,
)
from .margins import BoundingSphere, capacity_margins, facet_norms
from .polytope import WrenchPolytope

logger = logging.getLogger(__name__)


@dataclass
class ApproximationConfig:
    """Configuration for sphere approximations.

    Attributes:
        lp_method: scipy.optimize.linprog method for the Chebyshev centre.
        nlp_method: scipy.optimize.minimize method for max_radius.
        max_iter: Maximum iterations of the nonlinear solver.
        ftol: Function tolerance of the nonlinear solver.
        feasibility_tol: Allowed constraint violation of a returned solution.
        coefficient_tol: Coefficients below this magnitude count as zero in
            the Coriolis-adjusted margin.
    """

    lp_method: str = "highs"
    nlp_method: str = "SLSQP"
    max_iter: int = 200
    ftol: float = 1e-9
    feasibility_tol: float = 1e-6
    coefficient_tol: float = 1e-12


def min_radius_cost(z: np.ndarray) -> float:
    """Objective of max_radius: negative radius of z = [center, radius]."""
    return -float(z[-1])


def _min_radius_grad(z: np.ndarray) -> np.ndarray:
    grad = np.zeros_like(z)
    grad[-1] = -1.0
    return grad


def point_contained_margin(
    z: np.ndarray,
    x_ref: np.ndarray,
    buffer: float,
) -> np.ndarray:
    """Containment of x_ref in the sphere z = [center, radius], >= 0 if feasible.

    ||center - x_ref|| + buffer <= radius is written as
    radius - buffer >= 0 and (radius - buffer)^2 - ||center - x_ref||^2 >= 0
    so both components stay differentiable at center == x_ref.
    """
    c, r = z[:-1], z[-1]
    d = c - x_ref
    slack = r - buffer
    return np.array([slack, slack**2 - float(d @ d)])


def _point_contained_jac(
    z: np.ndarray,
    x_ref: np.ndarray,
    buffer: float,
) -> np.ndarray:
    c, r = z[:-1], z[-1]
    jac = np.zeros((2, z.size))
    jac[0, -1] = 1.0
    jac[1, :-1] = -2.0 * (c - x_ref)
    jac[1, -1] = 2.0 * (r - buffer)
    return jac


class SphereApproximator:
    """Computes bounding spheres of a built wrench polytope.

    Usage:
        approximator = SphereApproximator(polytope)
        margin = approximator.capacity(np.zeros(polytope.n_dofs))
        inscribed = approximator.chebyshev()
    """

    def __init__(
        self,
        polytope: WrenchPolytope,
        config: Optional[ApproximationConfig] = None,
    ):
        self.polytope = polytope
        self.config = config if config is not None else ApproximationConfig()

    def _halfspaces(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return (A, b, row norms), raising on an empty polytope."""
        if self.polytope.is_empty:
            raise EmptyPolytopeError("no feasible half-spaces")
        A = np.asarray(self.polytope.A, dtype=np.float64)
        b = np.asarray(self.polytope.b, dtype=np.float64)
        return A, b, facet_norms(A)

    def _as_point(self, x: np.ndarray, name: str) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64).ravel()
        if x.shape != (self.polytope.n_dofs,):
            raise DimensionMismatchError(
                f"{name} has {x.size} entries, polytope dimension is "
                f"{self.polytope.n_dofs}"
            )
        return x

    def capacity(self, G: np.ndarray) -> BoundingSphere:
        """Capacity-margin sphere: distance from G to the nearest facet.

        Args:
            G: Reference wrench (n,).

        Returns:
            Sphere centred at G. Negative radius if G lies outside.
        """
        A, b, _ = self._halfspaces()
        G = self._as_point(G, "G")
        s = capacity_margins(A, b, G)
        return BoundingSphere(center=G, radius=float(np.min(s)))

    def chebyshev(self) -> BoundingSphere:
        """Largest sphere inscribed in the polytope (Chebyshev centre).

        Solves max r s.t. A_i . o + ||A_i|| r <= b_i over (o, r).

        Raises:
            ApproximationFailedError: The linear program is infeasible,
                unbounded or did not converge.
        """
        A, b, norms = self._halfspaces()
        n = A.shape[1]

        c = np.zeros(n + 1)
        c[-1] = -1.0
        A_ub = np.hstack([A, norms[:, None]])

        result = linprog(
            c,
            A_ub=A_ub,
            b_ub=b,
            bounds=[(None, None)] * (n + 1),
            method=self.config.lp_method,
        )
        if not result.success:
            raise ApproximationFailedError(
                f"Chebyshev centre LP failed (status {result.status}): "
                f"{result.message}"
            )

        logger.debug(
            "Chebyshev centre %s, radius %.6g", result.x[:n], result.x[n],
        )
        return BoundingSphere(center=result.x[:n], radius=result.x[n])

    def max_radius(
        self,
        x_ref: np.ndarray,
        buffer: float = 0.0,
    ) -> BoundingSphere:
        """Largest inscribed sphere that contains x_ref with a buffer.

        Maximizes r over (center, r) subject to the sphere lying inside every
        half-space and ||center - x_ref|| + buffer <= r. The initial guess
        is the origin.

        Args:
            x_ref: Reference wrench to contain (n,).
            buffer: Extra clearance between x_ref and the sphere surface.

        Raises:
            ApproximationFailedError: Non-convergence or infeasibility.
        """
        A, b, norms = self._halfspaces()
        x_ref = self._as_point(x_ref, "x_ref")
        n = A.shape[1]

        A_ub = np.hstack([A, norms[:, None]])
        constraints = [
            {
                "type": "ineq",
                "fun": lambda z: b - A_ub @ z,
                "jac": lambda z: -A_ub,
            },
            {
                "type": "ineq",
                "fun": point_contained_margin,
                "jac": _point_contained_jac,
                "args": (x_ref, buffer),
            },
        ]

        result = minimize(
            min_radius_cost,
            np.zeros(n + 1),
            jac=_min_radius_grad,
            method=self.config.nlp_method,
            constraints=constraints,
            options={
                "maxiter": self.config.max_iter,
                "ftol": self.config.ftol,
                "disp": False,
            },
        )
        if not result.success:
            raise ApproximationFailedError(
                f"Max-radius sphere did not converge: {result.message}"
            )

        z = result.x
        violation = min(
            float(np.min(b - A_ub @ z)),
            float(z[-1] - buffer - np.linalg.norm(z[:-1] - x_ref)),
        )
        if violation < -self.config.feasibility_tol:
            raise ApproximationFailedError(
                f"Max-radius sphere infeasible: constraint violated by "
                f"{-violation:.3g}"
            )

        logger.debug(
            "Max-radius sphere centre %s, radius %.6g (%d iterations)",
            z[:-1], z[-1], result.nit,
        )
        return BoundingSphere(center=z[:-1], radius=z[-1])

    def coriolis(self, G: np.ndarray, q2: float) -> BoundingSphere:
        """Provisional Coriolis-adjusted margin. See wrench_set.coriolis."""
        return sphere_approximation_coriolis(
            self.polytope, G, q2, self.config.coefficient_tol,
        )
